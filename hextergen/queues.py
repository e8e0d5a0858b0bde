# hextergen/queues.py

"""First-in random-out queue used to grow plates organically."""

import numpy as np


class FIROQueue:
    """
    Insertion appends; removal takes a uniformly random element from the
    current contents by swapping it with the last slot and popping.
    """

    def __init__(self, rng: np.random.Generator):
        self._items = []
        self._rng = rng

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def enqueue(self, item) -> None:
        self._items.append(item)

    def dequeue(self):
        if not self._items:
            raise IndexError("dequeue from an empty FIRO queue")
        last = len(self._items) - 1
        index = int(self._rng.integers(0, last + 1))
        self._items[index], self._items[last] = self._items[last], self._items[index]
        return self._items.pop()
