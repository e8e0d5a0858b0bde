# hextergen/exceptions.py

"""Errors raised by the hex world pipeline."""


class HextergenError(Exception):
    """Base class for every error raised by hextergen."""


class OutOfBounds(HextergenError, ValueError):
    """A coordinate outside [0, width) x [0, height) was passed in."""

    def __init__(self, coord, width: int, height: int):
        self.coord = coord
        self.width = width
        self.height = height
        super().__init__(f"{tuple(coord)} out of bounds for {width}x{height} hex grid")


class SeedPlacementExhausted(HextergenError, RuntimeError):
    """Rejection sampling ran out of attempts before placing every seed.

    Recoverable: retry with a smaller spacing or fewer plates.
    """

    def __init__(self, requested: int, placed: int, min_distance: float, attempts: int):
        self.requested = requested
        self.placed = placed
        self.min_distance = min_distance
        self.attempts = attempts
        super().__init__(
            f"Placed only {placed}/{requested} seeds at minimum distance "
            f"{min_distance} after {attempts} attempts"
        )


class NoSeeds(HextergenError, ValueError):
    """Plate growth or seed placement was asked for zero plates."""


class UnreachableSeed(HextergenError, LookupError):
    """A border hex cannot reach its plate seed without leaving the plate."""

    def __init__(self, plate_id: int, start, seed):
        self.plate_id = plate_id
        self.start = start
        self.seed = seed
        super().__init__(f"Plate {plate_id}: no path from {tuple(start)} to seed {tuple(seed)}")


class ElevationDiverged(HextergenError, ArithmeticError):
    """Elevation shaping produced non-finite values."""
