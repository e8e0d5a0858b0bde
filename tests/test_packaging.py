"""
Test suite for package metadata and the public API.

Tests cover:
- Every exported name resolves
- The project readme points at the user-facing README
"""

import re
from pathlib import Path

import hextergen

ROOT = Path(__file__).resolve().parent.parent


class TestPublicApi:
    """Test the names exported by hextergen."""

    def test_all_names_resolve(self):
        for name in hextergen.__all__:
            assert getattr(hextergen, name) is not None

    def test_generator_exported(self):
        assert "HexWorldGenerator" in hextergen.__all__


class TestProjectMetadata:
    """Test pyproject.toml metadata."""

    def test_readme_is_user_facing(self):
        text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        match = re.search(r'^readme\s*=\s*"([^"]+)"', text, re.MULTILINE)
        assert match is not None
        assert match.group(1) == "README.md"
        readme = (ROOT / match.group(1)).read_text(encoding="utf-8")
        assert "generate_world.py" in readme
