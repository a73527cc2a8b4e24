"""
Centralized version management for the Liquid wallet CLI.

This is the single source of truth for the project version.
"""

from __future__ import annotations

# Format: MAJOR.MINOR.PATCH (Semantic Versioning)
__version__ = "0.1.0"


def get_version() -> str:
    """Return the current version string."""
    return __version__
