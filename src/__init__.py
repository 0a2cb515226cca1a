# src/__init__.py - v1
"""medsite: medical practice website generator."""

from medsite.version import __version__

__all__ = ["__version__"]
