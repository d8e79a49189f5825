# src/__init__.py — v1
"""embedlrmi — cached LRMI JSON-LD metadata for wiki pages."""

from embedlrmi.version import __version__

__all__ = ["__version__"]
