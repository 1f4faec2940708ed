"""Utility helpers for output directories and file naming."""

from .io import ensure_dirs, safe_filename

__all__ = ["ensure_dirs", "safe_filename"]
