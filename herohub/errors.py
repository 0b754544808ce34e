# -*- coding: utf-8 -*-

"""
Error taxonomy for the catalog.

Only fatal conditions are exceptions. Lookup misses (dangling references,
unknown series ids, deep links to filtered-out characters) are absorbed by
the components that encounter them and never raised.
"""

from typing import Optional


class StructuralError(ValueError):
    """The character document is malformed; no index is built from it."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class LoadError(RuntimeError):
    """The character document could not be fetched or parsed."""


class MediaUnavailable(RuntimeError):
    """The video document could not be loaded. Browsing continues without it."""
