"""Exceptions raised by dropzarr."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePath

__all__ = [
    "DropZarrError",
    "InvalidMultiscalesError",
    "MultiscalesError",
    "NotADescendantError",
    "UnsupportedVersionError",
]


class DropZarrError(Exception):
    """Base class for all dropzarr errors."""


class MultiscalesError(DropZarrError, ValueError):
    """Raised when an attributes document cannot be turned into a Multiscales."""


class InvalidMultiscalesError(MultiscalesError):
    """The document is malformed or is missing a required field."""


class UnsupportedVersionError(MultiscalesError):
    """The document declares an OME-NGFF version dropzarr cannot parse."""

    def __init__(self, version: str, supported: Iterable[str]) -> None:
        self.version = version
        self.supported = tuple(supported)
        super().__init__(
            f"OME-NGFF version {version!r} is not yet supported. "
            f"Supported versions: {', '.join(self.supported)}"
        )


class NotADescendantError(DropZarrError, ValueError):
    """A path was expected to be nested under another one, but is not."""

    def __init__(self, ancestor: PurePath, descendant: PurePath) -> None:
        self.ancestor = ancestor
        self.descendant = descendant
        super().__init__(f"Path {descendant} is not a descendant of {ancestor}")
