"""Axis-ordered sequences that know which convention they follow.

OME-NGFF metadata lists axes slowest-varying first (``t, c, z, y, x``), while
in-memory array views iterate fastest-varying first (``x, y, z, c, t``).
Per-axis values (scale factors, offsets, the axes themselves) are carried in one
of the two types below, and the only way from one to the other is an explicit
conversion that reverses the order.
"""

from __future__ import annotations

__all__ = ["InMemoryOrder", "OnDiskOrder"]


class OnDiskOrder(tuple):
    """Per-axis values in NGFF metadata order (slowest-varying axis first)."""

    __slots__ = ()

    def to_in_memory(self) -> InMemoryOrder:
        return InMemoryOrder(reversed(self))

    def index_in_memory(self, index: int) -> int:
        """Return the in-memory position of the on-disk position `index`."""
        if not -len(self) <= index < len(self):
            raise IndexError(f"axis index {index} out of range for {len(self)} axes")
        return len(self) - 1 - (index % len(self))

    def __repr__(self) -> str:
        return f"OnDiskOrder({tuple(self)!r})"


class InMemoryOrder(tuple):
    """Per-axis values in array-view order (fastest-varying axis first)."""

    __slots__ = ()

    def to_on_disk(self) -> OnDiskOrder:
        return OnDiskOrder(reversed(self))

    def __repr__(self) -> str:
        return f"InMemoryOrder({tuple(self)!r})"
