"""
Dirty rectangle tracking for minimal redraws.

A DirtyRegion is the inclusive bounding box of pixels changed since the last
flush. "Clean" is represented by None, which is the identity for merging.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class DirtyRegion:
    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def at(cls, x: int, y: int) -> "DirtyRegion":
        return cls(x, y, x, y)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def include(self, x: int, y: int) -> "DirtyRegion":
        """Smallest region containing this one and the pixel (x, y)."""
        return DirtyRegion(
            min(self.left, x),
            min(self.top, y),
            max(self.right, x),
            max(self.bottom, y),
        )


def merge_dirty_regions(a: Optional[DirtyRegion], b: Optional[DirtyRegion]) -> Optional[DirtyRegion]:
    if a is None:
        return b
    if b is None:
        return a
    return DirtyRegion(
        left=min(a.left, b.left),
        top=min(a.top, b.top),
        right=max(a.right, b.right),
        bottom=max(a.bottom, b.bottom),
    )


def merge_all(regions: Iterable[Optional[DirtyRegion]]) -> Optional[DirtyRegion]:
    merged: Optional[DirtyRegion] = None
    for region in regions:
        merged = merge_dirty_regions(merged, region)
    return merged
