"""
Incrementally maintained color histogram.

ColorHistogram maps each color present in a grid to its strictly positive
pixel count. Entries are dropped as soon as their count reaches zero.
"""

from typing import Dict, Iterable, Tuple

from PX_Libs.ImageEditingLib.image_models import Color


class ColorHistogram:
    def __init__(self, colors: Iterable[Color] = ()) -> None:
        self._counts: Dict[Color, int] = {}
        for color in colors:
            self.increment(color)

    @classmethod
    def from_counts(cls, counts: Iterable[Tuple[Color, int]]) -> "ColorHistogram":
        histogram = cls()
        for color, amount in counts:
            if amount > 0:
                histogram._counts[color] = histogram._counts.get(color, 0) + int(amount)
        return histogram

    def increment(self, color: Color) -> None:
        self._counts[color] = self._counts.get(color, 0) + 1

    def decrement(self, color: Color) -> None:
        remaining = self._counts.get(color, 0) - 1
        if remaining <= 0:
            self._counts.pop(color, None)
        else:
            self._counts[color] = remaining

    def count(self, color: Color) -> int:
        return self._counts.get(color, 0)

    def distinct_colors(self) -> int:
        return len(self._counts)

    def total(self) -> int:
        return sum(self._counts.values())

    def snapshot(self) -> Dict[Color, int]:
        """Copy of the color-to-count mapping."""
        return dict(self._counts)

    def __contains__(self, color: object) -> bool:
        return color in self._counts

    def __len__(self) -> int:
        return len(self._counts)
