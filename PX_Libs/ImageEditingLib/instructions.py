"""
Assembly instructions for a pixel-art mural.

Instructions are derived from a row-major pixel snapshot: a lettered color
legend with per-color counts, the physical size of the mural, a time estimate,
and the user's progress as crossed-out colors, rows and columns.

Classes:
    LegendEntry: One color of the legend
    Instructions: Legend, sizing and progress tracking for one grid
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Sequence, Set, Tuple

from PX_Libs.constants import DARK_TEXT_CLASS, FIRST_INDEX_LETTER, LIGHT_TEXT_CLASS
from PX_Libs.ImageEditingLib.color_codec import hex_to_rgb, is_light_color
from PX_Libs.ImageEditingLib.image_models import Color
from PX_Libs.ImageEditingLib.preprocess import real_size_mm


@dataclass(frozen=True)
class LegendEntry:
    color: Color
    index: str
    count: int


@dataclass
class Instructions:
    """
    Instructions for assembling the grid described by `pixels`.

    Args:
        pixels: Row-major color snapshot, e.g. PixelEditor.pixels()
        crossed_colors: Colors the user has finished
        crossed_rows: Row indices the user has finished
        crossed_columns: Column indices the user has finished
    """

    pixels: Sequence[Sequence[Color]]
    crossed_colors: Set[Color] = field(default_factory=set)
    crossed_rows: Set[int] = field(default_factory=set)
    crossed_columns: Set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self._indices: Dict[Color, str] = {}
        self._counts: Dict[Color, int] = {}
        for row in self.pixels:
            for color in row:
                self.index_of(color)
                self._counts[color] = self._counts.get(color, 0) + 1

    @property
    def width(self) -> int:
        return len(self.pixels[0]) if self.pixels else 0

    @property
    def height(self) -> int:
        return len(self.pixels)

    @property
    def total_width_mm(self) -> float:
        return real_size_mm(self.width)

    @property
    def total_height_mm(self) -> float:
        return real_size_mm(self.height)

    def index_of(self, color: Color) -> str:
        """Legend letter for a color, assigning the next letter on first use."""
        index = self._indices.get(color)
        if index is None:
            index = chr(ord(FIRST_INDEX_LETTER) + len(self._indices))
            self._indices[color] = index
        return index

    def legend(self) -> List[LegendEntry]:
        return [
            LegendEntry(color=color, index=self._indices[color], count=count)
            for color, count in self._counts.items()
        ]

    @property
    def total_count(self) -> int:
        """Pixels left to place, ignoring crossed-out colors."""
        return sum(
            count for color, count in self._counts.items() if color not in self.crossed_colors
        )

    def time_estimate(self) -> Tuple[int, int]:
        """Lower and upper assembly time in minutes."""
        total = self.total_count
        return total // 4, total // 2

    def label_class(self, color: Color) -> str:
        return DARK_TEXT_CLASS if is_light_color(hex_to_rgb(color)) else LIGHT_TEXT_CLASS

    def index_grid(self) -> List[str]:
        return ["".join(self._indices[color] for color in row) for row in self.pixels]

    @staticmethod
    def is_half(index: int, total: int) -> bool:
        return total // 2 == index

    def toggle_color(self, color: Color) -> None:
        _toggle(color, self.crossed_colors)

    def toggle_row(self, row: int) -> None:
        _toggle(row, self.crossed_rows)

    def toggle_column(self, column: int) -> None:
        _toggle(column, self.crossed_columns)


def _toggle(value: Hashable, values: Set) -> None:
    if value in values:
        values.discard(value)
    else:
        values.add(value)
