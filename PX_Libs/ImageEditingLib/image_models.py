"""
Image editing data models for Pixelate.

This module defines core data structures used throughout the editing engine.

Classes:
    Tool: The closed set of editing tools
    Operation: One tool application at a grid coordinate

Type Aliases:
    Color: Canonical `#rrggbb` color string
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Color = str
RgbColor = Tuple[int, int, int]


class Tool(Enum):
    DRAW = "draw"
    FILL = "fill"
    MAGIC_WAND = "magic_wand"


@dataclass(frozen=True)
class Operation:
    tool: Tool
    color: Color
    x: int
    y: int
