"""
Module: core.models.capture

Purpose:
    Provides the CaptureSpec dataclass (a named rectangle applied to every
    input image) and the Origin enum (how the rectangle's y is measured).

Key Functions:
    - CaptureSpec.to_spec_string(): Canonical "<name>:<x>x<y>:<w>x<h>" text
    - Origin.parse(text): Resolve a CLI alias to an Origin

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - cutout.parsing.spec_parser
    - cutout.geometry.converter
    - cutout.config
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cutout.errors import OriginError


class Origin(str, Enum):
    """Coordinate origin used to interpret a capture's y value."""
    TOP_LEFT = "tl"     # y = 0 is the top row, y grows downward
    BOTTOM_LEFT = "bl"  # y = 0 is the bottom row, y grows upward

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Origin:
        """
        Resolve an origin alias (case-insensitive).

        Accepts tl, top-left, top_left, bl, bottom-left, bottom_left.

        Raises:
            OriginError: If text is not a supported alias
        """
        origin = _ORIGIN_ALIASES.get(text.strip().lower())
        if origin is None:
            raise OriginError(
                f"Invalid origin '{text}'. Supported values: tl, bl "
                f"(aliases: {', '.join(sorted(_ORIGIN_ALIASES))})",
                value=text,
            )
        return origin


_ORIGIN_ALIASES = {
    "tl": Origin.TOP_LEFT,
    "top-left": Origin.TOP_LEFT,
    "top_left": Origin.TOP_LEFT,
    "bl": Origin.BOTTOM_LEFT,
    "bottom-left": Origin.BOTTOM_LEFT,
    "bottom_left": Origin.BOTTOM_LEFT,
}


@dataclass(frozen=True, slots=True)
class CaptureSpec:
    """
    Named rectangle to extract from every input image.

    Coordinates are relative to the run's Origin. The name is used verbatim
    in output file names; it is not checked for emptiness or uniqueness.

    Attributes:
        name: Label used in the output file name
        x: Left edge in pixels
        y: Top edge (TOP_LEFT) or bottom edge (BOTTOM_LEFT) in pixels
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)

    Invariants:
        - x >= 0, y >= 0
        - width > 0, height > 0

    Example:
        >>> spec = CaptureSpec("left", 200, 300, 1200, 1850)
        >>> spec.to_spec_string()
        'left:200x300:1200x1850'
    """

    name: str
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.x < 0 or self.y < 0:
            raise ValueError(f"x and y must be >= 0: ({self.x}, {self.y})")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"width and height must be > 0: {self.width}x{self.height}"
            )

    def to_spec_string(self) -> str:
        """Format back into the capture spec grammar accepted by the parser."""
        return f"{self.name}:{self.x}x{self.y}:{self.width}x{self.height}"

    def describe(self) -> str:
        """Human-readable summary for logs."""
        return f"{self.width}x{self.height} at ({self.x}, {self.y})"
