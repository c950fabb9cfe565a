"""
Module: core.models.rect

Purpose:
    Provides the AbsoluteRect dataclass - a capture resolved to top-left
    image coordinates and checked against the image it belongs to.

Key Functions:
    - AbsoluteRect.as_box(): (left, upper, right, lower) tuple for PIL
    - AbsoluteRect.crop_from(image): Crop this region from a PIL image

Dependencies:
    - dataclasses (std)
    - PIL.Image (TYPE_CHECKING only)

Used By:
    - cutout.geometry.converter
    - cutout.processing.processor
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True, slots=True)
class AbsoluteRect:
    """
    Image region in top-left pixel coordinates.

    The region is [x, x + width) x [y, y + height). Instances are produced
    by convert_coordinates, which guarantees the region fits the image.

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Width in pixels
        height: Height in pixels

    Example:
        >>> rect = AbsoluteRect(x=50, y=700, width=100, height=100)
        >>> rect.as_box()
        (50, 700, 150, 800)
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """X-coordinate of the right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Y-coordinate of the bottom edge (exclusive)."""
        return self.y + self.height

    def as_box(self) -> Tuple[int, int, int, int]:
        """Get as (left, upper, right, lower) tuple for PIL."""
        return (self.x, self.y, self.right, self.bottom)

    def crop_from(self, image: Image.Image) -> Image.Image:
        """
        Crop this region from an image.

        Args:
            image: PIL Image to crop from

        Returns:
            New PIL Image containing just this region
        """
        return image.crop(self.as_box())

    def __repr__(self) -> str:
        return f"AbsoluteRect({self.x}, {self.y}, {self.width}x{self.height})"
