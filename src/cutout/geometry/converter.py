"""
Module: geometry.converter

Purpose:
    Convert a CaptureSpec from its origin-relative coordinates to an
    AbsoluteRect in top-left image coordinates, checking every bound.

Key Functions:
    - convert_coordinates(): CaptureSpec + Origin + image size -> AbsoluteRect
    - checked_sub(): Unsigned subtraction that reports underflow

Dependencies:
    - cutout.core.models: CaptureSpec, Origin, AbsoluteRect

Used By:
    - cutout.processing.processor

Arithmetic:
    Magnitudes are unsigned. Python ints never wrap, but a negative
    intermediate is just as wrong as a wrapped one, so every subtraction
    goes through checked_sub and a None result is an error.
"""

from __future__ import annotations

from typing import Optional

from cutout.core.models import AbsoluteRect, CaptureSpec, Origin
from cutout.errors import (
    HeightOutsideImageError,
    OriginOutsideBoundsError,
    RectangleExceedsBoundsError,
)


def checked_sub(a: int, b: int) -> Optional[int]:
    """
    Subtract two unsigned values.

    Returns:
        a - b, or None if the result would be negative

    Example:
        >>> checked_sub(1000, 900)
        100
        >>> checked_sub(900, 1000) is None
        True
    """
    if b > a:
        return None
    return a - b


def convert_coordinates(
    spec: CaptureSpec,
    origin: Origin,
    img_width: int,
    img_height: int,
) -> AbsoluteRect:
    """
    Resolve a capture to absolute top-left coordinates.

    For BOTTOM_LEFT, spec.y is the distance from the bottom edge to the
    rectangle's bottom edge, so abs_y = img_height - y - height.

    Args:
        spec: Capture to resolve
        origin: Coordinate origin for spec.y
        img_width: Image width in pixels
        img_height: Image height in pixels

    Returns:
        AbsoluteRect fully inside the image

    Raises:
        HeightOutsideImageError: BOTTOM_LEFT with y > img_height, or
            y + height > img_height
        OriginOutsideBoundsError: Absolute corner outside the image
        RectangleExceedsBoundsError: Rectangle extends past the right
            or bottom edge

    Example:
        >>> spec = CaptureSpec("a", 50, 200, 100, 100)
        >>> convert_coordinates(spec, Origin.BOTTOM_LEFT, 1000, 1000)
        AbsoluteRect(50, 700, 100x100)
    """
    size = (img_width, img_height)
    abs_x = spec.x

    if origin is Origin.TOP_LEFT:
        abs_y = spec.y
    else:
        if spec.y > img_height:
            raise HeightOutsideImageError(
                f"Capture '{spec.name}' y={spec.y} is outside image height={img_height}",
                spec.name,
                size,
            )
        remaining = checked_sub(img_height, spec.y)
        abs_y = checked_sub(remaining, spec.height) if remaining is not None else None
        if abs_y is None:
            raise HeightOutsideImageError(
                f"Capture '{spec.name}' (y={spec.y}, height={spec.height}) "
                f"is outside image height={img_height}",
                spec.name,
                size,
            )

    if abs_x >= img_width or abs_y >= img_height:
        raise OriginOutsideBoundsError(
            f"Capture '{spec.name}' origin ({abs_x}, {abs_y}) is outside "
            f"image bounds {img_width}x{img_height}",
            spec.name,
            size,
        )

    # Both are >= 1 after the origin check
    max_w = img_width - abs_x
    max_h = img_height - abs_y

    if spec.width > max_w or spec.height > max_h:
        raise RectangleExceedsBoundsError(
            f"Capture '{spec.name}' rectangle ({abs_x}, {abs_y}, "
            f"{spec.width}x{spec.height}) exceeds image bounds {img_width}x{img_height}",
            spec.name,
            size,
        )

    return AbsoluteRect(x=abs_x, y=abs_y, width=spec.width, height=spec.height)
