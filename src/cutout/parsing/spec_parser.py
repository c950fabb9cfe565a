"""
Module: parsing.spec_parser

Purpose:
    Parse textual capture specs into CaptureSpec values. Pure functions,
    run once per invocation before any image is opened.

Key Functions:
    - parse_capture_spec(): Parse one spec string
    - parse_capture_specs(): Parse many, preserving order
    - parse_pair(): Parse "<a>x<b>" into two unsigned integers

Dependencies:
    - re (std)
    - cutout.core.models: CaptureSpec

Used By:
    - cutout.cli
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from cutout.core.models import CaptureSpec
from cutout.errors import CaptureSpecError

SPEC_FORMAT = "<name>:<x>x<y>:<width>x<height>"

# Coordinates are stored as unsigned 32-bit magnitudes
MAX_COORDINATE = 2**32 - 1

_UNSIGNED_RE = re.compile(r"[0-9]+")


def parse_capture_spec(text: str) -> CaptureSpec:
    """
    Parse a single capture spec.

    Args:
        text: Spec like "left:200x300:1200x1850"

    Returns:
        CaptureSpec with the parsed name and geometry

    Raises:
        CaptureSpecError: On wrong part count, unparsable numbers,
            or zero width/height

    Example:
        >>> parse_capture_spec("left:200x300:1200x1850")
        CaptureSpec(name='left', x=200, y=300, width=1200, height=1850)
    """
    parts = text.split(":")
    if len(parts) != 3:
        raise CaptureSpecError(
            f"Invalid capture spec '{text}'. Expected format: {SPEC_FORMAT}",
            spec=text,
        )

    name = parts[0]
    x, y = parse_pair(parts[1], "x", "position", text)
    width, height = parse_pair(parts[2], "x", "width x height", text)

    if width == 0 or height == 0:
        raise CaptureSpecError(
            f"Width and height must be positive in capture spec '{text}'",
            spec=text,
        )

    return CaptureSpec(name=name, x=x, y=y, width=width, height=height)


def parse_capture_specs(texts: Iterable[str]) -> List[CaptureSpec]:
    """Parse every spec in order; the first malformed one raises."""
    return [parse_capture_spec(text) for text in texts]


def parse_pair(raw: str, sep: str, label: str, original_spec: str) -> Tuple[int, int]:
    """
    Parse two unsigned integers separated by sep.

    Args:
        raw: Text like "200x300"
        sep: Separator character
        label: Name of the pair, used in error messages
        original_spec: Full spec string, used in error messages

    Returns:
        Tuple of the two parsed values

    Raises:
        CaptureSpecError: If there are not exactly two components or
            either is not an unsigned integer
    """
    components = raw.split(sep)
    if len(components) < 2:
        raise CaptureSpecError(
            f"Missing second {label} in capture spec '{original_spec}'",
            spec=original_spec,
        )
    if len(components) > 2:
        raise CaptureSpecError(
            f"Too many components for {label} in capture spec '{original_spec}'",
            spec=original_spec,
        )

    first, second = components
    return (
        _parse_unsigned(first, "first", label, original_spec),
        _parse_unsigned(second, "second", label, original_spec),
    )


def _parse_unsigned(token: str, position: str, label: str, original_spec: str) -> int:
    """Parse a non-negative integer that fits in 32 bits."""
    if _UNSIGNED_RE.fullmatch(token) is None or int(token) > MAX_COORDINATE:
        raise CaptureSpecError(
            f"Failed to parse {position} {label} value '{token}' "
            f"in capture spec '{original_spec}'",
            spec=original_spec,
        )
    return int(token)
