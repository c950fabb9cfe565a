"""Origin conversion and bounds validation for capture rectangles."""

from .converter import checked_sub, convert_coordinates

__all__ = ["checked_sub", "convert_coordinates"]
