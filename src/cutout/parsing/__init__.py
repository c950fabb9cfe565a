"""
Capture spec parsing.

Key Functions:
    - parse_capture_spec(): "<name>:<x>x<y>:<width>x<height>" -> CaptureSpec
    - parse_capture_specs(): Parse a list of spec strings, in order
"""

from .spec_parser import SPEC_FORMAT, parse_capture_spec, parse_capture_specs, parse_pair

__all__ = [
    "SPEC_FORMAT",
    "parse_capture_spec",
    "parse_capture_specs",
    "parse_pair",
]
