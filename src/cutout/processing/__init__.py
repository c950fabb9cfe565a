"""
Module: processing

Purpose:
    Per-image decode, crop and save, plus the timing instrumentation
    reported in verbose mode.

Key Functions:
    - process_image(): Extract all captures from one image
    - load_image_size(): Decode one image for dry-run validation

Dependencies:
    - PIL: Image decoding and encoding
"""

from .image_io import format_for_path, open_image, save_image
from .processor import ImageResult, ResolvedCapture, load_image_size, process_image, resolve_capture
from .timing import TimingLog, timed_phase

__all__ = [
    "ImageResult",
    "ResolvedCapture",
    "TimingLog",
    "format_for_path",
    "load_image_size",
    "open_image",
    "process_image",
    "resolve_capture",
    "save_image",
    "timed_phase",
]
