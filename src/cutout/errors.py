"""
Module: errors

Purpose:
    Exception hierarchy for cutout. Every error raised by the package
    derives from CutoutError so callers can catch the whole family.

Key Classes:
    - CaptureSpecError: Malformed capture spec string
    - OriginError: Unrecognized origin token
    - BoundsError: Capture rectangle falls outside an image
    - ImageReadError / ImageWriteError / OutputPathError: I/O and path failures
    - ImageProcessingError: Per-image wrapper carrying image path and capture name

Used By:
    - cutout.parsing, cutout.geometry, cutout.output, cutout.processing
    - cutout.pipeline, cutout.cli
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple


class CutoutError(Exception):
    """Base class for all cutout errors."""


class CaptureSpecError(CutoutError, ValueError):
    """Raised when a capture spec string cannot be parsed."""

    def __init__(self, message: str, spec: str = ""):
        super().__init__(message)
        self.spec = spec


class OriginError(CutoutError, ValueError):
    """Raised when an origin token is not one of the supported aliases."""

    def __init__(self, message: str, value: str = ""):
        super().__init__(message)
        self.value = value


class BoundsError(CutoutError, ValueError):
    """
    Raised when a capture does not fit inside an image.

    Attributes:
        capture_name: Name of the offending capture
        image_size: (width, height) of the image it was checked against
    """

    def __init__(self, message: str, capture_name: str, image_size: Tuple[int, int]):
        super().__init__(message)
        self.capture_name = capture_name
        self.image_size = image_size


class OriginOutsideBoundsError(BoundsError):
    """The absolute top-left corner lies outside the image."""


class RectangleExceedsBoundsError(BoundsError):
    """The corner is inside the image but the rectangle extends past an edge."""


class HeightOutsideImageError(BoundsError):
    """Bottom-left y (or y + height) does not fit within the image height."""


class PathError(CutoutError):
    """Base for errors tied to a filesystem path."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class ImageReadError(PathError):
    """Input image could not be opened or decoded."""


class ImageWriteError(PathError):
    """Cropped image could not be written."""


class OutputPathError(PathError):
    """Input path has no file-name component to derive an output from."""


class ImageProcessingError(CutoutError):
    """
    Failure while processing one input image.

    Always raised ``from`` the underlying error.

    Attributes:
        image_path: Input image being processed
        capture_name: Capture that failed, or None for image-level failures
    """

    def __init__(
        self,
        message: str,
        image_path: Path,
        capture_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.image_path = image_path
        self.capture_name = capture_name
