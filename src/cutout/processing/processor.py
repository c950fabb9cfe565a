"""
Module: processing.processor

Purpose:
    Per-image work: decode one input, resolve every capture against its
    size, crop, and write each capture next to the input. Also the
    read-only validation used by dry runs.

Key Functions:
    - process_image(): Decode, crop and save all captures for one image
    - load_image_size(): Decode one image and report its size, write nothing
    - resolve_capture(): Check one capture against one image size

Key Classes:
    - ImageResult: Output paths and timings for one processed image
    - ResolvedCapture: One capture resolved against one image

Dependencies:
    - PIL.Image (via cutout.processing.image_io)
    - cutout.geometry.converter: Bounds checks
    - cutout.output.paths: Output naming

Used By:
    - cutout.pipeline

Failure semantics:
    Captures run in the order given. The first failing capture stops the
    image; files already written for earlier captures stay on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from cutout.core.models import AbsoluteRect, CaptureSpec, Origin
from cutout.errors import (
    BoundsError,
    ImageProcessingError,
    ImageReadError,
    ImageWriteError,
    OutputPathError,
)
from cutout.geometry import convert_coordinates
from cutout.output import make_output_path

from .image_io import open_image, save_image
from .timing import CROP_SAVE_PHASE, DECODE_PHASE, TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedCapture:
    """A capture checked against one image, with its destination."""
    spec: CaptureSpec
    rect: AbsoluteRect
    output_path: Path


@dataclass
class ImageResult:
    """
    Result of processing one input image.

    Attributes:
        input_path: Image that was processed
        output_paths: Files written, in capture order
        timing: Decode and crop+save durations for this image
    """
    input_path: Path
    output_paths: List[Path] = field(default_factory=list)
    timing: TimingLog = field(default_factory=TimingLog)

    @property
    def decode_seconds(self) -> float:
        return self.timing.get_phase(str(self.input_path), DECODE_PHASE)

    @property
    def crop_save_seconds(self) -> float:
        return self.timing.get_phase(str(self.input_path), CROP_SAVE_PHASE)


def resolve_capture(
    path: Path,
    spec: CaptureSpec,
    origin: Origin,
    image_size: Tuple[int, int],
) -> ResolvedCapture:
    """
    Resolve one capture against one image.

    Raises:
        ImageProcessingError: Wrapping a BoundsError or OutputPathError,
            with the capture name and image path attached
    """
    img_width, img_height = image_size
    try:
        rect = convert_coordinates(spec, origin, img_width, img_height)
        output_path = make_output_path(path, spec.name)
    except (BoundsError, OutputPathError) as e:
        raise ImageProcessingError(
            f"Invalid capture spec '{spec.name}' for image '{path}': {e}",
            path,
            capture_name=spec.name,
        ) from e
    return ResolvedCapture(spec=spec, rect=rect, output_path=output_path)


def load_image_size(path: Path) -> Tuple[int, int]:
    """
    Fully decode an image and return (width, height).

    Used by dry runs so that inputs a normal run could not decode are
    rejected there too. Nothing is cropped or written.

    Raises:
        ImageProcessingError: If the image cannot be read or decoded
    """
    try:
        image = open_image(path)
    except ImageReadError as e:
        raise ImageProcessingError(str(e), path) from e
    with image:
        return image.size


def process_image(
    path: Path,
    origin: Origin,
    specs: Sequence[CaptureSpec],
    verbose: bool = False,
) -> ImageResult:
    """
    Crop every capture out of one image and save each beside it.

    Outputs are named by make_output_path and encoded in the format
    implied by their extension.

    Args:
        path: Input image
        origin: Coordinate origin shared by all captures
        specs: Captures to extract, in order
        verbose: Log decode and crop+save timings for this image

    Returns:
        ImageResult listing written files

    Raises:
        ImageProcessingError: On decode failure, a capture outside the
            image, or a write failure. Wraps the original error.

    Example:
        >>> result = process_image(Path("page.png"), Origin.TOP_LEFT, specs)
        >>> result.output_paths
        [PosixPath('page_left.png'), PosixPath('page_right.png')]
    """
    image_id = str(path)
    result = ImageResult(input_path=path)

    try:
        with timed_phase(result.timing, DECODE_PHASE, image_id):
            image = open_image(path)
    except ImageReadError as e:
        raise ImageProcessingError(str(e), path) from e

    with image, timed_phase(result.timing, CROP_SAVE_PHASE, image_id):
        for spec in specs:
            capture = resolve_capture(path, spec, origin, image.size)
            try:
                save_image(capture.rect.crop_from(image), capture.output_path)
            except ImageWriteError as e:
                raise ImageProcessingError(
                    f"Capture '{spec.name}' of image '{path}': {e}",
                    path,
                    capture_name=spec.name,
                ) from e
            result.output_paths.append(capture.output_path)
            logger.debug(f"  '{spec.name}' {capture.rect!r} -> {capture.output_path}")

    if verbose:
        logger.info(
            f"Processed {path} (decode: {result.decode_seconds * 1000:.0f} ms, "
            f"crop+save: {result.crop_save_seconds * 1000:.0f} ms)"
        )

    return result
