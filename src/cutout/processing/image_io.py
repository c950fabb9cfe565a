"""
Module: processing.image_io

Purpose:
    Image decoding and encoding collaborators. Everything format-specific
    is delegated to Pillow; this module only wraps failures with paths.

Key Functions:
    - open_image(): Open and fully decode an image
    - format_for_path(): Pillow format name implied by a file extension
    - save_image(): Atomic write in the format implied by the path

Dependencies:
    - PIL.Image: Decoding, encoding, format registry

Used By:
    - cutout.processing.processor
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from PIL import Image

from cutout.errors import ImageReadError, ImageWriteError

logger = logging.getLogger(__name__)

# Pillow reports malformed data as SyntaxError or ValueError and over-large
# images as DecompressionBombError; none of these are OSError
_READ_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def open_image(path: Path) -> Image.Image:
    """
    Open and decode an image.

    Pixels are loaded eagerly so decode failures surface here rather
    than at crop time.

    Raises:
        ImageReadError: If the file is missing, unreadable, or not an image
    """
    try:
        image = Image.open(path)
    except _READ_ERRORS as e:
        raise ImageReadError(f"Unable to open image '{path}': {e}", path) from e

    try:
        image.load()
    except _READ_ERRORS as e:
        image.close()
        raise ImageReadError(f"Unable to decode image '{path}': {e}", path) from e
    return image


def format_for_path(path: Path) -> str:
    """
    Pillow format name for a path's extension (case-insensitive).

    Raises:
        ImageWriteError: If Pillow has no encoder registered for the extension
    """
    fmt = Image.registered_extensions().get(path.suffix.lower())
    if fmt is None:
        raise ImageWriteError(
            f"Unable to save image to '{path}': unsupported extension '{path.suffix}'",
            path,
        )
    return fmt


def save_image(image: Image.Image, path: Path) -> None:
    """
    Write an image atomically in the format implied by its extension.

    Data goes to a temporary file in the destination directory, which is
    then renamed over path. The destination directory must exist.

    Raises:
        ImageWriteError: On unsupported extension, encoder failure, or
            filesystem errors
    """
    fmt = format_for_path(path)
    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=f".{path.name}.",
            suffix=".tmp",
            dir=path.parent,
            delete=False,
        ) as f:
            temp_path = Path(f.name)
            image.save(f, format=fmt)
        temp_path.replace(path)
    except (OSError, ValueError, KeyError) as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise ImageWriteError(f"Unable to save image to '{path}': {e}", path) from e

    logger.debug(f"Saved {path}")
