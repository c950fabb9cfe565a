"""Output path utilities.

Derives the file each capture is written to from its input image path.
"""

from __future__ import annotations

from pathlib import Path

from cutout.errors import OutputPathError

# Used when the input file name has no usable extension
DEFAULT_EXTENSION = "png"


def make_output_path(input_path: str | Path, capture_name: str) -> Path:
    """Build the output path for one capture of one image.

    The result sits next to the input as ``<stem>_<capture_name>.<ext>``.
    Only the last dot splits stem from extension. A file name with no dot,
    an empty stem (``.hidden``) or an empty extension (``name.``) is used
    whole as the stem, with ``png`` as the extension.

    Args:
        input_path: Input image path.
        capture_name: Capture name, used verbatim.

    Returns:
        Output path in the same directory as the input.

    Raises:
        OutputPathError: If the path has no file-name component.

    Examples:
        >>> make_output_path("/a/b/img.jpg", "left")
        PosixPath('/a/b/img_left.jpg')
        >>> make_output_path("/a/b/no_ext", "x")
        PosixPath('/a/b/no_ext_x.png')
        >>> make_output_path("/a/b/a.b.c.png", "y")
        PosixPath('/a/b/a.b.c_y.png')
    """
    path = Path(input_path)
    file_name = path.name
    if file_name in ("", ".", ".."):
        raise OutputPathError(f"Input path '{input_path}' has no file name", path)

    stem, dot, ext = file_name.rpartition(".")
    if not dot or not stem or not ext:
        stem, ext = file_name, DEFAULT_EXTENSION

    return path.parent / f"{stem}_{capture_name}.{ext}"
