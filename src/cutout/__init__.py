"""Top-level package for cutout.

Batch-extracts named rectangular regions ("captures") from images.

Provides subpackages:
- cutout.core – immutable value types (CaptureSpec, Origin, AbsoluteRect)
- cutout.parsing – capture spec parsing
- cutout.geometry – origin conversion and bounds validation
- cutout.output – output path resolution
- cutout.processing – per-image decode/crop/save
- cutout.pipeline – parallel batch and dry-run orchestration
"""


def _get_version() -> str:
    """Get version from installed metadata, or pyproject.toml in a source checkout."""
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("cutout")
    except PackageNotFoundError:
        pass

    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
