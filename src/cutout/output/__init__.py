"""Output path resolution."""

from .paths import DEFAULT_EXTENSION, make_output_path

__all__ = ["DEFAULT_EXTENSION", "make_output_path"]
