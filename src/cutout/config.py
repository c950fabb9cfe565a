"""
Module: config

Purpose:
    Run configuration for cutout. Built once by the CLI and shared
    read-only with every worker.

Key Classes:
    - CutoutConfig: Origin, captures, inputs and execution settings

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - cutout.cli: Builds the config from arguments
    - cutout.pipeline: Batch and dry-run orchestration
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from cutout.core.models import CaptureSpec, Origin


@dataclass(frozen=True)
class CutoutConfig:
    """
    Configuration for one cutout run (immutable).

    Attributes:
        captures: Parsed capture specs, applied to every input in order
        inputs: Input image paths
        origin: How capture y values are measured
        verbose: Log per-image timings and a batch timing summary
        dry_run: Validate and report output paths without writing
        max_workers: Worker pool size (None = hardware concurrency)

    Example:
        >>> config = CutoutConfig(
        ...     captures=(CaptureSpec("left", 0, 0, 100, 100),),
        ...     inputs=(Path("page.png"),),
        ... )
        >>> config.worker_count
        1
    """

    captures: Tuple[CaptureSpec, ...]
    inputs: Tuple[Path, ...]
    origin: Origin = Origin.TOP_LEFT
    verbose: bool = False
    dry_run: bool = False
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.captures:
            raise ValueError("at least one capture spec is required")
        if not self.inputs:
            raise ValueError("at least one input image is required")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")

    @property
    def worker_count(self) -> int:
        """Threads to use: requested or hardware count, capped by input count."""
        requested = self.max_workers or os.cpu_count() or 1
        return max(1, min(requested, len(self.inputs)))
