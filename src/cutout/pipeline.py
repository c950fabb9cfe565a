"""
Module: pipeline

Purpose:
    Batch orchestration. Runs the per-image processor over every input
    on a thread pool, or validates every input in a dry run.

Key Functions:
    - run_batch(): Parallel crop+save over all inputs, collecting failures
    - run_dry_run(): Sequential validation that writes nothing

Key Classes:
    - BatchResult: Successful images and failures of a batch run
    - ImageFailure: One failed input with its error
    - DryRunReport: Resolved outputs for one validated input

Dependencies:
    - concurrent.futures: Thread pool execution
    - cutout.processing: Per-image work

Used By:
    - cutout.cli

Concurrency:
    One task per input image; captures within an image run sequentially
    inside its task. Tasks share only the frozen config. A failing task
    never cancels others; every dispatched task runs to completion and
    outputs already written are kept.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .config import CutoutConfig
from .errors import CutoutError, ImageProcessingError
from .processing import (
    ImageResult,
    TimingLog,
    load_image_size,
    process_image,
    resolve_capture,
)

logger = logging.getLogger(__name__)

Outcome = Union[ImageResult, CutoutError]


@dataclass(frozen=True)
class ImageFailure:
    """An input whose task raised."""
    input_path: Path
    error: CutoutError


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Attributes:
        results: Successful images, in input order
        failures: Failed images, in input order
        timing: Merged timings of successful images
    """
    results: List[ImageResult] = field(default_factory=list)
    failures: List[ImageFailure] = field(default_factory=list)
    timing: TimingLog = field(default_factory=TimingLog)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def first_error(self) -> Optional[CutoutError]:
        """Error of the first failed input (in input order), if any."""
        return self.failures[0].error if self.failures else None

    @property
    def output_count(self) -> int:
        return sum(len(r.output_paths) for r in self.results)


@dataclass(frozen=True)
class DryRunReport:
    """Validation outcome for one input."""
    input_path: Path
    image_size: Tuple[int, int]
    outputs: List[Tuple[str, Path]]


def run_batch(config: CutoutConfig) -> BatchResult:
    """
    Process every input in parallel.

    Runs in the calling thread when only one worker is needed.

    Args:
        config: Run configuration (captures, inputs, origin, workers)

    Returns:
        BatchResult with per-input successes and failures. The batch is
        a failure overall if any input failed.
    """
    outcomes: Dict[int, Outcome] = {}
    workers = config.worker_count

    if workers == 1:
        for index, path in enumerate(config.inputs):
            outcomes[index] = _run_one(path, config)
    else:
        logger.debug(f"Processing {len(config.inputs)} images with {workers} threads")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index: Dict[Future, int] = {
                executor.submit(
                    process_image, path, config.origin, config.captures, config.verbose
                ): index
                for index, path in enumerate(config.inputs)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    outcomes[index] = future.result()
                except Exception as e:
                    outcomes[index] = _as_image_error(config.inputs[index], e)

    batch = BatchResult()
    for index, path in enumerate(config.inputs):
        outcome = outcomes[index]
        if isinstance(outcome, ImageResult):
            batch.results.append(outcome)
            batch.timing.merge(outcome.timing)
        else:
            batch.failures.append(ImageFailure(input_path=path, error=outcome))

    logger.debug(
        f"Batch finished: {len(batch.results)} images ok, {len(batch.failures)} failed, "
        f"{batch.output_count} files written"
    )
    return batch


def _run_one(path: Path, config: CutoutConfig) -> Outcome:
    """Sequential counterpart of a pool task: result or caught error."""
    try:
        return process_image(path, config.origin, config.captures, config.verbose)
    except Exception as e:
        return _as_image_error(path, e)


def _as_image_error(path: Path, error: Exception) -> CutoutError:
    """Attribute an error from one image's task to that image."""
    if isinstance(error, CutoutError):
        return error
    logger.debug(f"Unexpected error processing {path}", exc_info=error)
    wrapped = ImageProcessingError(f"Unexpected error processing image '{path}': {error}", path)
    wrapped.__cause__ = error
    return wrapped


def run_dry_run(config: CutoutConfig) -> List[DryRunReport]:
    """
    Validate every capture against every input without writing files.

    Each input is fully decoded, then its captures are resolved in order
    and logged as they pass. The first failure aborts the run after
    whatever has already been reported.

    Returns:
        One DryRunReport per input

    Raises:
        ImageProcessingError: First input that cannot be read or has a
            capture that does not fit
    """
    logger.info(
        f"Dry run mode: validating {len(config.captures)} capture specs "
        f"against {len(config.inputs)} images"
    )
    for spec in config.captures:
        logger.info(f"  Capture '{spec.name}': {spec.describe()}")
    logger.info("")

    reports = []
    for path in config.inputs:
        size = load_image_size(path)
        logger.info(f"Validating {path} ({size[0]}x{size[1]})")
        resolved = []
        for spec in config.captures:
            capture = resolve_capture(path, spec, config.origin, size)
            logger.info(f"  '{capture.spec.name}' -> {capture.output_path}")
            resolved.append(capture)
        reports.append(
            DryRunReport(
                input_path=path,
                image_size=size,
                outputs=[(c.spec.name, c.output_path) for c in resolved],
            )
        )

    logger.info("Validation successful. All capture specifications are valid.")
    return reports
