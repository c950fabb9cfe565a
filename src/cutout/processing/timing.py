"""
Module: processing.timing

Purpose:
    Timing instrumentation for per-image processing, reported when the
    CLI runs in verbose mode.

Key Classes:
    - TimingLog: Collects phase durations per input image

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - cutout.processing.processor: Times decode and crop+save
    - cutout.pipeline: Merges per-image logs into a batch summary
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Tuple

DECODE_PHASE = "decode"
CROP_SAVE_PHASE = "crop+save"


@dataclass
class TimingLog:
    """
    Phase timings keyed by image.

    Each worker fills its own TimingLog; the orchestrator merges them
    afterwards on the calling thread.

    Attributes:
        image_timings: Dict of image_id -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_image("scan_01.png", "decode", 0.042)
        >>> log.get_image_total("scan_01.png")
        0.042
    """
    image_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def log_image(self, image_id: str, phase: str, duration: float) -> None:
        """Record a phase duration for an image."""
        self.image_timings.setdefault(image_id, {})[phase] = duration

    def get_phase(self, image_id: str, phase: str) -> float:
        """Duration of one phase for one image (0.0 if not recorded)."""
        return self.image_timings.get(image_id, {}).get(phase, 0.0)

    def get_image_total(self, image_id: str) -> float:
        """Get total time for an image."""
        return sum(self.image_timings.get(image_id, {}).values())

    def merge(self, other: TimingLog) -> None:
        """Fold another log's entries into this one."""
        for image_id, phases in other.image_timings.items():
            self.image_timings.setdefault(image_id, {}).update(phases)

    def get_phase_averages(self) -> Dict[str, float]:
        """Calculate average time per phase across all images."""
        phase_totals: Dict[str, float] = {}
        phase_counts: Dict[str, int] = {}

        for phases in self.image_timings.values():
            for phase, duration in phases.items():
                phase_totals[phase] = phase_totals.get(phase, 0.0) + duration
                phase_counts[phase] = phase_counts.get(phase, 0) + 1

        return {
            phase: phase_totals[phase] / phase_counts[phase]
            for phase in phase_totals
        }

    def get_slowest_images(self, n: int = 3) -> List[Tuple[str, float, str, float]]:
        """Get the N slowest images with their total time and slowest phase."""
        results = []
        for image_id, phases in self.image_timings.items():
            if not phases:
                continue
            slowest_phase = max(phases.items(), key=lambda x: x[1])
            results.append((image_id, sum(phases.values()), slowest_phase[0], slowest_phase[1]))

        results.sort(key=lambda x: x[1], reverse=True)
        return results[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Timing Summary ==="]

        averages = self.get_phase_averages()
        if averages:
            lines.append("Per-image averages:")
            for phase, avg in sorted(averages.items(), key=lambda x: -x[1]):
                lines.append(f"  {phase:12s} {avg * 1000:.1f} ms")

        slowest = self.get_slowest_images(3)
        if slowest:
            lines.append("")
            lines.append("Slowest images:")
            for image_id, total, slow_phase, slow_duration in slowest:
                lines.append(
                    f"  {image_id}: {total * 1000:.1f} ms ({slow_phase}: {slow_duration * 1000:.1f} ms)"
                )

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "image_timings": self.image_timings,
            "phase_averages": self.get_phase_averages(),
            "slowest_images": [
                {"id": image_id, "total": total, "slowest_phase": phase, "phase_duration": dur}
                for image_id, total, phase, dur in self.get_slowest_images(5)
            ],
        }


@contextmanager
def timed_phase(
    log: TimingLog,
    phase: str,
    image_id: str,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    The duration is recorded even if the block raises.

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, DECODE_PHASE, "scan_01.png"):
        ...     image = open_image(path)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log_image(image_id, phase, time.perf_counter() - start)
