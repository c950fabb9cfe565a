"""
cutout Core Package

Shared value types used by every stage of the tool. All of them are
frozen so a single parsed set of captures can be handed to every worker
thread without copying or locking.
"""

from .models import AbsoluteRect, CaptureSpec, Origin

__all__ = [
    "AbsoluteRect",
    "CaptureSpec",
    "Origin",
]
