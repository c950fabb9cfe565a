"""
Core Models Package

Immutable data models for capture definitions and resolved rectangles.

| Type | Lifetime | Notes |
|------|----------|-------|
| `CaptureSpec` | whole run | Parsed once, shared read-only |
| `Origin` | whole run | Selects the y-axis convention |
| `AbsoluteRect` | one (image, capture) pair | Top-left coordinates, bounds-checked |
"""

from .capture import CaptureSpec, Origin
from .rect import AbsoluteRect

__all__ = [
    "CaptureSpec",
    "Origin",
    "AbsoluteRect",
]
