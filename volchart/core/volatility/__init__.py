from __future__ import annotations

from volchart.core.volatility.classifier import DEFAULT_THRESHOLD, VolatileMarker, classify, is_volatile, relative_range

__all__ = ["DEFAULT_THRESHOLD", "VolatileMarker", "classify", "is_volatile", "relative_range"]
