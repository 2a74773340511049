from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from volchart.core.marketdata.quote import QuoteRecord
from volchart.core.orchestration.time_utils import format_date

DEFAULT_THRESHOLD = 0.02


@dataclass(frozen=True)
class VolatileMarker:
    timestamp: int
    close: float
    high: float
    low: float
    open: float = 0.0  # placeholder; the overlay only plots the close

    @property
    def date_label(self) -> str:
        return format_date(self.timestamp)


def relative_range(record: QuoteRecord) -> float | None:
    """(high - low) / close, or None for a bar with no usable close."""
    if record.close == 0:
        return None
    ratio = (record.high - record.low) / record.close
    if not math.isfinite(ratio):
        return None
    return ratio


def is_volatile(record: QuoteRecord, threshold: float = DEFAULT_THRESHOLD) -> bool:
    ratio = relative_range(record)
    return ratio is not None and ratio > threshold


def classify(series: Iterable[QuoteRecord], threshold: float = DEFAULT_THRESHOLD) -> list[VolatileMarker]:
    return [
        VolatileMarker(timestamp=record.timestamp, close=record.close, high=record.high, low=record.low)
        for record in series
        if is_volatile(record, threshold)
    ]
