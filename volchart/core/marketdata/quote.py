from __future__ import annotations

from dataclasses import dataclass

from volchart.core.orchestration.time_utils import format_date


@dataclass(frozen=True)
class QuoteRecord:
    timestamp: int  # seconds since epoch, UTC
    open: float
    high: float
    low: float
    close: float

    @property
    def date_label(self) -> str:
        return format_date(self.timestamp)
