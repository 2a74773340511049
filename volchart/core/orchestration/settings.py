from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    # Quote window
    interval: str = "1d"
    range: str = "6mo"
    range_label: str = "Last 6 Months"

    # Classification
    volatility_threshold: float = 0.02  # (high - low) / close

    # Chart
    chart_height: int = 900
    marker_size: int = 10
    marker_color: str = "#1f77b4"

    # Provider / output
    provider: str = "yahoo_chart"  # "yahoo_chart" or "yfinance"
    request_timeout_seconds: float = 10.0
    output_dir: str = "."

    def output_path_for(self, ticker: str) -> Path:
        return Path(self.output_dir) / f"{ticker}_stock_chart.html"
