from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from volchart.core.errors import RenderError
from volchart.core.marketdata.quote import QuoteRecord
from volchart.core.orchestration.settings import Settings
from volchart.core.volatility.classifier import VolatileMarker

FRAME_COLUMNS = ["date", "open", "high", "low", "close"]


def candlestick_frame(series: Sequence[QuoteRecord]) -> pd.DataFrame:
    """Parallel date/open/high/low/close columns in series order.

    Raises DateConversionError on the first timestamp that is not a calendar date;
    the render stops there instead of dropping the bar.
    """
    if not series:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    rows = [
        {
            "date": record.date_label,
            "open": float(record.open),
            "high": float(record.high),
            "low": float(record.low),
            "close": float(record.close),
        }
        for record in series
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def build_figure(
    ticker: str,
    series: Sequence[QuoteRecord],
    markers: Sequence[VolatileMarker],
    *,
    settings: Settings | None = None,
) -> go.Figure:
    cfg = settings or Settings()
    frame = candlestick_frame(series)

    fig = go.Figure()
    fig.add_trace(
        go.Candlestick(
            x=frame["date"].tolist(),
            open=frame["open"].tolist(),
            high=frame["high"].tolist(),
            low=frame["low"].tolist(),
            close=frame["close"].tolist(),
            name="Daily Prices",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[marker.date_label for marker in markers],
            y=[float(marker.close) for marker in markers],
            mode="markers",
            name="Volatile Days",
            marker={"size": cfg.marker_size, "color": cfg.marker_color},
        )
    )

    fig.update_layout(
        title=f"Candlestick Chart for {ticker} ({cfg.range_label})",
        xaxis={"title": {"text": "Date"}},
        yaxis={"title": {"text": "Price ($USD)"}},
        height=cfg.chart_height,
    )
    return fig


def render(
    ticker: str,
    series: Sequence[QuoteRecord],
    markers: Sequence[VolatileMarker],
    output_path: str | Path,
    *,
    settings: Settings | None = None,
) -> Path:
    fig = build_figure(ticker, series, markers, settings=settings)
    path = Path(output_path)

    try:
        html = fig.to_html(
            include_plotlyjs=True,
            full_html=True,
            # Fixed div id keeps repeated renders byte-identical.
            div_id=f"{_slug(ticker)}-stock-chart",
        )
    except ValueError as exc:
        raise RenderError(f"Could not serialize chart for {ticker}: {exc}") from exc

    try:
        path.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise RenderError(f"Could not write {path}: {exc}") from exc
    return path


def _slug(value: str) -> str:
    cleaned = "".join(ch if ch.isalnum() else "-" for ch in str(value).strip().lower())
    return cleaned or "ticker"
