from __future__ import annotations

from volchart.core.charts.renderer import build_figure, candlestick_frame, render

__all__ = ["build_figure", "candlestick_frame", "render"]
