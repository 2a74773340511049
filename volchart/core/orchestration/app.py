from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence, TextIO

from volchart.core.charts.renderer import render
from volchart.core.errors import ConnectorInitError, FetchError, RenderError
from volchart.core.marketdata.connectors import QuoteConnector, build_connector
from volchart.core.marketdata.fetcher import fetch
from volchart.core.marketdata.quote import QuoteRecord
from volchart.core.orchestration.settings import Settings
from volchart.core.volatility.classifier import VolatileMarker, classify

PROMPT = "Enter the stock ticker (e.g., AAPL): "

ConnectorFactory = Callable[[Settings], QuoteConnector]
Renderer = Callable[..., Path]


def default_connector_factory(settings: Settings) -> QuoteConnector:
    return build_connector(settings.provider, timeout_seconds=settings.request_timeout_seconds)


class StockChartApp:
    """One interactive cycle: prompt -> fetch -> classify -> render."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        connector_factory: ConnectorFactory | None = None,
        renderer: Renderer = render,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.settings = settings or Settings()
        self.connector_factory = connector_factory or default_connector_factory
        self.renderer = renderer
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def read_ticker(self) -> str:
        print(PROMPT, end="", file=self.stdout, flush=True)
        line = self.stdin.readline()
        return normalize_ticker(line)

    async def run(self) -> int:
        ticker = self.read_ticker()
        if not ticker:
            print("Error: a ticker symbol is required.", file=self.stderr)
            return 1
        if not is_safe_ticker(ticker):
            print(f"Error: invalid ticker symbol: {ticker!r}", file=self.stderr)
            return 1

        try:
            connector = self.connector_factory(self.settings)
        except ConnectorInitError as exc:
            print(f"Failed to initialise market data connector: {exc}", file=self.stderr)
            return 1

        try:
            quotes = await fetch(connector, ticker, self.settings.interval, self.settings.range)
        except FetchError as exc:
            print(f"Error fetching stock data: {exc}", file=self.stderr)
            return 1

        print(f"Fetched {len(quotes)} quotes for {ticker}", file=self.stdout)
        output_path = self.settings.output_path_for(ticker)

        try:
            saved = self.render_chart(ticker, quotes, output_path)
        except RenderError as exc:
            print(f"Failed to generate chart: {exc}", file=self.stderr)
            return 1

        print(f"Candlestick chart with volatile days saved as {saved}", file=self.stdout)
        return 0

    def render_chart(self, ticker: str, quotes: Sequence[QuoteRecord], output_path: Path) -> Path:
        markers: list[VolatileMarker] = classify(quotes, self.settings.volatility_threshold)
        return self.renderer(ticker, quotes, markers, output_path, settings=self.settings)


def normalize_ticker(value: str) -> str:
    return str(value or "").strip().upper()


def is_safe_ticker(ticker: str) -> bool:
    # The ticker becomes part of the output file name.
    return not any(part in ticker for part in ("/", "\\", ".."))


def main() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return asyncio.run(StockChartApp().run())


if __name__ == "__main__":
    raise SystemExit(main())
