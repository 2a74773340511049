from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import pandas as pd
import requests

from volchart.core.errors import ConnectorInitError, FetchError, one_line_error

logger = logging.getLogger(__name__)

_YAHOO_HEADERS = {"User-Agent": "Mozilla/5.0"}


@dataclass(frozen=True)
class ProviderQuote:
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None
    adjclose: float | None = None


class QuoteRangeResponse(ABC):
    @abstractmethod
    def quotes(self) -> list[ProviderQuote]:
        """Return provider quotes (oldest -> newest), or raise FetchError."""
        raise NotImplementedError


class QuoteConnector(ABC):
    @abstractmethod
    def get_quote_range(self, ticker: str, interval: str, range_: str) -> QuoteRangeResponse:
        raise NotImplementedError


@dataclass(frozen=True)
class ChartQuoteResponse(QuoteRangeResponse):
    """Decoded payload of the Yahoo v8 chart endpoint."""

    ticker: str
    payload: dict[str, Any]

    def quotes(self) -> list[ProviderQuote]:
        chart = self.payload.get("chart") or {}
        error = chart.get("error")
        if error:
            detail = error.get("description") if isinstance(error, dict) else error
            raise FetchError(f"Yahoo provider error for {self.ticker}: {one_line_error(str(detail))}")

        results = chart.get("result") or []
        if not results:
            raise FetchError(f"No Yahoo chart results for {self.ticker}.")

        result = results[0]
        quote_items = ((result.get("indicators") or {}).get("quote") or [])
        if not quote_items or not isinstance(quote_items[0], dict):
            raise FetchError(f"No quotes payload in Yahoo response for {self.ticker}.")

        ts_values = result.get("timestamp", []) or []
        quote = quote_items[0]
        opens = quote.get("open", []) or []
        highs = quote.get("high", []) or []
        lows = quote.get("low", []) or []
        closes = quote.get("close", []) or []
        volumes = quote.get("volume", []) or []
        adj_items = ((result.get("indicators") or {}).get("adjclose") or [])
        adjcloses = (adj_items[0].get("adjclose", []) or []) if adj_items and isinstance(adj_items[0], dict) else []

        parsed: list[ProviderQuote] = []
        for idx, ts_val in enumerate(ts_values):
            if idx >= len(opens) or idx >= len(highs) or idx >= len(lows) or idx >= len(closes):
                continue
            o = opens[idx]
            h = highs[idx]
            l = lows[idx]
            c = closes[idx]
            if ts_val is None or o is None or h is None or l is None or c is None:
                continue
            volume = volumes[idx] if idx < len(volumes) else None
            adjclose = adjcloses[idx] if idx < len(adjcloses) else None
            try:
                parsed.append(
                    ProviderQuote(
                        timestamp=int(ts_val),
                        open=float(o),
                        high=float(h),
                        low=float(l),
                        close=float(c),
                        volume=None if volume is None else float(volume),
                        adjclose=None if adjclose is None else float(adjclose),
                    )
                )
            except (TypeError, ValueError) as exc:
                raise FetchError(f"Malformed Yahoo quote at index {idx} for {self.ticker}: {exc}") from exc

        skipped = len(ts_values) - len(parsed)
        if skipped:
            logger.warning("Skipped %d incomplete Yahoo bars for %s", skipped, self.ticker)
        return parsed


class YahooChartConnector(QuoteConnector):
    """Yahoo chart endpoint connector (interval + range query)."""

    BASE_URLS = (
        "https://query1.finance.yahoo.com/v8/finance/chart",
        "https://query2.finance.yahoo.com/v8/finance/chart",
    )

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        base_urls: tuple[str, ...] | None = None,
        timeout_seconds: float = 10.0,
    ):
        try:
            self.session = session if session is not None else requests.Session()
            self.session.headers.update(_YAHOO_HEADERS)
        except Exception as exc:
            raise ConnectorInitError(f"Could not set up Yahoo HTTP session: {exc}") from exc
        self.base_urls = tuple(base_urls or self.BASE_URLS)
        self.timeout_seconds = float(timeout_seconds)

    def get_quote_range(self, ticker: str, interval: str, range_: str) -> ChartQuoteResponse:
        params = {
            "interval": interval,
            "range": range_,
            "events": "div,splits",
        }

        last_error: str | None = None
        for base_url in self.base_urls:
            url = f"{base_url}/{ticker}"
            try:
                response = self.session.get(url, params=params, timeout=self.timeout_seconds)
            except requests.RequestException as exc:
                last_error = str(exc)
                logger.warning("Yahoo request to %s failed: %s", url, last_error)
                continue

            try:
                payload = response.json()
            except ValueError:
                payload = None

            # A chart document (even one carrying a provider error) ends the host loop.
            if isinstance(payload, dict) and isinstance(payload.get("chart"), dict):
                return ChartQuoteResponse(ticker=ticker, payload=payload)

            last_error = f"HTTP {response.status_code} without chart payload"
            logger.warning("Yahoo request to %s failed: %s", url, last_error)

        raise FetchError(f"Yahoo provider unavailable for {ticker}: {one_line_error(str(last_error))}")


@dataclass(frozen=True)
class FrameQuoteResponse(QuoteRangeResponse):
    """yfinance history frame (Open/High/Low/Close/Volume columns, datetime index)."""

    ticker: str
    frame: pd.DataFrame

    def quotes(self) -> list[ProviderQuote]:
        if not isinstance(self.frame, pd.DataFrame):
            raise FetchError(f"Invalid yfinance response for {self.ticker}.")
        if self.frame.empty:
            return []

        work = self.frame.rename(
            columns={
                "Open": "open",
                "High": "high",
                "Low": "low",
                "Close": "close",
                "Volume": "volume",
                "Adj Close": "adjclose",
            }
        )
        missing = {"open", "high", "low", "close"} - set(work.columns)
        if missing:
            raise FetchError(f"No quotes payload in yfinance response for {self.ticker}: missing {sorted(missing)}")

        work = work.copy()
        work.index = pd.to_datetime(work.index, utc=True, errors="coerce")
        work = work[work.index.notna()]
        work = work.dropna(subset=["open", "high", "low", "close"])

        parsed: list[ProviderQuote] = []
        for ts, row in work.iterrows():
            volume = row.get("volume")
            adjclose = row.get("adjclose")
            parsed.append(
                ProviderQuote(
                    timestamp=int(ts.timestamp()),
                    open=float(row["open"]),
                    high=float(row["high"]),
                    low=float(row["low"]),
                    close=float(row["close"]),
                    volume=None if volume is None or pd.isna(volume) else float(volume),
                    adjclose=None if adjclose is None or pd.isna(adjclose) else float(adjclose),
                )
            )
        return parsed


class YFinanceConnector(QuoteConnector):
    """yfinance-backed connector; `range_` maps onto yfinance's `period`."""

    def __init__(self, *, auto_adjust: bool = False):
        try:
            import yfinance as yf
        except ImportError as exc:
            raise ConnectorInitError(f"yfinance is not available: {exc}") from exc
        self._yf = yf
        self._auto_adjust = auto_adjust

    def get_quote_range(self, ticker: str, interval: str, range_: str) -> FrameQuoteResponse:
        try:
            frame = self._yf.Ticker(ticker).history(
                period=range_,
                interval=interval,
                auto_adjust=self._auto_adjust,
            )
        except Exception as exc:
            raise FetchError(f"yfinance request failed for {ticker}: {one_line_error(str(exc))}") from exc
        return FrameQuoteResponse(ticker=ticker, frame=frame)


PROVIDERS = ("yahoo_chart", "yfinance")


def build_connector(provider: str, *, timeout_seconds: float = 10.0) -> QuoteConnector:
    name = str(provider or "").strip().lower()
    if name == "yahoo_chart":
        return YahooChartConnector(timeout_seconds=timeout_seconds)
    if name == "yfinance":
        return YFinanceConnector()
    raise ConnectorInitError(f"Unknown market data provider: {provider!r} (expected one of {', '.join(PROVIDERS)})")
