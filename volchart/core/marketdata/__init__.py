from __future__ import annotations

from volchart.core.marketdata.connectors import (
    ChartQuoteResponse,
    FrameQuoteResponse,
    ProviderQuote,
    QuoteConnector,
    QuoteRangeResponse,
    YahooChartConnector,
    YFinanceConnector,
    build_connector,
)
from volchart.core.marketdata.fetcher import fetch, to_quote_record
from volchart.core.marketdata.quote import QuoteRecord

__all__ = [
    "ChartQuoteResponse",
    "FrameQuoteResponse",
    "ProviderQuote",
    "QuoteConnector",
    "QuoteRangeResponse",
    "QuoteRecord",
    "YFinanceConnector",
    "YahooChartConnector",
    "build_connector",
    "fetch",
    "to_quote_record",
]
