from __future__ import annotations

import asyncio

from volchart.core.errors import FetchError, one_line_error
from volchart.core.marketdata.connectors import ProviderQuote, QuoteConnector
from volchart.core.marketdata.quote import QuoteRecord


async def fetch(connector: QuoteConnector, ticker: str, interval: str, range_: str) -> list[QuoteRecord]:
    """Fetch one quote range and map it to QuoteRecords (provider order kept)."""
    try:
        response = await asyncio.to_thread(connector.get_quote_range, ticker, interval, range_)
        provider_quotes = response.quotes()
    except FetchError:
        raise
    except Exception as exc:
        raise FetchError(f"{type(exc).__name__}: {one_line_error(str(exc))}") from exc

    return [to_quote_record(quote) for quote in provider_quotes]


def to_quote_record(quote: ProviderQuote) -> QuoteRecord:
    return QuoteRecord(
        timestamp=int(quote.timestamp),
        open=quote.open,
        high=quote.high,
        low=quote.low,
        close=quote.close,
    )
