from __future__ import annotations

import math

from volchart.core.marketdata.quote import QuoteRecord
from volchart.core.volatility.classifier import classify, is_volatile, relative_range


def _bar(ts: int, high: float, low: float, close: float, open_: float = 100.0) -> QuoteRecord:
    return QuoteRecord(timestamp=ts, open=open_, high=high, low=low, close=close)


def test_three_day_scenario_marks_only_wide_range_day() -> None:
    series = [
        _bar(1700000000, high=101.0, low=100.0, close=100.0),
        _bar(1700086400, high=105.0, low=100.0, close=100.0),
        _bar(1700172800, high=100.0, low=100.0, close=100.0),
    ]

    markers = classify(series)

    assert len(markers) == 1
    assert markers[0].timestamp == 1700086400
    assert markers[0].close == 100.0
    assert markers[0].date_label == "2023-11-15"


def test_boundary_ratio_is_not_volatile() -> None:
    bar = _bar(0, high=102.0, low=100.0, close=100.0)

    assert relative_range(bar) == 0.02
    assert is_volatile(bar) is False
    assert is_volatile(_bar(0, high=102.01, low=100.0, close=100.0)) is True


def test_zero_close_is_never_volatile() -> None:
    assert relative_range(_bar(0, high=5.0, low=1.0, close=0.0)) is None
    assert is_volatile(_bar(0, high=5.0, low=1.0, close=0.0)) is False
    assert is_volatile(_bar(0, high=0.0, low=0.0, close=0.0)) is False
    assert classify([_bar(0, high=5.0, low=1.0, close=0.0)]) == []


def test_nan_prices_are_not_volatile() -> None:
    assert is_volatile(_bar(0, high=math.nan, low=1.0, close=2.0)) is False


def test_classify_is_order_preserving_subsequence() -> None:
    series = [
        _bar(300, high=110.0, low=100.0, close=105.0),
        _bar(100, high=100.5, low=100.0, close=100.0),
        _bar(200, high=120.0, low=100.0, close=110.0),
        _bar(50, high=101.0, low=100.0, close=100.0),
    ]

    markers = classify(series)

    assert [m.timestamp for m in markers] == [300, 200]
    assert len(markers) <= len(series)


def test_markers_keep_open_placeholder_and_range() -> None:
    marker = classify([_bar(0, high=110.0, low=100.0, close=105.0, open_=101.0)])[0]

    assert marker.open == 0.0
    assert (marker.high, marker.low, marker.close) == (110.0, 100.0, 105.0)


def test_custom_threshold_and_empty_series() -> None:
    bar = _bar(0, high=101.0, low=100.0, close=100.0)

    assert classify([bar], threshold=0.005)[0].timestamp == 0
    assert classify([]) == []


def test_classify_does_not_mutate_input() -> None:
    series = [_bar(0, high=110.0, low=100.0, close=100.0)]
    snapshot = list(series)

    classify(series)

    assert series == snapshot
