"""Display helpers for the string-typed figures in ETFData."""

from __future__ import annotations

import re
from typing import Optional

from etf_explorer.models.schemas import (
    Alternative,
    ChartPoint,
    ETFData,
    ETFDisplay,
    Holding,
    Performance,
    PerformanceTile,
)

_LEADING_NUMBER = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))")


def _leading_number(value: str) -> Optional[float]:
    match = _LEADING_NUMBER.match(re.sub(r"[+%,]", "", value or ""))
    if not match:
        return None
    return float(match.group(1))


def parse_percent(value: str) -> float:
    """Numeric value of a percentage string; anything unreadable counts as 0."""
    number = _leading_number(value)
    return number if number is not None else 0.0


def format_percent(value: str) -> str:
    number = _leading_number(value)
    if number is None:
        return value
    sign = "+" if number > 0 else ""
    return f"{sign}{number:.2f}%"


def format_price(value: str) -> str:
    if value.startswith("$"):
        return value
    return f"${value}"


def format_holding_percentage(value: str) -> str:
    if "%" in value:
        return value
    return f"{value}%"


def performance_chart(performance: Performance) -> list[ChartPoint]:
    """Bar chart points, shortest period first."""
    points = [
        ("3M", performance.three_month),
        ("6M", performance.six_month),
        ("YTD", performance.ytd),
        ("1Y", performance.one_year),
    ]
    chart = []
    for name, raw in points:
        value = parse_percent(raw)
        chart.append(ChartPoint(name=name, value=value, positive=value >= 0))
    return chart


def _is_non_negative(value: str) -> bool:
    # Unreadable figures are shown as losses, not gains.
    number = _leading_number(value)
    return number is not None and number >= 0


def performance_tiles(performance: Performance) -> list[PerformanceTile]:
    tiles = [
        ("YTD", performance.ytd),
        ("3M", performance.three_month),
        ("6M", performance.six_month),
        ("1Y", performance.one_year),
    ]
    return [
        PerformanceTile(label=label, value=format_percent(raw), positive=_is_non_negative(raw))
        for label, raw in tiles
    ]


def build_display(data: ETFData) -> ETFDisplay:
    return ETFDisplay(
        current_price=format_price(data.current_price),
        performance=performance_tiles(data.performance),
        chart=performance_chart(data.performance),
        holdings=[
            Holding(name=h.name, percentage=format_holding_percentage(h.percentage))
            for h in data.holdings
        ],
        alternatives=[
            Alternative(ticker=alt.ticker, price=format_price(alt.price))
            for alt in data.alternatives
        ],
    )
