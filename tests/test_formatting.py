import pytest

from etf_explorer.models.schemas import ETFData, Performance
from etf_explorer.services import formatting


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("+12.4%", 12.4),
        ("-3.25%", -3.25),
        ("7", 7.0),
        ("1,204.5%", 1204.5),
        ("5.1% (approx.)", 5.1),
        ("N/A", 0.0),
        ("", 0.0),
    ],
)
def test_parse_percent(raw, expected):
    """Test non-numeric content counts as zero instead of failing."""
    assert formatting.parse_percent(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12.4%", "+12.40%"),
        ("+3.1", "+3.10%"),
        ("-1.234%", "-1.23%"),
        ("0", "0.00%"),
        ("unknown", "unknown"),
    ],
)
def test_format_percent(raw, expected):
    assert formatting.format_percent(raw) == expected


def test_format_price():
    assert formatting.format_price("$512.30") == "$512.30"
    assert formatting.format_price("512.30") == "$512.30"


def test_format_holding_percentage():
    assert formatting.format_holding_percentage("7.1%") == "7.1%"
    assert formatting.format_holding_percentage("6.8") == "6.8%"


def test_performance_chart_order_and_signs():
    """Test bars run 3M, 6M, YTD, 1Y with unreadable values at zero."""
    performance = Performance(ytd="+12.4%", three_month="-3.1%", six_month="n/a", one_year="24%")

    chart = formatting.performance_chart(performance)

    assert [(p.name, p.value, p.positive) for p in chart] == [
        ("3M", -3.1, False),
        ("6M", 0.0, True),
        ("YTD", 12.4, True),
        ("1Y", 24.0, True),
    ]


def test_build_display(etf_payload):
    """Test prices and holding weights are normalized for display."""
    data = ETFData.model_validate(etf_payload)

    display = formatting.build_display(data)

    assert display.current_price == "$512.30"
    assert [t.label for t in display.performance] == ["YTD", "3M", "6M", "1Y"]
    assert display.performance[2].value == "-1.20%"
    assert display.performance[2].positive is False
    assert [h.percentage for h in display.holdings] == ["7.1%", "6.8%"]
    assert [a.price for a in display.alternatives] == ["$558.10", "$561.00"]


def test_performance_tiles_unreadable_value_is_not_positive():
    """Test tiles show unreadable figures unchanged and not as gains."""
    performance = Performance(ytd="N/A", three_month="0%", six_month="-2%", one_year="")

    tiles = formatting.performance_tiles(performance)

    assert [(t.label, t.value, t.positive) for t in tiles] == [
        ("YTD", "N/A", False),
        ("3M", "0.00%", True),
        ("6M", "-2.00%", False),
        ("1Y", "", False),
    ]
