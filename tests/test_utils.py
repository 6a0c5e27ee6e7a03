from datetime import date, datetime
from decimal import Decimal

import pytest

from utils.dates import add_months, clamped_date, iter_months, month_end, normalize_date, parse_month
from utils.errors import InvalidInputError
from utils.money import as_decimal, parse_money, to_money


def test_clamped_date():
    assert clamped_date(2025, 2, 31) == date(2025, 2, 28)
    assert clamped_date(2024, 2, 31) == date(2024, 2, 29)
    assert clamped_date(2025, 4, 15) == date(2025, 4, 15)


def test_add_months_clamps_and_wraps():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 12, 10), 1) == date(2026, 1, 10)
    assert month_end(date(2025, 4, 2)) == date(2025, 4, 30)


def test_iter_months_crosses_year():
    assert list(iter_months(date(2024, 11, 20), date(2025, 1, 2))) == [(2024, 11), (2024, 12), (2025, 1)]


def test_normalize_date():
    assert normalize_date("2025-03-04") == date(2025, 3, 4)
    assert normalize_date(datetime(2025, 3, 4, 12, 0)) == date(2025, 3, 4)
    with pytest.raises(InvalidInputError):
        normalize_date("2025-02-30")
    with pytest.raises(InvalidInputError):
        parse_month("2025-13")


def test_money_helpers():
    assert parse_money("$1,234.50") == Decimal("1234.50")
    assert parse_money("(12.00)") == Decimal("-12.00")
    assert to_money(39.9) == Decimal("39.90")
    assert as_decimal(0.1) + as_decimal(0.2) == Decimal("0.3")
    with pytest.raises(ValueError):
        parse_money("abc")
