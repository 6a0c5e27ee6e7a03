from datetime import date
from decimal import Decimal

import pytest

from conftest import make_account, make_card, make_invoice, make_tx
from services.kpi_service import build_kpis, calculate_date_range, compute_kpis
from services.period_aggregator import aggregate_period
from services.projection_service import ProjectionInputs
from utils.errors import InvalidInputError

TODAY = date(2025, 1, 15)


def test_current_month_range():
    window = calculate_date_range("current", today=TODAY)
    assert (window.start, window.end) == (date(2025, 1, 1), date(2025, 1, 31))


def test_next_month_range():
    window = calculate_date_range("next", today=TODAY)
    assert (window.start, window.end) == (date(2025, 2, 1), date(2025, 2, 28))


def test_next_month_range_wraps_year():
    window = calculate_date_range("next", today=date(2024, 12, 31))
    assert (window.start, window.end) == (date(2025, 1, 1), date(2025, 1, 31))


def test_three_month_range():
    window = calculate_date_range("3months", today=TODAY)
    assert (window.start, window.end) == (date(2025, 1, 1), date(2025, 3, 31))


def test_custom_range():
    window = calculate_date_range("custom", "2025-03-01", "2025-03-10", today=TODAY)
    assert (window.start, window.end) == (date(2025, 3, 1), date(2025, 3, 10))


@pytest.mark.parametrize("start,end", [
    (None, "2025-03-10"),
    ("2025-03-01", None),
    ("2025-03-10", "2025-03-01"),
    ("03/01/2025", "2025-03-10"),
])
def test_invalid_custom_range(start, end):
    with pytest.raises(InvalidInputError):
        calculate_date_range("custom", start, end, today=TODAY)


def test_unknown_period():
    with pytest.raises(InvalidInputError):
        calculate_date_range("yearly", today=TODAY)


def test_empty_period_kpis_are_zero():
    kpis = {k["key"]: k for k in build_kpis(aggregate_period([]), [])}
    assert kpis["income"]["value"] == 0
    assert kpis["expense"]["count"] == 0
    assert kpis["performance"]["value"] == 0
    assert kpis["balance"]["value"] == 0


def test_compute_kpis_counts_invoices_as_expenses():
    inputs = ProjectionInputs(
        accounts=[make_account(balance="700.00")],
        transactions=[
            make_tx(id=1, amount="3000.00", type="income", is_recurring=True, day=5),
            make_tx(id=2, amount="900.00", expense_type="fixed", is_recurring=True, day=10),
            make_tx(id=3, amount="100.00", expense_type="variable", date=date(2025, 2, 2)),
        ],
        cards=[make_card(id=1, due_day=20)],
        invoices=[make_invoice(credit_card_id=1, month="2025-01", value="400.00")],
    )
    window = calculate_date_range("current", today=TODAY)
    result = compute_kpis(inputs, window)
    kpis = {k["key"]: k for k in result["kpis"]}

    assert kpis["income"]["value"] == Decimal("3000.00")
    assert kpis["fixed"]["value"] == Decimal("900.00")
    assert kpis["expense"]["value"] == Decimal("1300.00")
    assert kpis["expense"]["count"] == 2
    assert kpis["performance"]["value"] == Decimal("1700.00")
    assert kpis["balance"]["value"] == Decimal("700.00")
    assert result["period_transactions"] == 2
