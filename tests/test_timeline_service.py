from datetime import date

from conftest import make_card, make_exception, make_invoice, make_tx
from models.projection_dto import DateWindow
from services.timeline_service import build_timeline

MARCH = DateWindow(date(2025, 3, 1), date(2025, 3, 31))


def test_timeline_merges_occurrences_and_invoices():
    transactions = [
        make_tx(id=1, description="Salary", amount="4000.00", type="income", is_recurring=True, day=5),
        make_tx(id=2, description="Gym", amount="80.00", expense_type="fixed", is_recurring=True, day=5),
        make_tx(id=3, description="Trip", amount="600.00", expense_type="variable", date=date(2025, 3, 22)),
    ]
    result = build_timeline(
        transactions,
        [make_invoice(id=9, credit_card_id=1, month="2025-03", value="250.00")],
        MARCH,
        cards=[make_card(id=1, due_day=5)],
    )

    assert [(e.date.day, e.bucket) for e in result["events"]] == [
        (5, "income"),
        (5, "expense"),
        (5, "invoice"),
        (22, "expense"),
    ]
    assert [d for d, _ in result["grouped"]] == [date(2025, 3, 5), date(2025, 3, 22)]
    assert result["date_range"] == {"start": MARCH.start, "end": MARCH.end}
    assert result["warnings"] == []


def test_timeline_applies_exceptions_and_reports_broken_rows():
    transactions = [
        make_tx(id=1, is_recurring=True, day=10),
        make_tx(id=2, is_recurring=True, day=None),
    ]
    exceptions = [make_exception(1, date(2025, 3, 10), action="delete")]
    result = build_timeline(transactions, [], MARCH, exceptions=exceptions)

    assert result["events"] == []
    assert len(result["warnings"]) == 1
