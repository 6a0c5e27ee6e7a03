from datetime import date, timedelta
from decimal import Decimal

from conftest import make_account, make_card, make_invoice, make_tx
from models.projection_dto import DateWindow
from services.invoice_mapper import invoice_events
from services.occurrence_generator import generate_all
from services.period_aggregator import aggregate_period
from services.projection_service import (
    impact_percentage,
    project_balance,
    project_daily,
    risk_level,
    simulate_purchase,
    summarize_simulations,
)

TODAY = date(2025, 1, 1)


def _salary_and_rent():
    return [
        make_tx(id=1, description="Salary", amount="5000.00", type="income", is_recurring=True, day=5),
        make_tx(id=2, description="Rent", amount="1200.00", expense_type="fixed", is_recurring=True, day=15),
    ]


def test_month_end_projection():
    accounts = [make_account(balance="1000.00", balance_date=TODAY)]
    result = project_balance(accounts, _salary_and_rent(), [], TODAY, date(2025, 1, 31))

    assert result.current_balance == Decimal("1000.00")
    assert result.projected_balance == Decimal("4800.00")
    assert result.breakdown.income == Decimal("5000.00")
    assert result.breakdown.fixed == Decimal("1200.00")
    assert result.warnings == []


def test_projection_to_today_counts_todays_occurrences():
    accounts = [make_account(balance="100.00")]
    transactions = [make_tx(id=1, amount="40.00", type="income", date=TODAY)]
    result = project_balance(accounts, transactions, [], TODAY, TODAY)
    assert result.projected_balance == Decimal("140.00")


def test_target_before_today_projects_nothing():
    accounts = [make_account(balance="100.00")]
    result = project_balance(accounts, _salary_and_rent(), [], TODAY, date(2024, 12, 1))
    assert result.projected_balance == Decimal("100.00")


def test_invoices_reduce_projection():
    accounts = [make_account(balance="1000.00")]
    cards = [make_card(id=1, due_day=10)]
    invoices = [make_invoice(credit_card_id=1, month="2025-01", value="800.00")]
    result = project_balance(accounts, [], invoices, TODAY, date(2025, 1, 31), cards=cards)
    assert result.projected_balance == Decimal("200.00")
    assert result.breakdown.invoices == Decimal("800.00")


def test_stale_balance_is_used_as_is_with_warning():
    accounts = [make_account(balance="500.00", balance_date=date(2024, 12, 1))]
    result = project_balance(accounts, [], [], TODAY, date(2025, 1, 31))
    assert result.current_balance == Decimal("500.00")
    assert len(result.warnings) == 1


def test_projection_is_additive_over_adjacent_windows():
    accounts = [make_account(balance="1000.00")]
    transactions = _salary_and_rent()
    cards = [make_card(id=1, due_day=20)]
    invoices = [
        make_invoice(id=1, month="2025-01", value="300.00"),
        make_invoice(id=2, month="2025-03", value="150.00"),
    ]
    x, y = date(2025, 2, 10), date(2025, 4, 30)

    to_x = project_balance(accounts, transactions, invoices, TODAY, x, cards=cards)
    to_y = project_balance(accounts, transactions, invoices, TODAY, y, cards=cards)

    window = DateWindow(x + timedelta(days=1), y)
    totals = aggregate_period(
        generate_all(transactions, window),
        invoice_events(invoices, cards, window),
    )
    assert to_x.projected_balance + totals.net == to_y.projected_balance


def test_projection_is_idempotent():
    accounts = [make_account(balance="1000.00")]
    first = project_balance(accounts, _salary_and_rent(), [], TODAY, date(2025, 6, 30))
    second = project_balance(accounts, _salary_and_rent(), [], TODAY, date(2025, 6, 30))
    assert first == second


def test_unaffordable_purchase():
    accounts = [make_account(balance="300.00")]
    result = simulate_purchase(accounts, [], [], Decimal("500.00"), date(2025, 1, 10), today=date(2025, 1, 10))

    assert result.projection_date == date(2025, 2, 10)
    assert result.current_projected_balance == Decimal("300.00")
    assert result.new_projected_balance == Decimal("-200.00")
    assert result.can_afford is False
    assert result.risk_level == "HIGH"
    assert result.warning
    assert result.impact_percentage == Decimal("166.67")


def test_purchase_with_zero_balance_has_no_impact_percentage():
    transactions = [make_tx(id=1, amount="1000.00", type="income", date=date(2025, 1, 20))]
    result = simulate_purchase([], transactions, [], Decimal("100.00"), TODAY, today=TODAY)
    assert result.current_balance == 0
    assert result.impact_percentage is None
    assert result.can_afford is True


def test_risk_levels():
    assert risk_level(Decimal("-1"), Decimal("1000")) == "HIGH"
    assert risk_level(Decimal("50"), Decimal("1000")) == "MEDIUM"
    assert risk_level(Decimal("100"), Decimal("1000")) == "LOW"
    assert impact_percentage(Decimal("10"), Decimal("0")) is None


def test_summarize_simulations():
    accounts = [make_account(balance="1000.00")]
    simulations = [
        simulate_purchase(accounts, [], [], Decimal(amount), TODAY, today=TODAY)
        for amount in ("100.00", "2000.00")
    ]
    summary = summarize_simulations(simulations)
    assert summary["total_purchases"] == 2
    assert summary["total_amount"] == Decimal("2100.00")
    assert summary["average_amount"] == Decimal("1050.00")
    assert summary["affordable_purchases"] == 1
    assert summary["risky_purchases"] == 1
    assert summary["all_affordable"] is False


def test_daily_projection_running_balance():
    accounts = [make_account(balance="100.00")]
    transactions = [
        make_tx(id=1, amount="50.00", expense_type="variable", date=date(2025, 1, 2)),
        make_tx(id=2, amount="500.00", type="income", is_recurring=True, day=4),
    ]
    result = project_daily(accounts, transactions, [], TODAY, 4)

    assert result.start_date == TODAY
    assert result.end_date == date(2025, 1, 5)
    assert [d.projected_balance for d in result.timeline] == [
        Decimal("100.00"),
        Decimal("50.00"),
        Decimal("50.00"),
        Decimal("550.00"),
        Decimal("550.00"),
    ]
    assert result.lowest_balance == Decimal("50.00")


def test_daily_projection_last_day_matches_point_projection():
    accounts = [make_account(balance="1000.00")]
    daily = project_daily(accounts, _salary_and_rent(), [], TODAY, 30)
    point = project_balance(accounts, _salary_and_rent(), [], TODAY, date(2025, 1, 31))
    assert daily.timeline[-1].projected_balance == point.projected_balance
