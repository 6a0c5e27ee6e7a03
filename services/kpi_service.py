import logging
from datetime import date

from models.projection_dto import DateWindow
from services.invoice_mapper import invoice_events
from services.occurrence_generator import generate_all
from services.period_aggregator import aggregate_period
from services.projection_service import load_inputs, total_balance
from utils.dates import add_months, month_end, month_start, parse_iso_date
from utils.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

PERIODS = ("current", "next", "3months", "custom")


def calculate_date_range(period="current", custom_start=None, custom_end=None, today=None) -> DateWindow:
    """Resolve a period filter into an inclusive ``DateWindow``.

    ``3months`` runs from the first of this month to the end of the month
    after next. ``custom`` needs both ISO dates and start <= end.
    """
    today = today or date.today()

    if period == "current":
        return DateWindow(month_start(today), month_end(today))
    if period == "next":
        following = add_months(month_start(today), 1)
        return DateWindow(following, month_end(following))
    if period == "3months":
        return DateWindow(month_start(today), month_end(add_months(month_start(today), 2)))
    if period == "custom":
        if not custom_start or not custom_end:
            raise InvalidInputError("custom_start and custom_end are required for a custom period")
        start = parse_iso_date(custom_start, "custom_start")
        end = parse_iso_date(custom_end, "custom_end")
        if start > end:
            raise InvalidInputError("custom_start must be on or before custom_end")
        return DateWindow(start, end)

    raise InvalidInputError(f"Invalid period {period!r}. Use one of: {', '.join(PERIODS)}")


def _subtitle(count, empty, filled):
    return empty if count == 0 else filled.format(count=count)


def build_kpis(totals, accounts) -> list:
    """Turn ``PeriodTotals`` plus account balances into dashboard KPI cards."""
    counts = totals.counts
    expense_count = counts["expense"] + counts["invoices"]
    performance = totals.net
    account_count = len(accounts)

    if performance > 0:
        performance_subtitle = "Positive balance for the period"
    elif performance < 0:
        performance_subtitle = "Negative balance for the period"
    else:
        performance_subtitle = "Break-even for the period"

    return [
        {
            "key": "income",
            "title": "Income",
            "value": totals.income,
            "count": counts["income"],
            "subtitle": _subtitle(counts["income"], "No income in the period", "{count} income item(s) in the period"),
        },
        {
            "key": "expense",
            "title": "Expenses",
            "value": totals.expense + totals.invoices,
            "count": expense_count,
            "subtitle": _subtitle(expense_count, "No expenses in the period", "{count} expense item(s) in the period"),
        },
        {
            "key": "fixed",
            "title": "Fixed",
            "value": totals.fixed,
            "count": counts["fixed"],
            "subtitle": _subtitle(counts["fixed"], "No fixed expenses in the period", "{count} fixed expense(s) in the period"),
        },
        {
            "key": "variable",
            "title": "Variable",
            "value": totals.variable,
            "count": counts["variable"],
            "subtitle": _subtitle(counts["variable"], "No variable expenses in the period", "{count} variable expense(s) in the period"),
        },
        {
            "key": "subscription",
            "title": "Subscriptions",
            "value": totals.subscription,
            "count": counts["subscription"],
            "subtitle": _subtitle(counts["subscription"], "No subscriptions in the period", "{count} subscription(s) in the period"),
        },
        {
            "key": "performance",
            "title": "Period Performance",
            "value": performance,
            "count": 0,
            "subtitle": performance_subtitle,
        },
        {
            "key": "balance",
            "title": "Account Balance",
            "value": total_balance(accounts),
            "count": account_count,
            "subtitle": _subtitle(account_count, "No accounts configured", "{count} account(s) configured"),
        },
    ]


def compute_kpis(inputs, window: DateWindow) -> dict:
    """Pure KPI computation over already-loaded inputs."""
    warnings = []
    occurrences = list(generate_all(inputs.transactions, window, inputs.exceptions, warnings))
    invoice_due = list(invoice_events(inputs.invoices, inputs.cards, window, warnings))
    totals = aggregate_period(occurrences, invoice_due)

    return {
        "kpis": build_kpis(totals, inputs.accounts),
        "date_range": {"start": window.start, "end": window.end},
        "period_transactions": len(occurrences),
        "warnings": warnings,
    }


def calculate_kpis(period="current", custom_start=None, custom_end=None, today=None) -> dict:
    window = calculate_date_range(period, custom_start, custom_end, today)
    result = compute_kpis(load_inputs(), window)
    logger.info("Computed KPIs for %s..%s", window.start, window.end)
    return result


def get_kpi(key, period="current", custom_start=None, custom_end=None, today=None) -> dict:
    result = calculate_kpis(period, custom_start, custom_end, today)
    for kpi in result["kpis"]:
        if kpi["key"] == key:
            return kpi
    raise NotFoundError(f"KPI {key!r} not found")
