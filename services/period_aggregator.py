"""
Period Aggregator: buckets occurrences and invoice events and sums them.

Amounts are always non-negative; the bucket alone decides whether a value
adds to or subtracts from a balance.
"""
from models.finance import FIXED, INCOME, SUBSCRIPTION
from models.projection_dto import PeriodTotals
from utils.money import as_decimal

# Display order within a single date
TYPE_ORDER = {"income": 1, "expense": 2, "invoice": 3}


def aggregate_period(occurrences, invoice_events=()) -> PeriodTotals:
    """Sum occurrences and invoice events into a ``PeriodTotals``.

    Expenses carrying no expense type are counted as variable.
    """
    totals = PeriodTotals()

    for occ in occurrences:
        amount = as_decimal(occ.amount)
        if occ.type == INCOME:
            totals.income += amount
            totals.counts["income"] += 1
            continue

        totals.expense += amount
        totals.counts["expense"] += 1
        if occ.expense_type == FIXED:
            totals.fixed += amount
            totals.counts["fixed"] += 1
        elif occ.expense_type == SUBSCRIPTION:
            totals.subscription += amount
            totals.counts["subscription"] += 1
        else:
            totals.variable += amount
            totals.counts["variable"] += 1

    for event in invoice_events:
        totals.invoices += as_decimal(event.amount)
        totals.counts["invoices"] += 1

    return totals


def event_sort_key(event):
    return (event.date, TYPE_ORDER.get(event.bucket, 99), -event.amount)


def sort_events(events):
    """Order by date; same date: income, expense, invoice; then larger amounts first."""
    return sorted(events, key=event_sort_key)


def group_by_date(events):
    """Return ``[(date, [events...]), ...]`` in ascending date order."""
    groups = {}
    for event in sort_events(events):
        groups.setdefault(event.date, []).append(event)
    return list(groups.items())
