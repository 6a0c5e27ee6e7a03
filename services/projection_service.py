import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from db import get_db
from models.projection_dto import (
    DailyProjection,
    DailyProjectionResult,
    DateWindow,
    ProjectionBreakdown,
    ProjectionResult,
    SimulationResult,
)
from repositories.accounts_repository import list_accounts
from repositories.credit_cards_repository import list_cards, list_invoices
from repositories.recurrence_exceptions_repository import list_exceptions
from repositories.transactions_repository import list_transactions
from services.invoice_mapper import invoice_events
from services.occurrence_generator import generate_all
from services.period_aggregator import aggregate_period
from utils import config
from utils.dates import add_months, iter_days, normalize_date
from utils.money import as_decimal

logger = logging.getLogger(__name__)

RISK_HIGH = "HIGH"
RISK_MEDIUM = "MEDIUM"
RISK_LOW = "LOW"


@dataclass
class ProjectionInputs:
    accounts: List = field(default_factory=list)
    transactions: List = field(default_factory=list)
    cards: List = field(default_factory=list)
    invoices: List = field(default_factory=list)
    exceptions: List = field(default_factory=list)


def load_inputs(conn=None) -> ProjectionInputs:
    """Read everything a projection needs from the store.

    Opens and closes a connection unless one is passed in.
    """
    own_conn = conn is None
    if own_conn:
        conn = get_db()
    try:
        return ProjectionInputs(
            accounts=list_accounts(conn),
            transactions=list_transactions(conn),
            cards=list_cards(conn),
            invoices=list_invoices(conn),
            exceptions=list_exceptions(conn),
        )
    finally:
        if own_conn:
            conn.close()


# -----------------------------
# Pure calculations
# -----------------------------

def total_balance(accounts) -> Decimal:
    """Sum of balance snapshots, taken as-is."""
    return sum((as_decimal(a.balance) for a in accounts), Decimal("0"))


def stale_balance_warnings(accounts, today: date) -> List[str]:
    """Flag accounts whose snapshot predates ``today``.

    Their balance is still used unchanged; flows between ``balance_date``
    and ``today`` are not replayed.
    """
    warnings = []
    for account in accounts:
        if account.balance_date is not None and account.balance_date < today:
            warnings.append(
                f"Account {account.id} ({account.name}): balance dated "
                f"{account.balance_date.isoformat()} is treated as current"
            )
    return warnings


def _window_flows(transactions, invoices, window, cards, exceptions, warnings):
    occurrences = list(generate_all(transactions, window, exceptions, warnings))
    invoice_due = list(invoice_events(invoices, cards, window, warnings))
    return occurrences, invoice_due


def project_balance(accounts, transactions, invoices, today, target_date,
                    *, cards=(), exceptions=None) -> ProjectionResult:
    """Project the combined balance of ``accounts`` to ``target_date``.

    The window is ``[today, target_date]`` inclusive on both ends, so
    occurrences dated today and on the target date both count. Pure
    function of its inputs.
    """
    today = normalize_date(today)
    target_date = normalize_date(target_date)
    window = DateWindow(today, target_date)

    warnings = stale_balance_warnings(accounts, today)
    current_balance = total_balance(accounts)

    occurrences, invoice_due = _window_flows(
        transactions, invoices, window, cards, exceptions, warnings
    )
    totals = aggregate_period(occurrences, invoice_due)

    projected_balance = current_balance + totals.income - totals.expense - totals.invoices

    return ProjectionResult(
        today=today,
        projection_date=target_date,
        current_balance=current_balance,
        projected_balance=projected_balance,
        breakdown=ProjectionBreakdown(
            initial_balance=current_balance,
            income=totals.income,
            fixed=totals.fixed,
            variable=totals.variable,
            subscription=totals.subscription,
            invoices=totals.invoices,
        ),
        warnings=warnings,
    )


def risk_level(new_projected_balance: Decimal, current_balance: Decimal) -> str:
    if new_projected_balance < 0:
        return RISK_HIGH
    if new_projected_balance < current_balance * config.RISK_MEDIUM_RATIO:
        return RISK_MEDIUM
    return RISK_LOW


def impact_percentage(amount: Decimal, current_balance: Decimal):
    """Share of the current balance a purchase takes, or None for a zero balance."""
    if current_balance == 0:
        return None
    return (amount / current_balance * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def simulate_purchase(accounts, transactions, invoices, amount, purchase_date,
                      *, today, cards=(), exceptions=None, description=None) -> SimulationResult:
    """Projected balance one horizon after ``purchase_date``, minus ``amount``."""
    amount = as_decimal(amount)
    purchase_date = normalize_date(purchase_date)
    projection_date = add_months(purchase_date, config.SIMULATION_HORIZON_MONTHS)

    projection = project_balance(
        accounts, transactions, invoices, today, projection_date,
        cards=cards, exceptions=exceptions,
    )
    new_projected_balance = projection.projected_balance - amount
    can_afford = new_projected_balance >= 0

    return SimulationResult(
        purchase_amount=amount,
        purchase_date=purchase_date,
        projection_date=projection_date,
        current_balance=projection.current_balance,
        current_projected_balance=projection.projected_balance,
        new_projected_balance=new_projected_balance,
        can_afford=can_afford,
        risk_level=risk_level(new_projected_balance, projection.current_balance),
        impact_percentage=impact_percentage(amount, projection.current_balance),
        warning=None if can_afford else "This purchase may leave your balance negative",
        description=description,
        warnings=projection.warnings,
    )


def summarize_simulations(simulations) -> dict:
    """Overall analysis for a batch of independently simulated purchases."""
    count = len(simulations)
    total_amount = sum((s.purchase_amount for s in simulations), Decimal("0"))
    affordable = sum(1 for s in simulations if s.can_afford)
    return {
        "total_purchases": count,
        "total_amount": total_amount,
        "average_amount": (total_amount / count) if count else None,
        "affordable_purchases": affordable,
        "risky_purchases": count - affordable,
        "all_affordable": count > 0 and affordable == count,
    }


def project_daily(accounts, transactions, invoices, today, days,
                  *, cards=(), exceptions=None) -> DailyProjectionResult:
    """End-of-day running balance for each day of ``[today, today + days]``."""
    today = normalize_date(today)
    end_date = today + timedelta(days=days)
    window = DateWindow(today, end_date)

    warnings = stale_balance_warnings(accounts, today)
    starting_balance = total_balance(accounts)

    occurrences, invoice_due = _window_flows(
        transactions, invoices, window, cards, exceptions, warnings
    )

    # --- prepare daily buckets ---
    daily_deltas = {day: Decimal("0") for day in iter_days(today, end_date)}

    for occ in occurrences:
        if occ.type == "income":
            daily_deltas[occ.date] += as_decimal(occ.amount)
        else:
            daily_deltas[occ.date] -= as_decimal(occ.amount)
    for event in invoice_due:
        daily_deltas[event.date] -= as_decimal(event.amount)

    # --- build timeline ---
    timeline = []
    running = starting_balance
    for d in sorted(daily_deltas.keys()):
        running += daily_deltas[d]
        timeline.append(DailyProjection(date=d, projected_balance=running))

    return DailyProjectionResult(
        start_date=today,
        end_date=end_date,
        starting_balance=starting_balance,
        timeline=timeline,
        lowest_balance=min((day.projected_balance for day in timeline), default=starting_balance),
        warnings=warnings,
    )


# -----------------------------
# Store-backed entry points
# -----------------------------

def get_current_balance():
    conn = get_db()
    try:
        accounts = list_accounts(conn)
    finally:
        conn.close()
    return accounts, total_balance(accounts)


def calculate_projection(projection_date, today=None) -> ProjectionResult:
    today = today or date.today()
    inputs = load_inputs()
    result = project_balance(
        inputs.accounts, inputs.transactions, inputs.invoices, today, projection_date,
        cards=inputs.cards, exceptions=inputs.exceptions,
    )
    logger.info(
        "Projected balance to %s: %s -> %s",
        result.projection_date, result.current_balance, result.projected_balance,
    )
    return result


def calculate_simulation(amount, purchase_date=None, today=None, description=None) -> SimulationResult:
    today = today or date.today()
    inputs = load_inputs()
    return simulate_purchase(
        inputs.accounts, inputs.transactions, inputs.invoices, amount,
        purchase_date or today,
        today=today, cards=inputs.cards, exceptions=inputs.exceptions,
        description=description,
    )


def calculate_simulations(purchases, today=None):
    """Simulate each ``(amount, purchase_date, description)`` independently."""
    today = today or date.today()
    inputs = load_inputs()
    simulations = [
        simulate_purchase(
            inputs.accounts, inputs.transactions, inputs.invoices, amount,
            purchase_date or today,
            today=today, cards=inputs.cards, exceptions=inputs.exceptions,
            description=description,
        )
        for amount, purchase_date, description in purchases
    ]
    return simulations, summarize_simulations(simulations)


def calculate_daily_projection(days=None, today=None) -> DailyProjectionResult:
    """Deterministic N-day projection; ``days`` defaults to ``FORECAST_DEFAULT_DAYS``."""
    today = today or date.today()
    inputs = load_inputs()
    return project_daily(
        inputs.accounts, inputs.transactions, inputs.invoices, today,
        config.FORECAST_DEFAULT_DAYS if days is None else days,
        cards=inputs.cards, exceptions=inputs.exceptions,
    )
