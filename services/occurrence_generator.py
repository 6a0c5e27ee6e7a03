"""
Occurrence Generator: expands transactions into dated occurrences.

Pure functions: a transaction plus an inclusive date window in, a lazy
sequence of ``Occurrence`` out. No database access; no side effects beyond
logging integrity warnings.
"""
import logging
from datetime import date

from models.finance import (
    ACTION_DELETE,
    ACTION_EDIT,
    MAX_RECURRING_DAY,
    MIN_DAY,
)
from models.projection_dto import DateWindow, Occurrence
from utils.dates import iter_months

logger = logging.getLogger(__name__)


def _valid_day(value) -> bool:
    return isinstance(value, int) and MIN_DAY <= value <= MAX_RECURRING_DAY


def check_integrity(transaction) -> str | None:
    """Return a warning for a transaction that cannot be projected, else None."""
    if not transaction.is_recurring:
        if transaction.is_subscription:
            return f"Transaction {transaction.id}: subscription must be recurring"
        if transaction.date is None:
            return f"Transaction {transaction.id}: single transaction has no date"
        return None

    if transaction.is_subscription:
        if not _valid_day(transaction.subscription_billing_day):
            return f"Transaction {transaction.id}: subscription billing day missing or out of range"
        if not _valid_day(transaction.subscription_card_due_day):
            return f"Transaction {transaction.id}: subscription card due day missing or out of range"
        return None

    if transaction.day is None:
        return f"Transaction {transaction.id}: recurring transaction has no day"
    if not _valid_day(transaction.day):
        return f"Transaction {transaction.id}: day {transaction.day} outside 1-{MAX_RECURRING_DAY}"
    return None


def index_exceptions(exceptions):
    """Key recurrence exceptions by ``(transaction_id, date)``."""
    index = {}
    for exception in exceptions or ():
        index[(exception.transaction_id, exception.date)] = exception
    return index


def occurrence_day(transaction) -> int:
    """Day of month an occurrence lands on.

    Subscriptions land on the card's due day, the day the charge shows up on
    the statement, not on the nominal billing day.
    """
    if transaction.is_subscription:
        return transaction.subscription_card_due_day
    return transaction.day


def _build_occurrence(transaction, occ_date: date, recurring: bool) -> Occurrence:
    occurrence_id = f"{transaction.id}-{occ_date.isoformat()}" if recurring else str(transaction.id)
    return Occurrence(
        id=occurrence_id,
        source_id=transaction.id,
        description=transaction.description,
        amount=transaction.amount,
        type=transaction.type,
        expense_type=transaction.expense_type,
        date=occ_date,
        is_recurring=recurring,
        subscription_card=transaction.subscription_card,
        subscription_billing_day=transaction.subscription_billing_day,
        subscription_card_due_day=transaction.subscription_card_due_day,
    )


def _apply_exception(occurrence: Occurrence, exception) -> Occurrence | None:
    if exception.action == ACTION_DELETE:
        return None
    if exception.action != ACTION_EDIT:
        return occurrence

    return Occurrence(
        id=occurrence.id,
        source_id=occurrence.source_id,
        description=exception.override_description or occurrence.description,
        amount=(
            exception.override_amount
            if exception.override_amount is not None
            else occurrence.amount
        ),
        type=occurrence.type,
        expense_type=exception.override_expense_type or occurrence.expense_type,
        date=occurrence.date,
        is_recurring=occurrence.is_recurring,
        is_exception=True,
        subscription_card=occurrence.subscription_card,
        subscription_billing_day=occurrence.subscription_billing_day,
        subscription_card_due_day=occurrence.subscription_card_due_day,
    )


def generate_occurrences(transaction, window: DateWindow, exceptions=None):
    """Yield the occurrences of ``transaction`` inside ``window``.

    Args:
        transaction: ``Transaction`` to expand.
        window: inclusive ``DateWindow``.
        exceptions: optional mapping from ``index_exceptions`` (or an
            iterable of ``RecurrenceException``) used to drop or edit single
            occurrences of recurring transactions.

    A transaction failing ``check_integrity`` yields nothing.
    """
    if window.is_empty:
        return

    problem = check_integrity(transaction)
    if problem:
        logger.warning("Skipping transaction in projection: %s", problem)
        return

    if not transaction.is_recurring:
        if transaction.date in window:
            yield _build_occurrence(transaction, transaction.date, recurring=False)
        return

    end_date = transaction.recurrence_end_date
    if end_date is not None and end_date < window.start:
        return

    if exceptions is not None and not isinstance(exceptions, dict):
        exceptions = index_exceptions(exceptions)

    day = occurrence_day(transaction)
    for year, month in iter_months(window.start, window.end):
        occ_date = date(year, month, day)
        if occ_date > window.end:
            break
        if end_date is not None and occ_date > end_date:
            break
        if occ_date < window.start:
            continue

        occurrence = _build_occurrence(transaction, occ_date, recurring=True)
        exception = exceptions.get((transaction.id, occ_date)) if exceptions else None
        if exception is not None:
            occurrence = _apply_exception(occurrence, exception)
        if occurrence is not None:
            yield occurrence


def generate_all(transactions, window: DateWindow, exceptions=None, warnings=None):
    """Expand every transaction, collecting integrity problems into ``warnings``."""
    exception_index = index_exceptions(exceptions) if not isinstance(exceptions, dict) else exceptions
    for transaction in transactions:
        problem = check_integrity(transaction)
        if problem:
            logger.warning("Skipping transaction in projection: %s", problem)
            if warnings is not None:
                warnings.append(problem)
            continue
        yield from generate_occurrences(transaction, window, exception_index)
