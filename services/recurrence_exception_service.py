import logging

from db import get_db
from repositories.recurrence_exceptions_repository import (
    delete_exception as repo_delete_exception,
    list_exceptions,
    upsert_exception,
)
from repositories.transactions_repository import get_transaction_by_id
from services.occurrence_generator import occurrence_day
from utils.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def get_exceptions(transaction_id):
    conn = get_db()
    try:
        if get_transaction_by_id(conn, transaction_id) is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return list_exceptions(conn, transaction_id)
    finally:
        conn.close()


def save_exception(transaction_id, data):
    """Edit or suppress one occurrence of a recurring transaction.

    The date must be one the transaction actually occurs on.
    """
    conn = get_db()
    try:
        transaction = get_transaction_by_id(conn, transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        if not transaction.is_recurring:
            raise InvalidInputError("Recurrence exceptions only apply to recurring transactions")
        if data.date.day != occurrence_day(transaction):
            raise InvalidInputError(
                f"Transaction {transaction_id} does not occur on {data.date.isoformat()}"
            )
        if transaction.recurrence_end_date and data.date > transaction.recurrence_end_date:
            raise InvalidInputError("Date is after the transaction's recurrence end date")

        exception = upsert_exception(
            conn,
            transaction_id,
            data.date,
            data.action,
            override_amount=data.override_amount,
            override_description=data.override_description,
            override_expense_type=data.override_expense_type,
        )
    finally:
        conn.close()

    logger.info("Recurrence exception (%s) saved for transaction %s on %s",
                data.action, transaction_id, data.date)
    return exception


def remove_exception(exception_id):
    conn = get_db()
    try:
        removed = repo_delete_exception(conn, exception_id)
    finally:
        conn.close()
    if not removed:
        raise NotFoundError(f"Recurrence exception {exception_id} not found")
