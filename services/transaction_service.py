import logging

from db import get_db
from models.finance import INCOME
from models.schemas import TransactionCreate, revalidate
from repositories.transactions_repository import (
    TRANSACTION_COLUMNS,
    delete_transaction as repo_delete_transaction,
    get_transaction_by_id as repo_get_transaction_by_id,
    insert_transaction as repo_insert_transaction,
    list_transactions as repo_list_transactions,
    update_transaction as repo_update_transaction,
)
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def get_all_transactions(type=None, expense_type=None, limit=None, offset=0):
    """Return transactions, optionally filtering by type / expense type.

    Opens and closes a database connection on the caller’s behalf.
    """
    conn = get_db()
    try:
        return repo_list_transactions(
            conn, type=type, expense_type=expense_type, limit=limit, offset=offset
        )
    finally:
        conn.close()


def get_transaction(transaction_id):
    conn = get_db()
    try:
        transaction = repo_get_transaction_by_id(conn, transaction_id)
    finally:
        conn.close()
    if transaction is None:
        raise NotFoundError(f"Transaction {transaction_id} not found")
    return transaction


def add_transaction(data: TransactionCreate):
    """Insert an already-validated transaction and return the stored row."""
    conn = get_db()
    try:
        transaction_id = repo_insert_transaction(conn, data.model_dump())
        transaction = repo_get_transaction_by_id(conn, transaction_id)
    finally:
        conn.close()
    logger.info("Transaction %s created (%s, recurring=%s)", transaction.id, transaction.type, transaction.is_recurring)
    return transaction


def update_transaction(transaction_id, changes: dict):
    """Merge ``changes`` over the stored row and re-validate the whole record.

    Partial payloads never reach the store without passing the same checks
    as a create.
    """
    existing = get_transaction(transaction_id)
    changes = dict(changes)
    # an expense turned into income drops its expense type
    if changes.get("type") == INCOME and "expense_type" not in changes:
        changes["expense_type"] = None
    validated = revalidate(TransactionCreate, existing, TRANSACTION_COLUMNS, changes)

    conn = get_db()
    try:
        repo_update_transaction(conn, transaction_id, validated.model_dump())
        return repo_get_transaction_by_id(conn, transaction_id)
    finally:
        conn.close()


def delete_transaction(transaction_id):
    get_transaction(transaction_id)
    conn = get_db()
    try:
        repo_delete_transaction(conn, transaction_id)
    finally:
        conn.close()
    logger.info("Transaction %s deleted", transaction_id)

