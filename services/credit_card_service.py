import logging

from db import get_db
from models.finance import CreditCardInvoice
from models.schemas import CreditCardCreate, revalidate
from repositories.credit_cards_repository import (
    CARD_COLUMNS,
    delete_card as repo_delete_card,
    delete_invoice as repo_delete_invoice,
    get_card_by_id,
    get_invoice_for_month,
    insert_card,
    list_cards,
    list_invoices,
    update_card as repo_update_card,
    upsert_invoice,
)
from repositories.transactions_repository import list_transactions
from services.invoice_mapper import classify_subscriptions
from utils.dates import parse_month
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def _require_card(conn, card_id):
    card = get_card_by_id(conn, card_id)
    if card is None:
        raise NotFoundError(f"Credit card {card_id} not found")
    return card


def get_all_cards():
    conn = get_db()
    try:
        return list_cards(conn)
    finally:
        conn.close()


def get_card(card_id):
    conn = get_db()
    try:
        return _require_card(conn, card_id)
    finally:
        conn.close()


def add_card(data):
    conn = get_db()
    try:
        card_id = insert_card(conn, **data.model_dump())
        return get_card_by_id(conn, card_id)
    finally:
        conn.close()


def update_card(card_id, changes: dict):
    conn = get_db()
    try:
        existing = _require_card(conn, card_id)
        validated = revalidate(CreditCardCreate, existing, CARD_COLUMNS, changes)
        repo_update_card(conn, card_id, validated.model_dump())
        return get_card_by_id(conn, card_id)
    finally:
        conn.close()


def delete_card(card_id):
    conn = get_db()
    try:
        _require_card(conn, card_id)
        repo_delete_card(conn, card_id)
    finally:
        conn.close()
    logger.info("Credit card %s deleted with its invoices", card_id)


def get_card_invoices(card_id):
    conn = get_db()
    try:
        _require_card(conn, card_id)
        return list_invoices(conn, card_id)
    finally:
        conn.close()


def save_invoice(card_id, month, value):
    """Upsert: at most one invoice per (card, month)."""
    conn = get_db()
    try:
        _require_card(conn, card_id)
        invoice, created = upsert_invoice(conn, card_id, month, value)
    finally:
        conn.close()
    logger.info("Invoice %s for card %s %s", month, card_id, "created" if created else "updated")
    return invoice, created


def remove_invoice(card_id, invoice_id):
    conn = get_db()
    try:
        _require_card(conn, card_id)
        removed = repo_delete_invoice(conn, card_id, invoice_id)
    finally:
        conn.close()
    if not removed:
        raise NotFoundError(f"Invoice {invoice_id} not found for card {card_id}")


def get_invoice_breakdown(card_id, month):
    """Which of the card's subscriptions are already on the ``month`` invoice.

    Works for months without a stored invoice too (``invoice_value`` is None).
    """
    parse_month(month)
    conn = get_db()
    try:
        card = _require_card(conn, card_id)
        invoice = get_invoice_for_month(conn, card_id, month)
        transactions = list_transactions(conn, expense_type="subscription")
    finally:
        conn.close()

    if invoice is None:
        invoice = CreditCardInvoice(id=None, credit_card_id=card_id, month=month, value=None)
    return classify_subscriptions(invoice, card, transactions)
