"""
Invoice Due-Date Mapper: places credit-card invoices on the calendar.
"""
import logging
from datetime import date

from models.finance import SUBSCRIPTION
from models.projection_dto import (
    DateWindow,
    InvoiceBreakdown,
    InvoiceEvent,
    SubscriptionCharge,
)
from utils.dates import clamped_date, parse_month
from utils.errors import InvalidInputError

logger = logging.getLogger(__name__)

CHARGED = "charged"
PENDING = "pending"


def invoice_due_date(invoice, card) -> date:
    year, month = parse_month(invoice.month)
    return clamped_date(year, month, card.due_day)


def invoice_closing_date(invoice, card) -> date:
    year, month = parse_month(invoice.month)
    return clamped_date(year, month, card.closing_day)


def invoice_events(invoices, cards, window: DateWindow, warnings=None):
    """Yield an ``InvoiceEvent`` for each invoice due inside ``window``."""
    if window.is_empty:
        return

    cards_by_id = {card.id: card for card in cards}
    for invoice in invoices:
        card = cards_by_id.get(invoice.credit_card_id)
        if card is None:
            message = f"Invoice {invoice.id}: unknown credit card {invoice.credit_card_id}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            continue

        try:
            due_date = invoice_due_date(invoice, card)
        except InvalidInputError:
            message = f"Invoice {invoice.id}: invalid month {invoice.month!r}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            continue

        if due_date not in window:
            continue

        yield InvoiceEvent(
            id=f"invoice-{invoice.id}",
            invoice_id=invoice.id,
            credit_card_id=card.id,
            card_name=card.name,
            month=invoice.month,
            date=due_date,
            amount=invoice.value,
            description=f"Invoice {card.name}",
        )


def is_card_subscription(transaction, card) -> bool:
    return (
        transaction.expense_type == SUBSCRIPTION
        and transaction.subscription_card is not None
        and str(transaction.subscription_card) == str(card.id)
    )


def classify_subscriptions(invoice, card, transactions) -> InvoiceBreakdown:
    """Split the card's subscriptions into this invoice vs. a later one.

    A subscription billed on or before the card's closing day is already on
    this month's invoice; anything billed after closing lands on the next.
    Display only: projections use ``invoice.value`` as-is.
    """
    year, month = parse_month(invoice.month)
    closing_date = invoice_closing_date(invoice, card)
    breakdown = InvoiceBreakdown(
        credit_card_id=card.id,
        month=invoice.month,
        closing_date=closing_date,
        due_date=invoice_due_date(invoice, card),
        invoice_value=invoice.value,
    )

    for transaction in transactions:
        if not is_card_subscription(transaction, card):
            continue
        if not transaction.subscription_billing_day:
            continue
        billing_date = clamped_date(year, month, transaction.subscription_billing_day)
        if transaction.recurrence_end_date and billing_date > transaction.recurrence_end_date:
            continue

        status = CHARGED if billing_date <= closing_date else PENDING
        charge = SubscriptionCharge(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            billing_date=billing_date,
            status=status,
        )
        if status == CHARGED:
            breakdown.charged.append(charge)
        else:
            breakdown.pending.append(charge)

    return breakdown
