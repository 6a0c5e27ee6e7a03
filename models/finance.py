from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

FIXED = "fixed"
VARIABLE = "variable"
SUBSCRIPTION = "subscription"
EXPENSE_TYPES = (FIXED, VARIABLE, SUBSCRIPTION)

ACTION_EDIT = "edit"
ACTION_DELETE = "delete"
EXCEPTION_ACTIONS = (ACTION_EDIT, ACTION_DELETE)

ACCOUNT_TYPES = ("checking", "savings")

# Recurring days stop at 28 so every month has the day
MIN_DAY = 1
MAX_RECURRING_DAY = 28
MAX_CARD_DAY = 31


@dataclass(frozen=True)
class Transaction:
    id: int
    description: str
    amount: Decimal
    type: str
    expense_type: Optional[str] = None
    is_recurring: bool = False
    day: Optional[int] = None
    date: Optional[date] = None
    recurrence_end_date: Optional[date] = None
    subscription_card: Optional[str] = None
    subscription_billing_day: Optional[int] = None
    subscription_card_due_day: Optional[int] = None

    @property
    def is_subscription(self) -> bool:
        return self.type == EXPENSE and self.expense_type == SUBSCRIPTION


@dataclass(frozen=True)
class RecurrenceException:
    transaction_id: int
    date: date
    action: str
    override_amount: Optional[Decimal] = None
    override_description: Optional[str] = None
    override_expense_type: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class BankAccount:
    id: int
    name: str
    bank: str
    account_type: str
    balance: Decimal
    balance_date: Optional[date] = None


@dataclass(frozen=True)
class CreditCard:
    id: int
    name: str
    closing_day: int
    due_day: int
    bank_id: Optional[int] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class CreditCardInvoice:
    id: int
    credit_card_id: int
    month: str  # YYYY-MM
    value: Decimal
