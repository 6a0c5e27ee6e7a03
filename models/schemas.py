import datetime as dt
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from models.finance import MAX_CARD_DAY, MAX_RECURRING_DAY, MIN_DAY
from utils.errors import InvalidInputError

MAX_AMOUNT = Decimal("999999999.99")


class TransactionCreate(BaseModel):
    description: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, decimal_places=2)
    type: Literal["income", "expense"]
    expense_type: Optional[Literal["fixed", "variable", "subscription"]] = None
    is_recurring: bool = False
    day: Optional[int] = Field(default=None, ge=MIN_DAY, le=MAX_RECURRING_DAY)
    date: Optional[dt.date] = None
    recurrence_end_date: Optional[dt.date] = None
    subscription_card: Optional[str] = None
    subscription_billing_day: Optional[int] = Field(default=None, ge=MIN_DAY, le=MAX_RECURRING_DAY)
    subscription_card_due_day: Optional[int] = Field(default=None, ge=MIN_DAY, le=MAX_RECURRING_DAY)

    @model_validator(mode="after")
    def check_shape(self):
        if self.type == "income" and self.expense_type is not None:
            raise ValueError("expense_type is only allowed on expenses")
        if self.type == "expense" and self.expense_type is None:
            self.expense_type = "variable"

        if self.expense_type == "subscription":
            if not self.is_recurring:
                raise ValueError("subscriptions must be recurring")
            if self.subscription_billing_day is None or self.subscription_card_due_day is None:
                raise ValueError("subscriptions need subscription_billing_day and subscription_card_due_day")
            if self.day is None:
                self.day = self.subscription_card_due_day

        if self.is_recurring:
            if self.day is None:
                raise ValueError("recurring transactions need a day")
            self.date = None
        else:
            if self.date is None:
                raise ValueError("single transactions need a date")
            self.day = None
            self.recurrence_end_date = None
        return self


class TransactionUpdate(BaseModel):
    """Partial update. Merged over the stored row, then re-validated whole."""
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    type: Optional[Literal["income", "expense"]] = None
    expense_type: Optional[Literal["fixed", "variable", "subscription"]] = None
    is_recurring: Optional[bool] = None
    day: Optional[int] = None
    date: Optional[dt.date] = None
    recurrence_end_date: Optional[dt.date] = None
    subscription_card: Optional[str] = None
    subscription_billing_day: Optional[int] = None
    subscription_card_due_day: Optional[int] = None


class BankAccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    bank: str = Field(min_length=1)
    account_type: Literal["checking", "savings"] = "checking"
    balance: Decimal = Field(ge=0, le=MAX_AMOUNT, decimal_places=2)
    balance_date: Optional[dt.date] = None


class BankAccountUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    bank: Optional[str] = Field(default=None, min_length=1)
    account_type: Optional[Literal["checking", "savings"]] = None
    balance: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT, decimal_places=2)
    balance_date: Optional[dt.date] = None


class CreditCardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    bank_id: Optional[int] = None
    closing_day: int = Field(ge=MIN_DAY, le=MAX_CARD_DAY)
    due_day: int = Field(ge=MIN_DAY, le=MAX_CARD_DAY)
    color: Optional[str] = None


class CreditCardUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    bank_id: Optional[int] = None
    closing_day: Optional[int] = Field(default=None, ge=MIN_DAY, le=MAX_CARD_DAY)
    due_day: Optional[int] = Field(default=None, ge=MIN_DAY, le=MAX_CARD_DAY)
    color: Optional[str] = None


class InvoiceUpsert(BaseModel):
    month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    value: Decimal = Field(ge=0, le=MAX_AMOUNT, decimal_places=2)


class RecurrenceExceptionCreate(BaseModel):
    date: dt.date
    action: Literal["edit", "delete"]
    override_amount: Optional[Decimal] = Field(default=None, gt=0, le=MAX_AMOUNT, decimal_places=2)
    override_description: Optional[str] = Field(default=None, min_length=1, max_length=100)
    override_expense_type: Optional[Literal["fixed", "variable", "subscription"]] = None

    @model_validator(mode="after")
    def check_overrides(self):
        if self.action == "edit" and (
            self.override_amount is None
            and self.override_description is None
            and self.override_expense_type is None
        ):
            raise ValueError("an edit exception needs at least one override")
        if self.action == "delete":
            self.override_amount = None
            self.override_description = None
            self.override_expense_type = None
        return self


class PurchaseSimulationRequest(BaseModel):
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, decimal_places=2)
    description: Optional[str] = None
    purchase_date: Optional[dt.date] = None


class MultiplePurchaseRequest(BaseModel):
    purchases: List[PurchaseSimulationRequest] = Field(min_length=1)


def revalidate(model, existing, columns, changes: dict):
    """Merge ``changes`` over the stored row and validate it as ``model``.

    Partial updates pass the same checks as a create; an explicit null on a
    required field is rejected here instead of at the database.
    """
    merged = {column: getattr(existing, column) for column in columns}
    merged.update(changes)
    try:
        return model.model_validate(merged)
    except ValidationError as exc:
        raise InvalidInputError(format_errors(exc)) from exc


def format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
