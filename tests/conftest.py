from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import db
from models.finance import BankAccount, CreditCard, CreditCardInvoice, RecurrenceException, Transaction


@pytest.fixture()
def db_file(tmp_path, monkeypatch):
    path = tmp_path / "budget-test.duckdb"
    monkeypatch.setattr(db, "DB_FILE", str(path))
    db.init_db()
    return path


@pytest.fixture()
def client(db_file):
    from main import app
    return TestClient(app)


def make_tx(id=1, description="Item", amount="100.00", type="expense", **kwargs):
    if type == "expense":
        kwargs.setdefault("expense_type", "fixed")
    return Transaction(
        id=id,
        description=description,
        amount=Decimal(amount),
        type=type,
        **kwargs,
    )


def make_account(id=1, balance="0.00", balance_date=None, name="Checking"):
    return BankAccount(
        id=id,
        name=name,
        bank="Bank",
        account_type="checking",
        balance=Decimal(balance),
        balance_date=balance_date,
    )


def make_card(id=1, closing_day=5, due_day=10, name="Visa"):
    return CreditCard(id=id, name=name, closing_day=closing_day, due_day=due_day)


def make_invoice(id=1, credit_card_id=1, month="2025-01", value="0.00"):
    return CreditCardInvoice(id=id, credit_card_id=credit_card_id, month=month, value=Decimal(value))


def make_exception(transaction_id, on_date: date, action="delete", **kwargs):
    return RecurrenceException(transaction_id=transaction_id, date=on_date, action=action, **kwargs)
