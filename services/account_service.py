import logging

from db import get_db
from models.schemas import BankAccountCreate, revalidate
from repositories.accounts_repository import (
    ACCOUNT_COLUMNS,
    delete_account as repo_delete_account,
    get_account_by_id,
    insert_account,
    list_accounts,
    update_account as repo_update_account,
)
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def get_all_accounts():
    conn = get_db()
    try:
        return list_accounts(conn)
    finally:
        conn.close()


def get_account(account_id):
    conn = get_db()
    try:
        account = get_account_by_id(conn, account_id)
    finally:
        conn.close()
    if account is None:
        raise NotFoundError(f"Account {account_id} not found")
    return account


def add_account(data):
    conn = get_db()
    try:
        account_id = insert_account(conn, **data.model_dump())
        return get_account_by_id(conn, account_id)
    finally:
        conn.close()


def update_account(account_id, changes: dict):
    existing = get_account(account_id)
    validated = revalidate(BankAccountCreate, existing, ACCOUNT_COLUMNS, changes)
    conn = get_db()
    try:
        repo_update_account(conn, account_id, validated.model_dump())
        return get_account_by_id(conn, account_id)
    finally:
        conn.close()


def delete_account(account_id):
    get_account(account_id)
    conn = get_db()
    try:
        repo_delete_account(conn, account_id)
    finally:
        conn.close()
    logger.info("Account %s deleted", account_id)
