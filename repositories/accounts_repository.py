from models.finance import BankAccount

# -----------------------------
# Bank Accounts Repository
# -----------------------------

ACCOUNT_COLUMNS = ("name", "bank", "account_type", "balance", "balance_date")


def _row_to_account(row):
    return BankAccount(
        id=row[0],
        name=row[1],
        bank=row[2],
        account_type=row[3],
        balance=row[4],
        balance_date=row[5],
    )


def list_accounts(conn):
    """Return all bank accounts, oldest first."""
    rows = conn.execute("""
        SELECT id, name, bank, account_type, balance, balance_date
        FROM bank_accounts
        ORDER BY created_at, id
    """).fetchall()
    return [_row_to_account(r) for r in rows]


def get_account_by_id(conn, account_id):
    row = conn.execute("""
        SELECT id, name, bank, account_type, balance, balance_date
        FROM bank_accounts
        WHERE id = ?
    """, (account_id,)).fetchone()
    return _row_to_account(row) if row else None


def insert_account(conn, name, bank, account_type, balance, balance_date=None):
    """Insert a bank account and return its id."""
    row = conn.execute("""
        INSERT INTO bank_accounts (name, bank, account_type, balance, balance_date)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
    """, (name, bank, account_type, balance, balance_date)).fetchone()
    return row[0]


def update_account(conn, account_id, fields: dict):
    """Update the given columns of an account. Unknown keys are ignored."""
    updates = {k: v for k, v in fields.items() if k in ACCOUNT_COLUMNS}
    if not updates:
        return
    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE bank_accounts SET {assignments} WHERE id = ?",
        (*updates.values(), account_id)
    )


def delete_account(conn, account_id):
    conn.execute("DELETE FROM bank_accounts WHERE id = ?", (account_id,))
