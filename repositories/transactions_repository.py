from models.finance import Transaction

# -----------------------------
# Transactions Repository
# -----------------------------

TRANSACTION_COLUMNS = (
    "description", "amount", "type", "expense_type", "is_recurring", "day", "date",
    "recurrence_end_date", "subscription_card", "subscription_billing_day",
    "subscription_card_due_day",
)

_SELECT = """
    SELECT id, description, amount, type, expense_type, is_recurring, day, date,
           recurrence_end_date, subscription_card, subscription_billing_day,
           subscription_card_due_day
    FROM transactions
"""


def _row_to_transaction(row):
    return Transaction(
        id=row[0],
        description=row[1],
        amount=row[2],
        type=row[3],
        expense_type=row[4],
        is_recurring=bool(row[5]),
        day=row[6],
        date=row[7],
        recurrence_end_date=row[8],
        subscription_card=row[9],
        subscription_billing_day=row[10],
        subscription_card_due_day=row[11],
    )


def list_transactions(conn, type=None, expense_type=None, limit=None, offset=0):
    """
    Returns transactions, optionally filtered.
    - conn: DuckDB connection
    - type / expense_type: optional equality filters
    - limit / offset: optional paging
    """
    query = _SELECT
    clauses = []
    params = []

    if type:
        clauses.append("type = ?")
        params.append(type)
    if expense_type:
        clauses.append("expense_type = ?")
        params.append(expense_type)
    if clauses:
        query += " WHERE " + " AND ".join(clauses)

    query += " ORDER BY date NULLS LAST, day NULLS LAST, id"

    if limit:
        query += " LIMIT ? OFFSET ?"
        params.extend([limit, offset or 0])

    rows = conn.execute(query, params).fetchall()
    return [_row_to_transaction(r) for r in rows]


def get_transaction_by_id(conn, transaction_id):
    row = conn.execute(_SELECT + " WHERE id = ?", (transaction_id,)).fetchone()
    return _row_to_transaction(row) if row else None


def insert_transaction(conn, fields: dict):
    """
    Inserts a transaction and returns its id.
    - fields: validated column values (see TRANSACTION_COLUMNS)
    """
    columns = [c for c in TRANSACTION_COLUMNS if c in fields]
    placeholders = ", ".join("?" for _ in columns)
    row = conn.execute(
        f"INSERT INTO transactions ({', '.join(columns)}) VALUES ({placeholders}) RETURNING id",
        [fields[c] for c in columns]
    ).fetchone()
    return row[0]


def update_transaction(conn, transaction_id, fields: dict):
    """
    Overwrites the given columns of a transaction.
    """
    updates = {k: v for k, v in fields.items() if k in TRANSACTION_COLUMNS}
    if not updates:
        return
    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE transactions SET {assignments} WHERE id = ?",
        (*updates.values(), transaction_id)
    )


def delete_transaction(conn, transaction_id):
    """
    Deletes a transaction together with its recurrence exceptions.
    """
    conn.execute("DELETE FROM recurrence_exceptions WHERE transaction_id = ?", (transaction_id,))
    conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
