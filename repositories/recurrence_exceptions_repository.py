from models.finance import RecurrenceException

# -----------------------------
# Recurrence Exceptions Repository
# -----------------------------


def _row_to_exception(row):
    return RecurrenceException(
        id=row[0],
        transaction_id=row[1],
        date=row[2],
        action=row[3],
        override_amount=row[4],
        override_description=row[5],
        override_expense_type=row[6],
    )


_SELECT = """
    SELECT id, transaction_id, date, action, override_amount,
           override_description, override_expense_type
    FROM recurrence_exceptions
"""


def list_exceptions(conn, transaction_id=None):
    query = _SELECT
    params = []
    if transaction_id is not None:
        query += " WHERE transaction_id = ?"
        params.append(transaction_id)
    query += " ORDER BY date, id"
    rows = conn.execute(query, params).fetchall()
    return [_row_to_exception(r) for r in rows]


def get_exception(conn, transaction_id, on_date):
    row = conn.execute(
        _SELECT + " WHERE transaction_id = ? AND date = ?",
        (transaction_id, on_date)
    ).fetchone()
    return _row_to_exception(row) if row else None


def upsert_exception(conn, transaction_id, on_date, action,
                     override_amount=None, override_description=None,
                     override_expense_type=None):
    """One exception per (transaction, date): replace the overrides if present."""
    existing = get_exception(conn, transaction_id, on_date)
    if existing:
        conn.execute("""
            UPDATE recurrence_exceptions
            SET action = ?, override_amount = ?, override_description = ?,
                override_expense_type = ?
            WHERE id = ?
        """, (action, override_amount, override_description, override_expense_type, existing.id))
    else:
        conn.execute("""
            INSERT INTO recurrence_exceptions
            (transaction_id, date, action, override_amount, override_description, override_expense_type)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (transaction_id, on_date, action, override_amount, override_description, override_expense_type))
    return get_exception(conn, transaction_id, on_date)


def delete_exception(conn, exception_id):
    """Returns True when a row was removed."""
    row = conn.execute(
        "SELECT id FROM recurrence_exceptions WHERE id = ?", (exception_id,)
    ).fetchone()
    if not row:
        return False
    conn.execute("DELETE FROM recurrence_exceptions WHERE id = ?", (exception_id,))
    return True
