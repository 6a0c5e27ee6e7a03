from models.finance import CreditCard, CreditCardInvoice

# -----------------------------
# Credit Cards Repository
# -----------------------------

CARD_COLUMNS = ("name", "bank_id", "closing_day", "due_day", "color")


def _row_to_card(row):
    return CreditCard(
        id=row[0],
        name=row[1],
        bank_id=row[2],
        closing_day=row[3],
        due_day=row[4],
        color=row[5],
    )


def _row_to_invoice(row):
    return CreditCardInvoice(
        id=row[0],
        credit_card_id=row[1],
        month=row[2],
        value=row[3],
    )


def list_cards(conn):
    rows = conn.execute("""
        SELECT id, name, bank_id, closing_day, due_day, color
        FROM credit_cards
        ORDER BY created_at, id
    """).fetchall()
    return [_row_to_card(r) for r in rows]


def get_card_by_id(conn, card_id):
    row = conn.execute("""
        SELECT id, name, bank_id, closing_day, due_day, color
        FROM credit_cards
        WHERE id = ?
    """, (card_id,)).fetchone()
    return _row_to_card(row) if row else None


def insert_card(conn, name, closing_day, due_day, bank_id=None, color=None):
    row = conn.execute("""
        INSERT INTO credit_cards (name, bank_id, closing_day, due_day, color)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
    """, (name, bank_id, closing_day, due_day, color)).fetchone()
    return row[0]


def update_card(conn, card_id, fields: dict):
    updates = {k: v for k, v in fields.items() if k in CARD_COLUMNS}
    if not updates:
        return
    assignments = ", ".join(f"{column} = ?" for column in updates)
    conn.execute(
        f"UPDATE credit_cards SET {assignments} WHERE id = ?",
        (*updates.values(), card_id)
    )


def delete_card(conn, card_id):
    """Delete a card and all of its invoices."""
    conn.execute("DELETE FROM credit_card_invoices WHERE credit_card_id = ?", (card_id,))
    conn.execute("DELETE FROM credit_cards WHERE id = ?", (card_id,))


# -----------------------------
# Invoices
# -----------------------------

def list_invoices(conn, card_id=None):
    query = "SELECT id, credit_card_id, month, value FROM credit_card_invoices"
    params = []
    if card_id is not None:
        query += " WHERE credit_card_id = ?"
        params.append(card_id)
    query += " ORDER BY month, id"
    rows = conn.execute(query, params).fetchall()
    return [_row_to_invoice(r) for r in rows]


def get_invoice_for_month(conn, card_id, month):
    row = conn.execute("""
        SELECT id, credit_card_id, month, value
        FROM credit_card_invoices
        WHERE credit_card_id = ? AND month = ?
    """, (card_id, month)).fetchone()
    return _row_to_invoice(row) if row else None


def upsert_invoice(conn, card_id, month, value):
    """Create the card's invoice for ``month`` or overwrite its value.

    Returns ``(invoice, created)``.
    """
    existing = get_invoice_for_month(conn, card_id, month)
    if existing:
        conn.execute(
            "UPDATE credit_card_invoices SET value = ? WHERE id = ?",
            (value, existing.id)
        )
        return get_invoice_for_month(conn, card_id, month), False

    conn.execute("""
        INSERT INTO credit_card_invoices (credit_card_id, month, value)
        VALUES (?, ?, ?)
    """, (card_id, month, value))
    return get_invoice_for_month(conn, card_id, month), True


def delete_invoice(conn, card_id, invoice_id):
    """Delete one invoice of a card. Returns True when a row was removed."""
    row = conn.execute("""
        SELECT id FROM credit_card_invoices
        WHERE id = ? AND credit_card_id = ?
    """, (invoice_id, card_id)).fetchone()
    if not row:
        return False
    conn.execute("DELETE FROM credit_card_invoices WHERE id = ?", (invoice_id,))
    return True
