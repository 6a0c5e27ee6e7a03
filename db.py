import duckdb
import logging

from utils import config

DB_FILE = config.DB_FILE

# -----------------------------
# Logging
# -----------------------------
logging.basicConfig(
    filename=config.LOG_FILE,
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

logger = logging.getLogger("budget.db")


def log_info(msg):
    logger.info(msg)


def log_error(msg):
    logger.error(msg)


# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)


# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        for name in ("bank_accounts", "credit_cards", "credit_card_invoices",
                     "transactions", "recurrence_exceptions"):
            conn.execute(f"CREATE SEQUENCE IF NOT EXISTS {name}_id_seq START 1")

        # Bank accounts
        conn.execute("""
        CREATE TABLE IF NOT EXISTS bank_accounts (
            id INTEGER PRIMARY KEY DEFAULT nextval('bank_accounts_id_seq'),
            name VARCHAR NOT NULL,
            bank VARCHAR NOT NULL,
            account_type VARCHAR CHECK(account_type IN ('checking','savings')),
            balance DECIMAL(14,2) NOT NULL DEFAULT 0,
            balance_date DATE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Bank accounts table ensured.")

        # Credit cards and their monthly invoices
        conn.execute("""
        CREATE TABLE IF NOT EXISTS credit_cards (
            id INTEGER PRIMARY KEY DEFAULT nextval('credit_cards_id_seq'),
            name VARCHAR NOT NULL,
            bank_id INTEGER,
            closing_day INTEGER NOT NULL CHECK(closing_day BETWEEN 1 AND 31),
            due_day INTEGER NOT NULL CHECK(due_day BETWEEN 1 AND 31),
            color VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS credit_card_invoices (
            id INTEGER PRIMARY KEY DEFAULT nextval('credit_card_invoices_id_seq'),
            credit_card_id INTEGER NOT NULL,
            month VARCHAR NOT NULL,
            value DECIMAL(14,2) NOT NULL CHECK(value >= 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(credit_card_id, month)
        );
        """)
        log_info("Credit card tables ensured.")

        # Transactions: recurring rows carry day, single rows carry date
        conn.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id INTEGER PRIMARY KEY DEFAULT nextval('transactions_id_seq'),
            description VARCHAR NOT NULL,
            amount DECIMAL(14,2) NOT NULL CHECK(amount >= 0),
            type VARCHAR NOT NULL CHECK(type IN ('income','expense')),
            expense_type VARCHAR CHECK(expense_type IN ('fixed','variable','subscription')),
            is_recurring BOOLEAN NOT NULL DEFAULT FALSE,
            day INTEGER,
            date DATE,
            recurrence_end_date DATE,
            subscription_card VARCHAR,
            subscription_billing_day INTEGER,
            subscription_card_due_day INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log_info("Transactions table ensured.")

        conn.execute("""
        CREATE TABLE IF NOT EXISTS recurrence_exceptions (
            id INTEGER PRIMARY KEY DEFAULT nextval('recurrence_exceptions_id_seq'),
            transaction_id INTEGER NOT NULL,
            date DATE NOT NULL,
            action VARCHAR NOT NULL CHECK(action IN ('edit','delete')),
            override_amount DECIMAL(14,2),
            override_description VARCHAR,
            override_expense_type VARCHAR,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(transaction_id, date)
        );
        """)
        log_info("Recurrence exceptions table ensured.")

    except Exception as e:
        log_error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log_info("Database setup complete and connection closed.")
