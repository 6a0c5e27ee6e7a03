import os
from decimal import Decimal

# -----------------------------
# Environment configuration
# -----------------------------

DB_FILE = os.getenv("BUDGET_DB_FILE", "budget.duckdb")

LOG_FILE = os.getenv("BUDGET_LOG_FILE") or None
LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()

FORECAST_DEFAULT_DAYS = int(os.getenv("FORECAST_DEFAULT_DAYS", "14"))
SIMULATION_HORIZON_MONTHS = int(os.getenv("SIMULATION_HORIZON_MONTHS", "1"))

# Remaining balance under this share of the current balance is MEDIUM risk
RISK_MEDIUM_RATIO = Decimal(os.getenv("RISK_MEDIUM_RATIO", "0.10"))
