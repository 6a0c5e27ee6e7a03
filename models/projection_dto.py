from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass(frozen=True)
class DateWindow:
    """Inclusive ``[start, end]`` calendar window."""
    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class Occurrence:
    """One dated instance of a transaction (a timeline event)."""
    id: str
    source_id: int
    description: str
    amount: Decimal
    type: str
    date: date
    is_recurring: bool
    expense_type: Optional[str] = None
    is_exception: bool = False
    subscription_card: Optional[str] = None
    subscription_billing_day: Optional[int] = None
    subscription_card_due_day: Optional[int] = None

    @property
    def bucket(self) -> str:
        return self.type


@dataclass(frozen=True)
class InvoiceEvent:
    id: str
    invoice_id: int
    credit_card_id: int
    card_name: str
    month: str
    date: date
    amount: Decimal
    description: str

    @property
    def bucket(self) -> str:
        return "invoice"


@dataclass
class PeriodTotals:
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    fixed: Decimal = Decimal("0")
    variable: Decimal = Decimal("0")
    subscription: Decimal = Decimal("0")
    invoices: Decimal = Decimal("0")
    counts: Dict[str, int] = field(default_factory=lambda: {
        "income": 0,
        "expense": 0,
        "fixed": 0,
        "variable": 0,
        "subscription": 0,
        "invoices": 0,
    })

    @property
    def net(self) -> Decimal:
        return self.income - self.expense - self.invoices


@dataclass(frozen=True)
class ProjectionBreakdown:
    initial_balance: Decimal
    income: Decimal
    fixed: Decimal
    variable: Decimal
    subscription: Decimal
    invoices: Decimal


@dataclass
class ProjectionResult:
    today: date
    projection_date: date
    current_balance: Decimal
    projected_balance: Decimal
    breakdown: ProjectionBreakdown
    warnings: List[str] = field(default_factory=list)


@dataclass
class SimulationResult:
    purchase_amount: Decimal
    purchase_date: date
    projection_date: date
    current_balance: Decimal
    current_projected_balance: Decimal
    new_projected_balance: Decimal
    can_afford: bool
    risk_level: str
    impact_percentage: Optional[Decimal]
    warning: Optional[str] = None
    description: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class DailyProjection:
    date: date
    projected_balance: Decimal


@dataclass
class DailyProjectionResult:
    start_date: date
    end_date: date
    starting_balance: Decimal
    timeline: List[DailyProjection]
    lowest_balance: Decimal
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SubscriptionCharge:
    transaction_id: int
    description: str
    amount: Decimal
    billing_date: date
    status: str  # "charged" or "pending"


@dataclass
class InvoiceBreakdown:
    credit_card_id: int
    month: str
    closing_date: date
    due_date: date
    invoice_value: Optional[Decimal]
    charged: List[SubscriptionCharge] = field(default_factory=list)
    pending: List[SubscriptionCharge] = field(default_factory=list)

    @property
    def charged_total(self) -> Decimal:
        return sum((c.amount for c in self.charged), Decimal("0"))

    @property
    def pending_total(self) -> Decimal:
        return sum((c.amount for c in self.pending), Decimal("0"))
