from dataclasses import dataclass
from typing import List, Optional

from utils.money import to_money


def _money(value) -> Optional[float]:
    return None if value is None else float(to_money(value))


@dataclass
class ForecastDayDTO:
    """Single day in the forecast timeline."""
    date: str  # ISO format YYYY-MM-DD
    projected_balance: float


@dataclass
class ForecastResponseDTO:
    """Complete N-day forecast response."""
    start_date: str  # ISO format
    end_date: str  # ISO format
    starting_balance: float
    lowest_balance: float
    timeline: List[ForecastDayDTO]
    warnings: List[str]

    @classmethod
    def from_projection(cls, projection):
        """Convert DailyProjectionResult to JSON-serializable DTO."""
        return cls(
            start_date=projection.start_date.isoformat(),
            end_date=projection.end_date.isoformat(),
            starting_balance=_money(projection.starting_balance),
            lowest_balance=_money(projection.lowest_balance),
            timeline=[
                ForecastDayDTO(
                    date=day.date.isoformat(),
                    projected_balance=_money(day.projected_balance)
                )
                for day in projection.timeline
            ],
            warnings=list(projection.warnings),
        )


@dataclass
class ProjectionResponseDTO:
    current_balance: float
    projected_balance: float
    projection_date: str
    breakdown: dict
    warnings: List[str]

    @classmethod
    def from_projection(cls, projection):
        """Convert ProjectionResult to JSON-serializable DTO."""
        breakdown = projection.breakdown
        return cls(
            current_balance=_money(projection.current_balance),
            projected_balance=_money(projection.projected_balance),
            projection_date=projection.projection_date.isoformat(),
            breakdown={
                "initial_balance": _money(breakdown.initial_balance),
                "income": _money(breakdown.income),
                "fixed": _money(breakdown.fixed),
                "variable": _money(breakdown.variable),
                "subscription": _money(breakdown.subscription),
                "invoices": _money(breakdown.invoices),
            },
            warnings=list(projection.warnings),
        )


@dataclass
class SimulationResponseDTO:
    description: str
    purchase_amount: float
    purchase_date: str
    projection_date: str
    current_balance: float
    projected_balance_without_purchase: float
    new_projected_balance: float
    can_afford: bool
    risk_level: str
    impact_percentage: Optional[float]
    warning: Optional[str]
    warnings: List[str]

    @classmethod
    def from_simulation(cls, simulation):
        """Convert SimulationResult to JSON-serializable DTO."""
        return cls(
            description=simulation.description or "Simulated purchase",
            purchase_amount=_money(simulation.purchase_amount),
            purchase_date=simulation.purchase_date.isoformat(),
            projection_date=simulation.projection_date.isoformat(),
            current_balance=_money(simulation.current_balance),
            projected_balance_without_purchase=_money(simulation.current_projected_balance),
            new_projected_balance=_money(simulation.new_projected_balance),
            can_afford=simulation.can_afford,
            risk_level=simulation.risk_level,
            impact_percentage=_money(simulation.impact_percentage),
            warning=simulation.warning,
            warnings=list(simulation.warnings),
        )
