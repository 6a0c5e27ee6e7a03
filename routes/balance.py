from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from models.schemas import PurchaseSimulationRequest
from services.forecast_dto import ProjectionResponseDTO, SimulationResponseDTO
from services.projection_service import (
    calculate_projection,
    calculate_simulation,
    get_current_balance,
)
from utils import config
from utils.dates import add_months, parse_iso_date

router = APIRouter(prefix="/balance")


def resolve_today(as_of_date: Optional[str]) -> date:
    """``as_of_date`` query parameter, defaulting to today."""
    return parse_iso_date(as_of_date, "as_of_date") if as_of_date else date.today()


@router.get("/current")
def current_balance():
    accounts, total = get_current_balance()
    return {
        "success": True,
        "data": {"total_balance": total, "accounts": accounts},
    }


@router.get("/projected")
def projected_balance(
    projection_date: Optional[str] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    """
    Projected combined balance at ``projection_date`` (default: one
    simulation horizon from today), with a waterfall breakdown.
    """
    today = resolve_today(as_of_date)
    if projection_date:
        target = parse_iso_date(projection_date, "projection_date")
    else:
        target = add_months(today, config.SIMULATION_HORIZON_MONTHS)

    projection = calculate_projection(target, today=today)
    return {"success": True, "data": asdict(ProjectionResponseDTO.from_projection(projection))}


@router.post("/simulate-purchase")
def simulate_purchase(payload: PurchaseSimulationRequest, as_of_date: Optional[str] = Query(None)):
    today = resolve_today(as_of_date)
    simulation = calculate_simulation(
        payload.amount, payload.purchase_date, today=today, description=payload.description
    )
    return {"success": True, "data": asdict(SimulationResponseDTO.from_simulation(simulation))}
