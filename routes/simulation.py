from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query

from models.schemas import MultiplePurchaseRequest, PurchaseSimulationRequest
from routes.balance import resolve_today
from services.forecast_dto import SimulationResponseDTO
from services.projection_service import calculate_simulation, calculate_simulations

router = APIRouter(prefix="/simulation")


def _recommendation(can_afford: bool) -> str:
    if can_afford:
        return "You can make this purchase safely"
    return "This purchase may compromise your finances"


@router.post("/purchase")
def simulate_purchase(payload: PurchaseSimulationRequest, as_of_date: Optional[str] = Query(None)):
    """Detailed analysis of a single purchase."""
    simulation = calculate_simulation(
        payload.amount, payload.purchase_date,
        today=resolve_today(as_of_date), description=payload.description,
    )
    data = asdict(SimulationResponseDTO.from_simulation(simulation))
    data["recommendation"] = _recommendation(simulation.can_afford)
    return {"success": True, "data": data}


@router.post("/multiple-purchases")
def simulate_multiple(payload: MultiplePurchaseRequest, as_of_date: Optional[str] = Query(None)):
    """Each purchase is simulated on its own against the same projection."""
    simulations, overall = calculate_simulations(
        [(p.amount, p.purchase_date, p.description) for p in payload.purchases],
        today=resolve_today(as_of_date),
    )
    overall["recommendation"] = (
        "All purchases are affordable"
        if overall["all_affordable"]
        else "Some purchases may compromise your finances"
    )
    return {
        "success": True,
        "data": {
            "simulations": [asdict(SimulationResponseDTO.from_simulation(s)) for s in simulations],
            "overall_analysis": overall,
        },
    }
