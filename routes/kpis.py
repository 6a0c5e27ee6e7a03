from typing import Literal, Optional

from fastapi import APIRouter, Query

from routes.balance import resolve_today
from services.kpi_service import calculate_kpis, get_kpi

router = APIRouter(prefix="/kpis")

Period = Literal["current", "next", "3months", "custom"]


@router.get("")
def list_kpis(
    period: Period = "current",
    custom_start: Optional[str] = Query(None),
    custom_end: Optional[str] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    result = calculate_kpis(period, custom_start, custom_end, today=resolve_today(as_of_date))
    return {"success": True, "data": result}


@router.get("/{kpi_key}")
def kpi_detail(
    kpi_key: str,
    period: Period = "current",
    custom_start: Optional[str] = Query(None),
    custom_end: Optional[str] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    kpi = get_kpi(kpi_key, period, custom_start, custom_end, today=resolve_today(as_of_date))
    return {"success": True, "data": kpi}
