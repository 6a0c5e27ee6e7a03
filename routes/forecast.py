from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query

from routes.balance import resolve_today
from services.forecast_dto import ForecastResponseDTO
from services.projection_service import calculate_daily_projection

router = APIRouter()


@router.get("/forecast")
def get_daily_forecast(
    days: Optional[int] = Query(None, ge=0, le=366),
    as_of_date: Optional[str] = Query(None),
):
    """
    Return a deterministic day-by-day projection of the combined balance.

    Query Parameters:
        days (optional): Horizon in days. Defaults to FORECAST_DEFAULT_DAYS.
        as_of_date (optional): Reference date in ISO format (YYYY-MM-DD).
                              Defaults to today if not provided.

    Returns:
        ForecastResponseDTO: JSON containing the daily balance timeline and
        the lowest projected balance.
    """
    projection = calculate_daily_projection(days=days, today=resolve_today(as_of_date))
    dto = ForecastResponseDTO.from_projection(projection)
    return {"success": True, "data": asdict(dto)}
