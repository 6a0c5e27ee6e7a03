from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, Query

from routes.balance import resolve_today
from services.timeline_service import get_timeline

router = APIRouter()


def _event_payload(event):
    payload = asdict(event)
    payload["kind"] = event.bucket
    return payload


@router.get("/timeline")
def timeline(
    period: Literal["current", "next", "3months", "custom"] = "current",
    custom_start: Optional[str] = Query(None),
    custom_end: Optional[str] = Query(None),
    as_of_date: Optional[str] = Query(None),
):
    """Dated income, expense and invoice events for a period, grouped by day."""
    result = get_timeline(period, custom_start, custom_end, today=resolve_today(as_of_date))
    return {
        "success": True,
        "data": {
            "events": [_event_payload(e) for e in result["events"]],
            "grouped": [
                {"date": day, "events": [_event_payload(e) for e in events]}
                for day, events in result["grouped"]
            ],
            "date_range": result["date_range"],
            "warnings": result["warnings"],
        },
    }
