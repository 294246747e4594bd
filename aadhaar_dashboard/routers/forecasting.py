"""
Forecasting API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.forecast import MonthlyForecastResponse, StateProfilesResponse
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import aggregate_by_month
from aadhaar_dashboard.services.forecast_engine import forecast_monthly
from aadhaar_dashboard.services.insight_engine import build_state_profiles
from aadhaar_dashboard.store import RecordStore, get_store

router = APIRouter()


@router.get("/monthly", response_model=MonthlyForecastResponse)
def forecast_monthly_volumes(
    vertical: Optional[Vertical] = Query(None, description="Only forecast this vertical"),
    store: RecordStore = Depends(get_store),
):
    """
    Forecast monthly volumes for the next six months.

    Uses the mean and first/last trend of the monthly history, scaled by
    fixed seasonal multipliers. Needs at least two months of history.
    """
    history = aggregate_by_month(store.snapshot())
    forecast = forecast_monthly(history)

    if not forecast:
        return {
            "forecast": [],
            "history_months": len(history),
            "message": "Insufficient data for predictions",
        }

    if vertical:
        forecast = [p for p in forecast if p.vertical == vertical]

    return {
        "forecast": [p.to_dict() for p in forecast],
        "history_months": len(history),
    }


@router.get("/states", response_model=StateProfilesResponse)
def get_state_profiles(
    limit: int = Query(settings.STATE_PROFILE_LIMIT, ge=1, le=36),
    store: RecordStore = Depends(get_store),
):
    """Largest states with peak month, dominant vertical and growth estimate."""
    profiles = build_state_profiles(store.snapshot(), limit=limit)
    return {"states": [p.to_dict() for p in profiles], "count": len(profiles)}
