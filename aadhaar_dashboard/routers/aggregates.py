"""
Aggregation API endpoints: state, district, pincode and time rollups.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import (
    age_breakdown,
    aggregate_by_date,
    aggregate_by_district,
    aggregate_by_month,
    aggregate_by_pincode,
    aggregate_by_state,
    build_data_quality_report,
    choropleth_levels,
    rank_states,
    vertical_totals,
)
from aadhaar_dashboard.store import RecordStore, get_store
from aadhaar_dashboard.utils.state_names import normalize_state_name

router = APIRouter()


@router.get("/states")
def get_state_aggregates(
    ranked: bool = Query(False, description="Sort by combined total, descending"),
    store: RecordStore = Depends(get_store),
):
    """
    Per-state totals over the 36 canonical states and union territories.

    Records whose state cannot be normalized to a canonical name are left out.
    """
    states = aggregate_by_state(store.snapshot())
    if ranked:
        states = rank_states(states)
    return {
        "states": [s.to_dict() for s in states],
        "count": len(states),
    }


@router.get("/states/{state}/districts")
def get_district_aggregates(state: str, store: RecordStore = Depends(get_store)):
    """District drill-down for one state."""
    districts = aggregate_by_district(store.snapshot(), state)
    return {
        "state": normalize_state_name(state),
        "districts": [d.to_dict() for d in districts],
        "count": len(districts),
    }


@router.get("/states/{state}/districts/{district}/pincodes")
def get_pincode_aggregates(state: str, district: str, store: RecordStore = Depends(get_store)):
    """Pincode drill-down for one district."""
    pincodes = aggregate_by_pincode(store.snapshot(), state, district)
    return {
        "state": normalize_state_name(state),
        "district": district,
        "pincodes": [p.to_dict() for p in pincodes],
        "count": len(pincodes),
    }


@router.get("/choropleth")
def get_choropleth(
    category: Optional[Vertical] = Query(None, description="Vertical to shade by (default: all)"),
    store: RecordStore = Depends(get_store),
):
    """Map shading level (0-4) per state."""
    states = aggregate_by_state(store.snapshot())
    return {
        "category": category.value if category else "all",
        "states": choropleth_levels(states, category),
    }


@router.get("/monthly")
def get_monthly_trend(store: RecordStore = Depends(get_store)):
    """Monthly totals per vertical in calendar order."""
    points = aggregate_by_month(store.snapshot())
    return {"trend": [p.to_dict() for p in points], "count": len(points)}


@router.get("/daily")
def get_daily_trend(store: RecordStore = Depends(get_store)):
    """Daily totals per vertical in calendar order."""
    points = aggregate_by_date(store.snapshot())
    return {"trend": [p.to_dict() for p in points], "count": len(points)}


@router.get("/totals")
def get_totals(store: RecordStore = Depends(get_store)):
    """KPI card totals."""
    return vertical_totals(store.snapshot())


@router.get("/age-distribution")
def get_age_distribution(store: RecordStore = Depends(get_store)):
    """Age band sums per vertical."""
    return age_breakdown(store.snapshot())


@router.get("/data-quality")
def get_data_quality(store: RecordStore = Depends(get_store)):
    """Coverage, missing fields, duplicates and completeness."""
    return build_data_quality_report(store.snapshot()).to_dict()
