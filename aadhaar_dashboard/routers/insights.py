"""
Insight API endpoints: dashboard insights, event reasons, the data
assistant and the report bundle.
"""
from fastapi import APIRouter, Depends

from aadhaar_dashboard.schemas.common import QueryRequest, QueryResponse
from aadhaar_dashboard.services.anomaly_detector import detect_anomalies
from aadhaar_dashboard.services.insight_engine import (
    build_insights,
    build_reason_analysis,
    build_state_profiles,
)
from aadhaar_dashboard.services.query_resolver import answer_question
from aadhaar_dashboard.services.report_builder import build_report
from aadhaar_dashboard.store import RecordStore, get_store

router = APIRouter()


@router.get("")
def get_insights(store: RecordStore = Depends(get_store)):
    """Dominant activity, critical spikes and operational recommendation."""
    records = store.snapshot()
    insights = build_insights(build_state_profiles(records), detect_anomalies(records))
    return {"insights": [i.to_dict() for i in insights]}


@router.get("/reasons")
def get_reasons(store: RecordStore = Depends(get_store)):
    """National and state calendar factors behind volume changes."""
    reasons = build_reason_analysis(build_state_profiles(store.snapshot()))
    return {"reasons": [r.to_dict() for r in reasons]}


@router.post("/query", response_model=QueryResponse)
def query(request: QueryRequest, store: RecordStore = Depends(get_store)):
    """
    Answer a free-text question about the loaded data.

    Try "help", "show summary", "top 5 states" or "compare Kerala and Punjab".
    """
    return {"answer": answer_question(store.snapshot(), request.question)}


@router.get("/report")
def get_report(store: RecordStore = Depends(get_store)):
    """All report sections as one JSON document."""
    return build_report(store.snapshot())
