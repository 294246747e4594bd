"""
Anomaly Detection API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional, Literal

from aadhaar_dashboard.schemas.anomaly import AnomalyDetectionResponse
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.anomaly_detector import detect_anomalies
from aadhaar_dashboard.store import RecordStore, get_store
from aadhaar_dashboard.utils.constants import SEVERITY_LEVELS

router = APIRouter()


@router.get("/detect", response_model=AnomalyDetectionResponse)
def detect(
    vertical: Optional[Vertical] = Query(None, description="Only anomalies of this vertical"),
    severity: Optional[Literal["high", "medium", "low"]] = Query(None),
    store: RecordStore = Depends(get_store),
):
    """
    Detect z-score anomalies per state/district series.

    - **vertical**: Filter by data type (enrollment, demographic, biometric)
    - **severity**: Filter by severity level

    Filters apply to the top results (high severity first), so the list
    never grows past the configured maximum.
    """
    anomalies = detect_anomalies(store.snapshot())

    if vertical:
        anomalies = [a for a in anomalies if a.vertical == vertical]
    if severity:
        anomalies = [a for a in anomalies if a.severity.value == severity]

    severity_breakdown = {
        level: sum(1 for a in anomalies if a.severity.value == level)
        for level in SEVERITY_LEVELS
    }

    return {
        "anomalies": [a.to_dict() for a in anomalies],
        "total_count": len(anomalies),
        "severity_breakdown": severity_breakdown,
    }
