"""
Anomaly Detection Pydantic schemas.
"""
from pydantic import BaseModel
from typing import Dict, List, Literal


class AnomalyRecord(BaseModel):
    """Single anomaly detection record."""
    date: str
    state: str
    district: str
    value: int
    type: Literal["enrollment", "demographic", "biometric"]
    anomaly_type: Literal["spike", "drop"]
    severity: Literal["high", "medium", "low"]
    reason: str
    z_score: float

    class Config:
        from_attributes = True


class AnomalyDetectionResponse(BaseModel):
    """Response for anomaly detection."""
    anomalies: List[AnomalyRecord]
    total_count: int
    severity_breakdown: Dict[str, int]
