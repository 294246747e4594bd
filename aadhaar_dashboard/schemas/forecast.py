"""
Forecast Pydantic schemas.
"""
from pydantic import BaseModel
from typing import List, Literal, Optional


class ForecastDataPoint(BaseModel):
    """Single forecast data point."""
    month: str
    month_key: str
    type: Literal["enrollment", "demographic", "biometric"]
    predicted: int
    confidence: int
    trend: Literal["up", "down", "stable"]


class MonthlyForecastResponse(BaseModel):
    """Response for the monthly forecast endpoint."""
    forecast: List[ForecastDataPoint]
    history_months: int
    message: Optional[str] = None


class StateProfileRecord(BaseModel):
    """Per-state volumes with peak month and growth estimate."""
    state: str
    enrollment: int
    demographic: int
    biometric: int
    total: int
    predicted_growth: float
    peak_month: str
    dominant_type: str


class StateProfilesResponse(BaseModel):
    states: List[StateProfileRecord]
    count: int
