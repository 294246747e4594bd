"""
Routers package initialization.
"""
from aadhaar_dashboard.routers import records
from aadhaar_dashboard.routers import aggregates
from aadhaar_dashboard.routers import anomaly
from aadhaar_dashboard.routers import forecasting
from aadhaar_dashboard.routers import insights

__all__ = [
    "records",
    "aggregates",
    "anomaly",
    "forecasting",
    "insights",
]
