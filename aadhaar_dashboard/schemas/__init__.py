"""
Schemas package initialization.
"""
from aadhaar_dashboard.schemas.records import (
    Vertical,
    RawRecord,
    EnrollmentRecord,
    DemographicRecord,
    BiometricRecord,
    RECORD_TYPES,
)
from aadhaar_dashboard.schemas.common import (
    HealthResponse,
    UploadFileResult,
    UploadResponse,
    AppendRecordsResponse,
    QueryRequest,
    QueryResponse,
)
from aadhaar_dashboard.schemas.anomaly import (
    AnomalyRecord,
    AnomalyDetectionResponse,
)
from aadhaar_dashboard.schemas.forecast import (
    ForecastDataPoint,
    MonthlyForecastResponse,
    StateProfileRecord,
    StateProfilesResponse,
)

__all__ = [
    # Records
    "Vertical",
    "RawRecord",
    "EnrollmentRecord",
    "DemographicRecord",
    "BiometricRecord",
    "RECORD_TYPES",
    # Common
    "HealthResponse",
    "UploadFileResult",
    "UploadResponse",
    "AppendRecordsResponse",
    "QueryRequest",
    "QueryResponse",
    # Anomaly
    "AnomalyRecord",
    "AnomalyDetectionResponse",
    # Forecast
    "ForecastDataPoint",
    "MonthlyForecastResponse",
    "StateProfileRecord",
    "StateProfilesResponse",
]
