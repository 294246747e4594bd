"""
Services package initialization.
"""
from aadhaar_dashboard.services.aggregation import (
    aggregate_by_state,
    aggregate_by_month,
    aggregate_by_district,
    aggregate_by_pincode,
    build_data_quality_report,
    rank_states,
)
from aadhaar_dashboard.services.anomaly_detector import detect_anomalies
from aadhaar_dashboard.services.forecast_engine import forecast_monthly, forecast_from_records
from aadhaar_dashboard.services.insight_engine import (
    build_state_profiles,
    build_reason_analysis,
    build_insights,
)
from aadhaar_dashboard.services.query_resolver import QueryResolver, answer_question
from aadhaar_dashboard.services.report_builder import build_report

__all__ = [
    "aggregate_by_state",
    "aggregate_by_month",
    "aggregate_by_district",
    "aggregate_by_pincode",
    "build_data_quality_report",
    "rank_states",
    "detect_anomalies",
    "forecast_monthly",
    "forecast_from_records",
    "build_state_profiles",
    "build_reason_analysis",
    "build_insights",
    "QueryResolver",
    "answer_question",
    "build_report",
]
