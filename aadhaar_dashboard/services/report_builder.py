"""
Report bundle: everything the exported analysis report shows, as plain data.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import aggregate_by_month, build_data_quality_report
from aadhaar_dashboard.services.anomaly_detector import detect_anomalies
from aadhaar_dashboard.services.forecast_engine import forecast_monthly
from aadhaar_dashboard.services.insight_engine import build_insights, build_state_profiles
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.formatting import format_number

logger = logging.getLogger(__name__)

REPORT_TREND_MONTHS = 6
REPORT_TOP_STATES = 8
REPORT_ANOMALIES = 10


def build_report(records: RecordSet) -> Dict[str, Any]:
    """
    Collect the report sections from one snapshot.

    Returns:
        Dict with data_quality, monthly_trends (last 6), top_states (8),
        enrollment_forecast, anomalies (10) and insights
    """
    monthly = aggregate_by_month(records)
    profiles = build_state_profiles(records)
    anomalies = detect_anomalies(records)
    forecast = [p for p in forecast_monthly(monthly) if p.vertical == Vertical.ENROLLMENT]

    logger.info(f"Built report from {records.total_records:,} records")

    return {
        "generated_at": datetime.now().isoformat(),
        "data_quality": build_data_quality_report(records).to_dict(),
        "monthly_trends": [p.to_dict() for p in monthly[-REPORT_TREND_MONTHS:]],
        "top_states": [p.to_dict() for p in profiles[:REPORT_TOP_STATES]],
        "enrollment_forecast": [p.to_dict() for p in forecast],
        "anomalies": [a.to_dict() for a in anomalies[:REPORT_ANOMALIES]],
        "insights": [i.to_dict() for i in build_insights(profiles, anomalies)],
    }


def render_report_text(report: Dict[str, Any]) -> str:
    """Plain-text rendering of a report bundle."""
    quality = report["data_quality"]
    lines: List[str] = [
        "AADHAAR ANALYTICS REPORT",
        f"Generated: {report['generated_at']}",
        "",
        "DATA QUALITY",
        f"  Total records: {format_number(quality['total_records'])}",
        f"  States: {quality['unique_states']}  Districts: {quality['unique_districts']}",
        f"  Date range: {quality['date_range']['start']} to {quality['date_range']['end']}",
        f"  Missing values: {quality['missing_values']}  Duplicates: {quality['duplicates']}",
        f"  Completeness: {quality['data_completeness']}%",
        "",
        "MONTHLY TRENDS",
    ]
    for point in report["monthly_trends"]:
        lines.append(
            f"  {point['month']}: enrollment {format_number(point['enrollment'])}, "
            f"demographic {format_number(point['demographic'])}, "
            f"biometric {format_number(point['biometric'])}"
        )

    lines += ["", "TOP STATES"]
    for idx, state in enumerate(report["top_states"], 1):
        lines.append(
            f"  {idx}. {state['state']}: Total {format_number(state['total'])} "
            f"(Peak: {state['peak_month']}, Dominant: {state['dominant_type']})"
        )

    lines += ["", "ENROLLMENT FORECAST"]
    if not report["enrollment_forecast"]:
        lines.append("  Insufficient data for predictions")
    for pred in report["enrollment_forecast"]:
        lines.append(
            f"  {pred['month']}: ~{format_number(pred['predicted'])} "
            f"({pred['confidence']}% confidence, trend: {pred['trend']})"
        )

    lines += ["", "ANOMALIES"]
    for anomaly in report["anomalies"]:
        lines.append(
            f"  [{anomaly['severity'].upper()}] {anomaly['state']} / {anomaly['district']} "
            f"{anomaly['date']}: {anomaly['type']} {anomaly['anomaly_type']} "
            f"{format_number(anomaly['value'])} - {anomaly['reason']}"
        )

    lines += ["", "INSIGHTS"]
    for insight in report["insights"]:
        lines.append(f"  [{insight['priority'].upper()}] {insight['title']}")
        lines.append(f"    {insight['description']}")

    return "\n".join(lines)
