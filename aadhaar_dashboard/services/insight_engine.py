"""
State profiles, event-reason analysis and dashboard insights.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import VerticalTotals, aggregate_by_state
from aadhaar_dashboard.services.anomaly_detector import Anomaly, Severity
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.constants import MONTHS, STATE_EVENTS, VALID_STATE_SET
from aadhaar_dashboard.utils.date_utils import month_key, parse_date_string
from aadhaar_dashboard.utils.state_names import normalize_state_name

logger = logging.getLogger(__name__)

MAX_REASONS = 10

VERTICAL_NAMES = {
    Vertical.ENROLLMENT: "Enrollment",
    Vertical.DEMOGRAPHIC: "Demographic",
    Vertical.BIOMETRIC: "Biometric",
}

NATIONAL_FACTORS = [
    (
        "Academic Cycle",
        "School admissions across India drive a 25-30% increase in child enrollment "
        "and biometric updates during June-July.",
        92,
    ),
    (
        "Digital India Initiatives",
        "New government welfare schemes often mandate latest Aadhaar updates, "
        "causing localized spikes.",
        80,
    ),
]

STATE_EVENT_CONFIDENCE = 85


@dataclass
class StateProfile:
    """Per-state volumes with seasonal peak and growth estimate."""
    state: str
    enrollment: int
    demographic: int
    biometric: int
    predicted_growth: float
    peak_month: str
    dominant_type: str

    @property
    def total(self) -> int:
        return self.enrollment + self.demographic + self.biometric

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "enrollment": self.enrollment,
            "demographic": self.demographic,
            "biometric": self.biometric,
            "total": self.total,
            "predicted_growth": self.predicted_growth,
            "peak_month": self.peak_month,
            "dominant_type": self.dominant_type,
        }


@dataclass
class ReasonAnalysis:
    factor: str
    explanation: str
    confidence: int
    impact: str = "positive"
    state: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "factor": self.factor,
            "impact": self.impact,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "state": self.state,
        }


@dataclass
class Insight:
    id: str
    type: str  # trend | anomaly | prediction | recommendation
    title: str
    description: str
    priority: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }


@dataclass
class _StateSeries:
    by_month_of_year: Dict[str, int] = field(default_factory=dict)
    by_month_key: Dict[str, int] = field(default_factory=dict)


def growth_percentage(monthly_values: Sequence[int]) -> float:
    """
    Trend of a monthly series as a percentage of its mean.

    Uses the same first/last trend as the monthly forecast; 0.0 with fewer
    than two months or a zero mean.
    """
    count = len(monthly_values)
    if count < 2:
        return 0.0
    mean = sum(monthly_values) / count
    if not mean:
        return 0.0
    trend = (monthly_values[-1] - monthly_values[0]) / count
    return round(trend / mean * 100, 1)


def _peak_month(by_month_of_year: Dict[str, int]) -> str:
    peak, max_value = "Jan", 0
    for month, value in by_month_of_year.items():
        if value > max_value:
            peak, max_value = month, value
    return peak


def _dominant_type(totals: VerticalTotals) -> str:
    # sorted() is stable: ties resolve in enrollment, demographic, biometric order
    ranked = sorted(Vertical, key=lambda v: totals.get(v), reverse=True)
    return VERTICAL_NAMES[ranked[0]]


def build_state_profiles(records: RecordSet, limit: Optional[int] = None) -> List[StateProfile]:
    """
    Profile every valid state and return the ``limit`` largest by volume.

    Args:
        records: Record snapshot
        limit: Number of profiles to keep (default from settings)

    Returns:
        Profiles sorted by combined total, descending
    """
    limit = settings.STATE_PROFILE_LIMIT if limit is None else limit

    series: Dict[str, _StateSeries] = {}
    for _, vertical_records in records.items():
        for record in vertical_records:
            state = normalize_state_name(record.state)
            if state not in VALID_STATE_SET:
                continue
            parsed = parse_date_string(record.date)
            if parsed is None:
                continue
            state_series = series.setdefault(state, _StateSeries())
            name = MONTHS[parsed.month - 1]
            key = month_key(parsed)
            state_series.by_month_of_year[name] = state_series.by_month_of_year.get(name, 0) + record.total
            state_series.by_month_key[key] = state_series.by_month_key.get(key, 0) + record.total

    profiles = []
    for aggregate in aggregate_by_state(records):
        state_series = series.get(aggregate.name, _StateSeries())
        monthly = [state_series.by_month_key[k] for k in sorted(state_series.by_month_key)]
        profiles.append(StateProfile(
            state=aggregate.name,
            enrollment=aggregate.enrollments,
            demographic=aggregate.demographics,
            biometric=aggregate.biometrics,
            predicted_growth=growth_percentage(monthly),
            peak_month=_peak_month(state_series.by_month_of_year),
            dominant_type=_dominant_type(aggregate),
        ))

    profiles.sort(key=lambda p: p.total, reverse=True)
    return profiles[:limit]


def build_reason_analysis(profiles: Sequence[StateProfile]) -> List[ReasonAnalysis]:
    """National factors followed by the calendar events of profiled states."""
    reasons = [
        ReasonAnalysis(factor=factor, explanation=explanation, confidence=confidence)
        for factor, explanation, confidence in NATIONAL_FACTORS
    ]

    seen = set()
    for profile in profiles:
        if profile.state in seen:
            continue
        seen.add(profile.state)
        for event in STATE_EVENTS.get(profile.state, {}).values():
            reasons.append(ReasonAnalysis(
                factor=f"{profile.state} Specific Event",
                explanation=event,
                confidence=STATE_EVENT_CONFIDENCE,
                state=profile.state,
            ))

    return reasons[:MAX_REASONS]


def build_insights(
    profiles: Sequence[StateProfile],
    anomalies: Sequence[Anomaly],
) -> List[Insight]:
    """Dominant activity, critical spikes and the staffing recommendation."""
    insights = []

    if profiles:
        top = profiles[0]
        insights.append(Insight(
            id="1",
            type="trend",
            title=f"Dominant Activity in {top.state}",
            description=(
                f"{top.state} shows {top.dominant_type} as the primary activity. "
                f"This suggests high {top.dominant_type.lower()} demand in the region."
            ),
            priority="high",
        ))

    high = [a for a in anomalies if a.severity == Severity.HIGH]
    if high:
        insights.append(Insight(
            id="2",
            type="anomaly",
            title="Critical Spikes Detected",
            description=(
                f"Found {len(high)} high-severity spikes. "
                f"Primary cause likely {high[0].reason}."
            ),
            priority="high",
        ))

    insights.append(Insight(
        id="3",
        type="recommendation",
        title="Operational Optimization",
        description=(
            "Based on peak month analysis, consider increasing staff capacity "
            "in Maharashtra and UP during July-August."
        ),
        priority="medium",
    ))

    logger.debug(f"Generated {len(insights)} insights from {len(profiles)} state profiles")
    return insights
