"""
Z-score anomaly detection per state/district series.

For each vertical, records are grouped by (normalized state, district) in
upload order. Within a group the population mean and standard deviation of
the per-record totals give each observation a z-score; observations beyond
the threshold are flagged as spikes or drops and annotated with a likely
cause from the state event calendar.
"""
import logging
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import RawRecord, Vertical
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.constants import GENERIC_ANOMALY_REASON, STATE_EVENTS
from aadhaar_dashboard.utils.date_utils import parse_date_string
from aadhaar_dashboard.utils.state_names import normalize_state_name

logger = logging.getLogger(__name__)


class AnomalyType(str, Enum):
    SPIKE = "spike"
    DROP = "drop"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"  # reserved: the z-score bands only produce high/medium


@dataclass
class Anomaly:
    """A single flagged observation."""
    date: str
    state: str
    district: str
    value: int
    vertical: Vertical
    anomaly_type: AnomalyType
    severity: Severity
    reason: str
    z_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "state": self.state,
            "district": self.district,
            "value": self.value,
            "type": self.vertical.value,
            "anomaly_type": self.anomaly_type.value,
            "severity": self.severity.value,
            "reason": self.reason,
            "z_score": round(self.z_score, 3),
        }


def explain_anomaly(state: str, month: Optional[int]) -> str:
    """Known calendar event for the state and 1-indexed month, else the generic reason."""
    if month is None:
        return GENERIC_ANOMALY_REASON
    return STATE_EVENTS.get(state, {}).get(str(month), GENERIC_ANOMALY_REASON)


def z_scores(values: List[int]) -> np.ndarray:
    """
    Population z-scores of a series.

    A constant series (std == 0) scores 0 everywhere.
    """
    series = np.asarray(values, dtype=float)
    std = series.std()  # ddof=0
    if std == 0:
        return np.zeros_like(series)
    return (series - series.mean()) / std


def classify(
    z: float,
    threshold: float,
    high_threshold: float,
) -> Optional[Tuple[AnomalyType, Severity]]:
    """Direction and severity for a z-score, or None when within the threshold."""
    if abs(z) <= threshold:
        return None
    anomaly_type = AnomalyType.SPIKE if z > 0 else AnomalyType.DROP
    severity = Severity.HIGH if abs(z) > high_threshold else Severity.MEDIUM
    return anomaly_type, severity


def _group_records(records: Tuple[RawRecord, ...]) -> Dict[Tuple[str, str], List[RawRecord]]:
    groups: Dict[Tuple[str, str], List[RawRecord]] = {}
    for record in records:
        state = normalize_state_name(record.state)
        if not state:
            continue
        groups.setdefault((state, record.district), []).append(record)
    return groups


def detect_vertical_anomalies(
    records: Tuple[RawRecord, ...],
    vertical: Vertical,
    threshold: Optional[float] = None,
    high_threshold: Optional[float] = None,
    min_observations: Optional[int] = None,
) -> List[Anomaly]:
    """
    Flag outliers for one vertical.

    Args:
        records: Records of a single vertical
        vertical: Their vertical
        threshold: |z| above which an observation is flagged
        high_threshold: |z| above which severity is high
        min_observations: Smallest group that is scored

    Returns:
        Anomalies in group order, then upload order within a group
    """
    threshold = settings.ANOMALY_Z_THRESHOLD if threshold is None else threshold
    high_threshold = settings.ANOMALY_HIGH_Z if high_threshold is None else high_threshold
    min_observations = settings.ANOMALY_MIN_OBSERVATIONS if min_observations is None else min_observations

    detected: List[Anomaly] = []

    for (state, district), group in _group_records(records).items():
        if len(group) < min_observations:
            continue

        values = [record.total for record in group]
        scores = z_scores(values)

        for idx, (record, value, z) in enumerate(zip(group, values, scores)):
            flagged = classify(float(z), threshold, high_threshold)
            if flagged is None:
                continue
            anomaly_type, severity = flagged

            parsed = parse_date_string(record.date)
            detected.append(Anomaly(
                date=record.date if parsed is not None else f"Entry {idx + 1}",
                state=state,
                district=district,
                value=value,
                vertical=vertical,
                anomaly_type=anomaly_type,
                severity=severity,
                reason=explain_anomaly(state, parsed.month if parsed is not None else None),
                z_score=float(z),
            ))

    return detected


def detect_anomalies(
    records: RecordSet,
    limit: Optional[int] = None,
    **thresholds: Any,
) -> List[Anomaly]:
    """
    Detect anomalies across all three verticals.

    Results are ordered high severity first (stable otherwise) and truncated
    to ``limit`` (default from settings).
    """
    limit = settings.ANOMALY_MAX_RESULTS if limit is None else limit

    detected: List[Anomaly] = []
    for vertical, vertical_records in records.items():
        detected.extend(detect_vertical_anomalies(vertical_records, vertical, **thresholds))

    logger.debug(f"Flagged {len(detected)} anomalies before truncation to {limit}")

    detected.sort(key=lambda a: 0 if a.severity == Severity.HIGH else 1)
    return detected[:limit]
