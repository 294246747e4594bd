"""
Aggregation service - state, district, pincode and time rollups.

Every function here is a pure function of a ``RecordSet`` snapshot; nothing
is cached between calls.
"""
from dataclasses import dataclass, field
import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from aadhaar_dashboard.schemas.records import FIELDS_PER_RECORD, RawRecord, Vertical
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.constants import VALID_STATE_SET
from aadhaar_dashboard.utils.date_utils import (
    format_month_label,
    is_placeholder_date,
    month_key,
    parse_date_string,
)
from aadhaar_dashboard.utils.formatting import round_half_up
from aadhaar_dashboard.utils.state_names import normalize_state_name


@dataclass
class VerticalTotals:
    """Per-vertical running totals for one grouping key."""
    enrollments: int = 0
    demographics: int = 0
    biometrics: int = 0

    @property
    def total(self) -> int:
        return self.enrollments + self.demographics + self.biometrics

    def add(self, vertical: Vertical, value: int) -> None:
        if vertical == Vertical.ENROLLMENT:
            self.enrollments += value
        elif vertical == Vertical.DEMOGRAPHIC:
            self.demographics += value
        else:
            self.biometrics += value

    def get(self, vertical: Vertical) -> int:
        return {
            Vertical.ENROLLMENT: self.enrollments,
            Vertical.DEMOGRAPHIC: self.demographics,
            Vertical.BIOMETRIC: self.biometrics,
        }[vertical]

    def totals_dict(self) -> Dict[str, int]:
        return {
            "enrollments": self.enrollments,
            "demographics": self.demographics,
            "biometrics": self.biometrics,
            "total": self.total,
        }


@dataclass
class StateAggregate(VerticalTotals):
    """Rollup for one canonical state."""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.totals_dict()}


@dataclass
class DistrictAggregate(VerticalTotals):
    """Rollup for one district of a state."""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, **self.totals_dict()}


@dataclass
class PincodeAggregate(VerticalTotals):
    """Rollup for one pincode of a district."""
    pincode: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"pincode": self.pincode, **self.totals_dict()}


@dataclass
class MonthlyTrendPoint:
    """Vertical totals for one calendar month."""
    month_key: str
    enrollment: int = 0
    demographic: int = 0
    biometric: int = 0

    @property
    def label(self) -> str:
        return format_month_label(self.month_key)

    @property
    def total(self) -> int:
        return self.enrollment + self.demographic + self.biometric

    def value(self, vertical: Vertical) -> int:
        return getattr(self, vertical.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.label,
            "full_month": self.month_key,
            "enrollment": self.enrollment,
            "demographic": self.demographic,
            "biometric": self.biometric,
            "total": self.total,
        }


@dataclass
class DailyTrendPoint(VerticalTotals):
    """Vertical totals for one raw date string."""
    date: str = ""
    parsed: Optional[datetime.date] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, **self.totals_dict()}


@dataclass
class DataQualityReport:
    """Diagnostic summary of the loaded records."""
    total_records: int
    unique_states: int
    unique_districts: int
    date_range_start: str
    date_range_end: str
    missing_values: int
    duplicates: int
    data_completeness: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_records": self.total_records,
            "unique_states": self.unique_states,
            "unique_districts": self.unique_districts,
            "date_range": {"start": self.date_range_start, "end": self.date_range_end},
            "missing_values": self.missing_values,
            "duplicates": self.duplicates,
            "data_completeness": self.data_completeness,
        }


def _valid_state(record: RawRecord) -> Optional[str]:
    """Normalized state of a record, or None when outside the canonical set."""
    state = normalize_state_name(record.state)
    if not state or state not in VALID_STATE_SET:
        return None
    return state


def _accumulate(
    records: RecordSet,
    key_func: Callable[[RawRecord], Optional[Any]],
    factory: Callable[[Any], VerticalTotals],
) -> Dict[Any, VerticalTotals]:
    """Group records by ``key_func`` (None skips), summing vertical totals."""
    buckets: Dict[Any, VerticalTotals] = {}
    for vertical, vertical_records in records.items():
        for record in vertical_records:
            key = key_func(record)
            if key is None:
                continue
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = factory(key)
            bucket.add(vertical, record.total)
    return buckets


def aggregate_by_state(records: RecordSet) -> List[StateAggregate]:
    """
    Per-state totals over the canonical state set.

    Records whose state does not normalize into the 36 valid states are
    dropped. Output keeps first-contribution order.
    """
    buckets = _accumulate(records, _valid_state, lambda name: StateAggregate(name=name))
    return list(buckets.values())


def rank_states(
    aggregates: Iterable[StateAggregate],
    descending: bool = True,
) -> List[StateAggregate]:
    """Stable sort by combined total; ties keep their original order."""
    return sorted(aggregates, key=lambda s: s.total, reverse=descending)


def aggregate_by_month(records: RecordSet) -> List[MonthlyTrendPoint]:
    """
    Per calendar month totals, ascending by 'YYYY-MM' key.

    Records without a parseable date are skipped.
    """
    months: Dict[str, MonthlyTrendPoint] = {}
    for vertical, vertical_records in records.items():
        for record in vertical_records:
            parsed = parse_date_string(record.date)
            if parsed is None:
                continue
            key = month_key(parsed)
            point = months.get(key)
            if point is None:
                point = months[key] = MonthlyTrendPoint(month_key=key)
            setattr(point, vertical.value, point.value(vertical) + record.total)
    return [months[key] for key in sorted(months)]


def aggregate_by_date(records: RecordSet) -> List[DailyTrendPoint]:
    """Per raw date string totals, sorted chronologically."""
    def date_key(record: RawRecord) -> Optional[str]:
        return None if is_placeholder_date(record.date) else record.date

    buckets = _accumulate(records, date_key, lambda d: DailyTrendPoint(date=d))
    points = []
    for point in buckets.values():
        point.parsed = parse_date_string(point.date)
        if point.parsed is not None:
            points.append(point)
    return sorted(points, key=lambda p: p.parsed)


def _state_matcher(state: str) -> Callable[[RawRecord], bool]:
    target = normalize_state_name(state).lower()
    return lambda record: normalize_state_name(record.state).lower() == target


def aggregate_by_district(records: RecordSet, state: str) -> List[DistrictAggregate]:
    """Districts of one state, sorted by combined total (descending)."""
    in_state = _state_matcher(state)
    buckets = _accumulate(
        records,
        lambda r: r.district if in_state(r) else None,
        lambda name: DistrictAggregate(name=name),
    )
    return sorted(buckets.values(), key=lambda d: d.total, reverse=True)


def aggregate_by_pincode(records: RecordSet, state: str, district: str) -> List[PincodeAggregate]:
    """Pincodes of one state+district pair, sorted by combined total (descending)."""
    in_state = _state_matcher(state)
    buckets = _accumulate(
        records,
        lambda r: r.pincode if in_state(r) and r.district == district else None,
        lambda pincode: PincodeAggregate(pincode=pincode),
    )
    return sorted(buckets.values(), key=lambda p: p.total, reverse=True)


def build_data_quality_report(records: RecordSet) -> DataQualityReport:
    """
    Record counts, coverage, missing fields and composite-key duplicates.

    Completeness assumes 7 fields per record regardless of vertical.
    """
    states = set()
    districts = set()
    dates: List[str] = []
    missing = 0
    duplicates = 0
    seen: set = set()

    for record in records.all_records():
        normalized = normalize_state_name(record.state)
        if normalized in VALID_STATE_SET:
            states.add(normalized)
        if record.district:
            districts.add(record.district)
        if record.date:
            dates.append(record.date)

        missing += sum(1 for value in record.field_values() if value is None or value == "")

        key = record.composite_key(normalized)
        if key in seen:
            duplicates += 1
        seen.add(key)

    total_records = records.total_records
    total_fields = total_records * FIELDS_PER_RECORD
    completeness = (total_fields - missing) / total_fields * 100 if total_fields else 0

    return DataQualityReport(
        total_records=total_records,
        unique_states=len(states),
        unique_districts=len(districts),
        date_range_start=min(dates) if dates else "N/A",
        date_range_end=max(dates) if dates else "N/A",
        missing_values=missing,
        duplicates=duplicates,
        data_completeness=round_half_up(completeness),
    )


def vertical_totals(records: RecordSet) -> Dict[str, int]:
    """Unfiltered per-vertical totals plus the count of valid states (KPI cards)."""
    states = {
        s for s in (normalize_state_name(r.state) for r in records.all_records())
        if s in VALID_STATE_SET
    }
    return {
        "enrollments": sum(r.total for r in records.enrollment),
        "demographics": sum(r.total for r in records.demographic),
        "biometrics": sum(r.total for r in records.biometric),
        "active_states": len(states),
        "total_records": records.total_records,
    }


def age_breakdown(records: RecordSet) -> Dict[str, Dict[str, int]]:
    """Sum of every age-band column, grouped by vertical."""
    return {
        Vertical.ENROLLMENT.value: {
            "0-5": sum(r.age_0_5 for r in records.enrollment),
            "5-17": sum(r.age_5_17 for r in records.enrollment),
            "18+": sum(r.age_18_greater for r in records.enrollment),
        },
        Vertical.DEMOGRAPHIC.value: {
            "5-17": sum(r.demo_age_5_17 for r in records.demographic),
            "17+": sum(r.demo_age_17_plus for r in records.demographic),
        },
        Vertical.BIOMETRIC.value: {
            "5-17": sum(r.bio_age_5_17 for r in records.biometric),
            "17+": sum(r.bio_age_17_plus for r in records.biometric),
        },
    }


def choropleth_levels(
    aggregates: Iterable[StateAggregate],
    category: Optional[Vertical] = None,
) -> List[Dict[str, Any]]:
    """
    Map shading level (0-4) per state for one category (None = all verticals).

    Level is the quartile band of value / max value; 0 means no activity.
    """
    aggregates = list(aggregates)
    values: List[Tuple[StateAggregate, int]] = [
        (s, s.total if category is None else s.get(category)) for s in aggregates
    ]
    max_value = max((v for _, v in values), default=0) or 1

    levels = []
    for state, value in values:
        intensity = value / max_value
        if value == 0:
            level = 0
        elif intensity > 0.75:
            level = 4
        elif intensity > 0.5:
            level = 3
        elif intensity > 0.25:
            level = 2
        else:
            level = 1
        levels.append({
            "state": state.name,
            "value": value,
            "intensity": round(intensity, 4),
            "level": level,
        })
    return levels
