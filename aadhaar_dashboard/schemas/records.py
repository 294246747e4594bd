"""
Raw record Pydantic schemas for the three uploaded verticals.
"""
from pydantic import BaseModel, field_validator
from typing import Any, ClassVar, Dict, Iterator, Tuple
from enum import Enum
import math


class Vertical(str, Enum):
    """Data category of an uploaded extract."""
    ENROLLMENT = "enrollment"
    DEMOGRAPHIC = "demographic"
    BIOMETRIC = "biometric"


TEXT_FIELDS = ("date", "state", "district", "pincode")

# Fixed per-record field count used by the completeness score
FIELDS_PER_RECORD = 7


def coerce_text(value: Any) -> str:
    """None/NaN -> '', everything else -> stripped str."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def coerce_count(value: Any) -> int:
    """
    Coerce a count cell to a non-negative int.

    Missing, non-numeric, NaN and infinite values become 0; fractions
    truncate toward zero; negatives clamp to 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(str(value).strip())
    except (ValueError, TypeError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


class RawRecord(BaseModel):
    """Fields shared by every vertical."""
    vertical: ClassVar[Vertical]
    count_fields: ClassVar[Tuple[str, ...]] = ()

    date: str = ""
    state: str = ""
    district: str = ""
    pincode: str = ""

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return coerce_text(v)

    @property
    def total(self) -> int:
        """Vertical-specific sum of the age-band counts."""
        return sum(getattr(self, name) for name in self.count_fields)

    def field_values(self) -> Iterator[Any]:
        """All field values, text fields first."""
        for name in TEXT_FIELDS + self.count_fields:
            yield getattr(self, name)

    def composite_key(self, normalized_state: str) -> Tuple[str, str, str, str]:
        """Duplicate-detection key (date, normalized state, district, pincode)."""
        return (self.date, normalized_state, self.district, self.pincode)


class EnrollmentRecord(RawRecord):
    """Single enrollment record."""
    vertical: ClassVar[Vertical] = Vertical.ENROLLMENT
    count_fields: ClassVar[Tuple[str, ...]] = ("age_0_5", "age_5_17", "age_18_greater")

    age_0_5: int = 0
    age_5_17: int = 0
    age_18_greater: int = 0

    @field_validator(*count_fields, mode="before")
    @classmethod
    def _coerce_counts(cls, v):
        return coerce_count(v)


class DemographicRecord(RawRecord):
    """Single demographic update record."""
    vertical: ClassVar[Vertical] = Vertical.DEMOGRAPHIC
    count_fields: ClassVar[Tuple[str, ...]] = ("demo_age_5_17", "demo_age_17_plus")

    demo_age_5_17: int = 0
    demo_age_17_plus: int = 0

    @field_validator(*count_fields, mode="before")
    @classmethod
    def _coerce_counts(cls, v):
        return coerce_count(v)


class BiometricRecord(RawRecord):
    """Single biometric update record."""
    vertical: ClassVar[Vertical] = Vertical.BIOMETRIC
    count_fields: ClassVar[Tuple[str, ...]] = ("bio_age_5_17", "bio_age_17_plus")

    bio_age_5_17: int = 0
    bio_age_17_plus: int = 0

    @field_validator(*count_fields, mode="before")
    @classmethod
    def _coerce_counts(cls, v):
        return coerce_count(v)


RECORD_TYPES: Dict[Vertical, type] = {
    Vertical.ENROLLMENT: EnrollmentRecord,
    Vertical.DEMOGRAPHIC: DemographicRecord,
    Vertical.BIOMETRIC: BiometricRecord,
}
