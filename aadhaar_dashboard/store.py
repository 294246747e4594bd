"""
In-memory record store.

Holds the three append-only record collections for the lifetime of the
process. Analytic code never reads the store directly: it receives a
``RecordSet`` snapshot and computes from that.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import (
    BiometricRecord,
    DemographicRecord,
    EnrollmentRecord,
    RawRecord,
    Vertical,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordSet:
    """Immutable snapshot of the three record collections."""
    enrollment: Tuple[EnrollmentRecord, ...] = ()
    demographic: Tuple[DemographicRecord, ...] = ()
    biometric: Tuple[BiometricRecord, ...] = ()

    @classmethod
    def from_lists(
        cls,
        enrollment: Iterable[EnrollmentRecord] = (),
        demographic: Iterable[DemographicRecord] = (),
        biometric: Iterable[BiometricRecord] = (),
    ) -> "RecordSet":
        return cls(tuple(enrollment), tuple(demographic), tuple(biometric))

    def items(self) -> Iterator[Tuple[Vertical, Tuple[RawRecord, ...]]]:
        """(vertical, records) pairs in enrollment, demographic, biometric order."""
        yield Vertical.ENROLLMENT, self.enrollment
        yield Vertical.DEMOGRAPHIC, self.demographic
        yield Vertical.BIOMETRIC, self.biometric

    def all_records(self) -> Iterator[RawRecord]:
        yield from self.enrollment
        yield from self.demographic
        yield from self.biometric

    def counts(self) -> Dict[str, int]:
        return {vertical.value: len(records) for vertical, records in self.items()}

    @property
    def total_records(self) -> int:
        return len(self.enrollment) + len(self.demographic) + len(self.biometric)

    @property
    def has_data(self) -> bool:
        return self.total_records > 0


@dataclass
class ActivityNotice:
    """Upload activity entry shown in the dashboard feed."""
    title: str
    content: str
    vertical: Vertical
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "vertical": self.vertical.value,
            "timestamp": self.timestamp.isoformat(),
        }


class RecordStore:
    """Append-only holder of uploaded records."""

    def __init__(self, feed_limit: Optional[int] = None):
        self._records: Dict[Vertical, List[RawRecord]] = {v: [] for v in Vertical}
        self._activity: List[ActivityNotice] = []
        self._feed_limit = feed_limit if feed_limit is not None else settings.ACTIVITY_FEED_LIMIT
        self._lock = threading.Lock()

    def append(
        self,
        vertical: Vertical,
        records: Sequence[RawRecord],
        source: str = "upload",
    ) -> int:
        """
        Append records of one vertical.

        Uploads are additive: nothing is replaced or deduplicated.

        Returns:
            Number of records appended
        """
        with self._lock:
            self._records[vertical].extend(records)
            unique_states = len({r.state for r in records})
            self._activity.insert(0, ActivityNotice(
                title=f"{vertical.value.capitalize()} Data Loaded",
                content=(
                    f"Successfully loaded {len(records)} {vertical.value} records "
                    f"covering {unique_states} states from {source}."
                ),
                vertical=vertical,
            ))
            del self._activity[self._feed_limit:]

        logger.info(f"Appended {len(records):,} {vertical.value} records from {source}")
        return len(records)

    def snapshot(self) -> RecordSet:
        """Freeze the current collections for one computation pass."""
        with self._lock:
            return RecordSet(
                enrollment=tuple(self._records[Vertical.ENROLLMENT]),
                demographic=tuple(self._records[Vertical.DEMOGRAPHIC]),
                biometric=tuple(self._records[Vertical.BIOMETRIC]),
            )

    def activity(self) -> List[ActivityNotice]:
        with self._lock:
            return list(self._activity)

    def count(self, vertical: Vertical) -> int:
        with self._lock:
            return len(self._records[vertical])


# Process-wide store for the dashboard application
record_store = RecordStore()


def get_store() -> RecordStore:
    """
    Dependency for getting the record store.
    Use with FastAPI's Depends().
    """
    return record_store
