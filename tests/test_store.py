from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.store import RecordStore

from conftest import biometric, enrollment


def test_append_is_additive_and_snapshot_is_frozen():
    store = RecordStore()
    store.append(Vertical.ENROLLMENT, [enrollment(age_0_5=1)])

    snapshot = store.snapshot()
    store.append(Vertical.ENROLLMENT, [enrollment(age_0_5=1)])

    assert snapshot.counts()["enrollment"] == 1
    assert store.count(Vertical.ENROLLMENT) == 2
    assert store.snapshot().total_records == 2


def test_activity_feed_newest_first_and_capped():
    store = RecordStore(feed_limit=3)
    for idx in range(5):
        store.append(Vertical.BIOMETRIC, [biometric()] * (idx + 1), source=f"file{idx}.csv")

    activity = store.activity()

    assert len(activity) == 3
    assert activity[0].title == "Biometric Data Loaded"
    assert "5 biometric records" in activity[0].content
    assert "file4.csv" in activity[0].content
