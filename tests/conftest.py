"""
Shared fixtures and record builders.
"""
import pytest
from fastapi.testclient import TestClient

from aadhaar_dashboard.main import app
from aadhaar_dashboard.schemas.records import BiometricRecord, DemographicRecord, EnrollmentRecord
from aadhaar_dashboard.store import RecordSet, RecordStore, get_store


def enrollment(state="Maharashtra", district="Pune", date="01-03-2025", pincode="411001",
               age_0_5=0, age_5_17=0, age_18_greater=0):
    return EnrollmentRecord(
        date=date, state=state, district=district, pincode=pincode,
        age_0_5=age_0_5, age_5_17=age_5_17, age_18_greater=age_18_greater,
    )


def demographic(state="Maharashtra", district="Pune", date="01-03-2025", pincode="411001",
                demo_age_5_17=0, demo_age_17_plus=0):
    return DemographicRecord(
        date=date, state=state, district=district, pincode=pincode,
        demo_age_5_17=demo_age_5_17, demo_age_17_plus=demo_age_17_plus,
    )


def biometric(state="Maharashtra", district="Pune", date="01-03-2025", pincode="411001",
              bio_age_5_17=0, bio_age_17_plus=0):
    return BiometricRecord(
        date=date, state=state, district=district, pincode=pincode,
        bio_age_5_17=bio_age_5_17, bio_age_17_plus=bio_age_17_plus,
    )


@pytest.fixture
def empty_records():
    return RecordSet()


@pytest.fixture
def kerala_punjab_records():
    """Two states, three districts, two dates."""
    return RecordSet.from_lists(
        enrollment=[
            enrollment("Kerala", "Ernakulam", "01-03-2025", "682001", 1000, 200, 34),
            enrollment("Kerala", "Thrissur", "02-03-2025", "680001", 0, 0, 1000),
            enrollment("Punjab", "Ludhiana", "01-03-2025", "141001", 500, 500, 0),
        ],
        demographic=[
            demographic("Punjab", "Ludhiana", "02-03-2025", "141001", 100, 200),
        ],
    )


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
