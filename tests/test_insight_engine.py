from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.anomaly_detector import Anomaly, AnomalyType, Severity
from aadhaar_dashboard.services.insight_engine import (
    StateProfile,
    build_insights,
    build_reason_analysis,
    build_state_profiles,
    growth_percentage,
)
from aadhaar_dashboard.services.report_builder import build_report, render_report_text
from aadhaar_dashboard.store import RecordSet

from conftest import biometric, enrollment


def profile(state, **overrides):
    values = dict(enrollment=0, demographic=0, biometric=0, predicted_growth=0.0,
                  peak_month="Jan", dominant_type="Enrollment")
    values.update(overrides)
    return StateProfile(state=state, **values)


def test_growth_percentage():
    assert growth_percentage([]) == 0.0
    assert growth_percentage([100]) == 0.0
    assert growth_percentage([0, 0]) == 0.0
    # mean 150, trend 50 per month
    assert growth_percentage([100, 200]) == 33.3


def test_state_profiles():
    records = RecordSet.from_lists(
        enrollment=[
            enrollment("Goa", date="10-03-2025", age_0_5=10),
            enrollment("Goa", date="10-07-2025", age_0_5=30),
            enrollment("Xyz Region", date="10-07-2025", age_0_5=999),
        ],
        biometric=[
            biometric("Assam", date="bad", bio_age_5_17=100),
        ],
    )

    profiles = build_state_profiles(records)

    assert [p.state for p in profiles] == ["Assam", "Goa"]
    assam, goa = profiles
    assert assam.dominant_type == "Biometric"
    assert assam.peak_month == "Jan"
    assert assam.predicted_growth == 0.0
    assert goa.peak_month == "Jul"
    assert goa.predicted_growth == 50.0
    assert goa.to_dict()["total"] == 40


def test_state_profiles_limit():
    records = RecordSet.from_lists(enrollment=[
        enrollment(state, age_0_5=1) for state in ["Goa", "Assam", "Bihar"]
    ])
    assert len(build_state_profiles(records, limit=2)) == 2


def test_reason_analysis_adds_state_events_and_caps():
    profiles = [profile(s) for s in ["Maharashtra", "Uttar Pradesh", "Karnataka", "Bihar"]]

    reasons = build_reason_analysis(profiles)

    assert len(reasons) == 10
    assert reasons[0].factor == "Academic Cycle"
    assert reasons[0].confidence == 92
    assert reasons[2].factor == "Maharashtra Specific Event"
    assert reasons[2].confidence == 85
    assert reasons[-1].state == "Karnataka"


def test_insights():
    spike = Anomaly(
        date="15-07-2025", state="Bihar", district="Patna", value=900,
        vertical=Vertical.ENROLLMENT, anomaly_type=AnomalyType.SPIKE,
        severity=Severity.HIGH, reason="Scholarship Season - Surge in children enrollment",
        z_score=4.4,
    )

    insights = build_insights([profile("Bihar", dominant_type="Demographic")], [spike])

    assert [i.id for i in insights] == ["1", "2", "3"]
    assert "high demographic demand" in insights[0].description
    assert insights[1].description == (
        "Found 1 high-severity spikes. Primary cause likely "
        "Scholarship Season - Surge in children enrollment."
    )
    assert insights[2].priority == "medium"


def test_insights_without_data():
    insights = build_insights([], [])
    assert [i.title for i in insights] == ["Operational Optimization"]


def test_report_bundle_and_text(kerala_punjab_records):
    report = build_report(kerala_punjab_records)

    assert report["data_quality"]["total_records"] == 4
    assert [s["state"] for s in report["top_states"]] == ["Kerala", "Punjab"]
    assert report["enrollment_forecast"] == []

    text = render_report_text(report)
    assert "1. Kerala: Total 2,234" in text
    assert "Insufficient data for predictions" in text
