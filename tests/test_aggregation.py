import pytest

from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import (
    StateAggregate,
    age_breakdown,
    aggregate_by_date,
    aggregate_by_district,
    aggregate_by_month,
    aggregate_by_pincode,
    aggregate_by_state,
    build_data_quality_report,
    choropleth_levels,
    rank_states,
    vertical_totals,
)
from aadhaar_dashboard.store import RecordSet

from conftest import biometric, demographic, enrollment


@pytest.fixture
def maharashtra_records():
    return RecordSet.from_lists(
        enrollment=[
            enrollment("Maharashtra", "Pune", "01-03-2025", "411001", 10, 10, 10),
            enrollment("mh", "Pune", "01-03-2025", "411001", 5, 5, 10),
        ],
        demographic=[
            demographic("maharashtra", "Mumbai", "15-04-2025", "400001", 10, 10),
        ],
        biometric=[
            biometric("Xyz Region", "Nowhere", "", "", 5, 5),
        ],
    )


def test_state_rollup_merges_aliases(maharashtra_records):
    states = aggregate_by_state(maharashtra_records)

    assert [s.name for s in states] == ["Maharashtra"]
    assert states[0].enrollments == 50
    assert states[0].demographics == 20
    assert states[0].biometrics == 0
    assert states[0].total == 70


def test_state_rollup_drops_non_canonical_states(maharashtra_records):
    names = {s.name for s in aggregate_by_state(maharashtra_records)}
    assert "Xyz Region" not in names


def test_rank_states_is_stable_on_ties():
    states = [
        StateAggregate(name="Goa", enrollments=5),
        StateAggregate(name="Assam", enrollments=10),
        StateAggregate(name="Bihar", enrollments=5),
    ]
    assert [s.name for s in rank_states(states)] == ["Assam", "Goa", "Bihar"]
    assert [s.name for s in rank_states(states, descending=False)] == ["Goa", "Bihar", "Assam"]


def test_monthly_rollup_sorted_and_skips_bad_dates():
    records = RecordSet.from_lists(
        enrollment=[
            enrollment(date="15-04-2025", age_0_5=7),
            enrollment(date="01-03-2025", age_0_5=3),
            enrollment(date="2025-03-20", age_0_5=2),
            enrollment(date="garbage", age_0_5=100),
        ],
        biometric=[biometric(date="02-04-2025", bio_age_5_17=4)],
    )

    points = aggregate_by_month(records)

    assert [p.month_key for p in points] == ["2025-03", "2025-04"]
    assert points[0].enrollment == 5
    assert points[1].enrollment == 7
    assert points[1].biometric == 4
    assert points[0].to_dict()["month"] == "Mar 25"


def test_daily_rollup_is_chronological_not_lexicographic():
    records = RecordSet.from_lists(enrollment=[
        enrollment(date="02-05-2025", age_0_5=1),
        enrollment(date="15-04-2025", age_0_5=2),
        enrollment(date="undefined", age_0_5=3),
    ])

    points = aggregate_by_date(records)

    assert [p.date for p in points] == ["15-04-2025", "02-05-2025"]


def test_district_and_pincode_drill_down(maharashtra_records):
    districts = aggregate_by_district(maharashtra_records, "MH")
    assert [(d.name, d.total) for d in districts] == [("Pune", 50), ("Mumbai", 20)]

    pincodes = aggregate_by_pincode(maharashtra_records, "maharashtra", "Pune")
    assert [(p.pincode, p.total) for p in pincodes] == [("411001", 50)]


def test_data_quality_report(maharashtra_records):
    report = build_data_quality_report(maharashtra_records)

    assert report.total_records == 4
    assert report.unique_states == 1
    assert report.unique_districts == 3
    assert report.date_range_start == "01-03-2025"
    assert report.date_range_end == "15-04-2025"
    assert report.missing_values == 2
    assert report.duplicates == 1
    # (28 - 2) / 28 = 92.86%
    assert report.data_completeness == 93


def test_data_quality_half_complete():
    records = RecordSet.from_lists(enrollment=[
        enrollment(state="", district="", date="", pincode=""),
        enrollment(state="Goa", district="", date="", pincode=""),
    ])

    report = build_data_quality_report(records)

    assert report.missing_values == 7
    assert report.data_completeness == 50


def test_data_quality_empty(empty_records):
    report = build_data_quality_report(empty_records).to_dict()

    assert report["total_records"] == 0
    assert report["data_completeness"] == 0
    assert report["date_range"] == {"start": "N/A", "end": "N/A"}


def test_vertical_totals_are_unfiltered(maharashtra_records):
    totals = vertical_totals(maharashtra_records)

    assert totals["enrollments"] == 50
    assert totals["biometrics"] == 10
    assert totals["active_states"] == 1
    assert totals["total_records"] == 4


def test_age_breakdown(maharashtra_records):
    ages = age_breakdown(maharashtra_records)

    assert ages["enrollment"] == {"0-5": 15, "5-17": 15, "18+": 20}
    assert ages["demographic"] == {"5-17": 10, "17+": 10}
    assert ages["biometric"] == {"5-17": 5, "17+": 5}


def test_choropleth_levels():
    states = [
        StateAggregate(name="Goa", enrollments=100),
        StateAggregate(name="Assam", enrollments=60),
        StateAggregate(name="Bihar", enrollments=10, biometrics=5),
        StateAggregate(name="Kerala"),
    ]

    levels = {row["state"]: row["level"] for row in choropleth_levels(states)}
    assert levels == {"Goa": 4, "Assam": 3, "Bihar": 1, "Kerala": 0}

    biometric_levels = {row["state"]: row["level"] for row in choropleth_levels(states, Vertical.BIOMETRIC)}
    assert biometric_levels["Bihar"] == 4
    assert biometric_levels["Goa"] == 0
