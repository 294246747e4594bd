from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import MonthlyTrendPoint
from aadhaar_dashboard.services.forecast_engine import (
    Trend,
    forecast_from_records,
    forecast_monthly,
    step_confidence,
    trend_label,
)
from aadhaar_dashboard.store import RecordSet

from conftest import enrollment


def by_vertical(forecast, vertical):
    return [p for p in forecast if p.vertical == vertical]


def test_needs_two_months_of_history():
    assert forecast_monthly([]) == []
    assert forecast_monthly([MonthlyTrendPoint("2025-03", enrollment=10)]) == []


def test_seasonal_linear_forecast_wraps_year():
    history = [
        MonthlyTrendPoint("2025-11", enrollment=100),
        MonthlyTrendPoint("2025-12", enrollment=200),
    ]

    forecast = forecast_monthly(history)
    enrollment_points = by_vertical(forecast, Vertical.ENROLLMENT)

    assert len(forecast) == 18
    assert [p.month for p in enrollment_points] == [
        "Jan 2026", "Feb 2026", "Mar 2026", "Apr 2026", "May 2026", "Jun 2026",
    ]
    # mean 150, trend 50: (150 + 50 * (2 + step)) * seasonal factor
    assert enrollment_points[0].predicted == 285
    assert enrollment_points[1].predicted == 315
    assert enrollment_points[5].predicted == 440
    assert enrollment_points[0].month_key == "2026-01"
    assert [p.confidence for p in enrollment_points] == [90, 85, 80, 75, 70, 65]
    assert all(p.trend == Trend.UP for p in enrollment_points)


def test_flat_zero_vertical_is_stable_zero():
    history = [
        MonthlyTrendPoint("2025-03", enrollment=10),
        MonthlyTrendPoint("2025-04", enrollment=20),
    ]

    demographic_points = by_vertical(forecast_monthly(history), Vertical.DEMOGRAPHIC)

    assert all(p.predicted == 0 for p in demographic_points)
    assert all(p.trend == Trend.STABLE for p in demographic_points)


def test_declining_series_clamps_at_zero():
    history = [
        MonthlyTrendPoint("2025-03", enrollment=1000),
        MonthlyTrendPoint("2025-04", enrollment=0),
    ]

    enrollment_points = by_vertical(forecast_monthly(history), Vertical.ENROLLMENT)

    assert all(p.predicted == 0 for p in enrollment_points)
    assert enrollment_points[0].trend == Trend.DOWN


def test_trend_label_band():
    assert trend_label(5, 100) == Trend.STABLE
    assert trend_label(6, 100) == Trend.UP
    assert trend_label(-6, 100) == Trend.DOWN


def test_confidence_floor():
    assert step_confidence(1) == 90
    assert step_confidence(10) == 60


def test_forecast_from_records():
    records = RecordSet.from_lists(enrollment=[
        enrollment(date="10-11-2025", age_0_5=100),
        enrollment(date="10-12-2025", age_0_5=200),
    ])

    forecast = forecast_from_records(records, horizon=2)

    assert [p.predicted for p in by_vertical(forecast, Vertical.ENROLLMENT)] == [285, 315]
    assert forecast[0].to_dict()["type"] == "enrollment"
