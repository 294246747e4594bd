"""
Seasonal linear forecast of monthly volumes.

Extrapolates each vertical from the mean and a simple first/last trend of
the monthly history, then scales each future month by a fixed seasonal
multiplier.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from aadhaar_dashboard.config import settings
from aadhaar_dashboard.schemas.records import Vertical
from aadhaar_dashboard.services.aggregation import MonthlyTrendPoint, aggregate_by_month
from aadhaar_dashboard.store import RecordSet
from aadhaar_dashboard.utils.constants import MONTHS, SEASONAL_FACTORS
from aadhaar_dashboard.utils.date_utils import add_months, split_month_key
from aadhaar_dashboard.utils.formatting import round_half_up

logger = logging.getLogger(__name__)


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass
class ForecastPoint:
    """Predicted volume of one vertical for one future month."""
    month: str
    month_key: str
    vertical: Vertical
    predicted: int
    confidence: int
    trend: Trend

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "month_key": self.month_key,
            "type": self.vertical.value,
            "predicted": self.predicted,
            "confidence": self.confidence,
            "trend": self.trend.value,
        }


def trend_label(trend: float, mean: float, band: Optional[float] = None) -> Trend:
    """Up/down when the per-month trend exceeds ``band`` of the mean, else stable."""
    band = settings.FORECAST_TREND_BAND if band is None else band
    if trend > mean * band:
        return Trend.UP
    if trend < -mean * band:
        return Trend.DOWN
    return Trend.STABLE


def step_confidence(step: int) -> int:
    """Confidence for the ``step``-th month ahead (1-based)."""
    return max(
        settings.FORECAST_MIN_CONFIDENCE,
        settings.FORECAST_BASE_CONFIDENCE - settings.FORECAST_CONFIDENCE_DECAY * step,
    )


def forecast_monthly(
    points: Sequence[MonthlyTrendPoint],
    horizon: Optional[int] = None,
) -> List[ForecastPoint]:
    """
    Forecast every vertical ``horizon`` months past the last history point.

    Args:
        points: Monthly history in ascending month order
        horizon: Months to forecast (default from settings)

    Returns:
        Forecast points grouped by vertical (enrollment, demographic,
        biometric), each group in month order. Empty when the history is
        shorter than the configured minimum.
    """
    horizon = settings.FORECAST_HORIZON_MONTHS if horizon is None else horizon
    count = len(points)
    if count < settings.FORECAST_MIN_HISTORY:
        logger.debug(f"Skipping forecast: {count} monthly points")
        return []

    last_year, last_month = split_month_key(points[-1].month_key)
    forecast: List[ForecastPoint] = []

    for vertical in Vertical:
        history = np.array([p.value(vertical) for p in points], dtype=float)
        mean = float(history.mean())
        trend = float(history[-1] - history[0]) / count
        label = trend_label(trend, mean)

        for step in range(1, horizon + 1):
            year, month = add_months(last_year, last_month, step)
            base = mean + trend * (count + step)
            predicted = max(0, round_half_up(base * SEASONAL_FACTORS[month]))
            forecast.append(ForecastPoint(
                month=f"{MONTHS[month - 1]} {year}",
                month_key=f"{year:04d}-{month:02d}",
                vertical=vertical,
                predicted=predicted,
                confidence=step_confidence(step),
                trend=label,
            ))

    logger.debug(f"Forecast {horizon} months from {count} monthly points")
    return forecast


def forecast_from_records(records: RecordSet, horizon: Optional[int] = None) -> List[ForecastPoint]:
    """Monthly rollup followed by ``forecast_monthly``."""
    return forecast_monthly(aggregate_by_month(records), horizon=horizon)
