"""
Utils package initialization.
"""
from aadhaar_dashboard.utils.date_utils import (
    parse_date_string,
    month_key,
    format_month_label,
    add_months,
)
from aadhaar_dashboard.utils.state_names import (
    normalize_state_name,
    is_valid_indian_state,
)
from aadhaar_dashboard.utils.constants import (
    INDIAN_STATES,
    STATE_ALIASES,
    SEASONAL_FACTORS,
)

__all__ = [
    "parse_date_string",
    "month_key",
    "format_month_label",
    "add_months",
    "normalize_state_name",
    "is_valid_indian_state",
    "INDIAN_STATES",
    "STATE_ALIASES",
    "SEASONAL_FACTORS",
]
