"""
Aadhaar Analytics Dashboard.

In-memory analytics for Aadhaar enrollment, demographic update and
biometric update extracts: state/district/pincode rollups, monthly trends,
z-score anomalies, seasonal forecasts and a rule-based question answerer.
"""

__version__ = "1.0.0"
