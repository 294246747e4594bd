"""
Constants for Indian geography, calendars and mappings.
"""

# List of Indian states and union territories (canonical display names)
INDIAN_STATES = [
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chhattisgarh",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
    # Union Territories
    "Andaman and Nicobar Islands",
    "Chandigarh",
    "Dadra and Nagar Haveli and Daman and Diu",
    "Delhi",
    "Jammu and Kashmir",
    "Ladakh",
    "Lakshadweep",
    "Puducherry",
]

VALID_STATE_SET = frozenset(INDIAN_STATES)

# Cleaned (lower-case, single-spaced) alias -> canonical name.
# Declaration order is the substring-match priority order.
STATE_ALIASES = {
    "andhra pradesh": "Andhra Pradesh",
    "ap": "Andhra Pradesh",
    "arunachal pradesh": "Arunachal Pradesh",
    "ar": "Arunachal Pradesh",
    "assam": "Assam",
    "as": "Assam",
    "bihar": "Bihar",
    "br": "Bihar",
    "chhattisgarh": "Chhattisgarh",
    "chattisgarh": "Chhattisgarh",
    "cg": "Chhattisgarh",
    "ct": "Chhattisgarh",
    "goa": "Goa",
    "ga": "Goa",
    "gujarat": "Gujarat",
    "gj": "Gujarat",
    "haryana": "Haryana",
    "hr": "Haryana",
    "himachal pradesh": "Himachal Pradesh",
    "hp": "Himachal Pradesh",
    "jharkhand": "Jharkhand",
    "jh": "Jharkhand",
    "karnataka": "Karnataka",
    "ka": "Karnataka",
    "kerala": "Kerala",
    "kl": "Kerala",
    "madhya pradesh": "Madhya Pradesh",
    "mp": "Madhya Pradesh",
    "maharashtra": "Maharashtra",
    "mh": "Maharashtra",
    "manipur": "Manipur",
    "mn": "Manipur",
    "meghalaya": "Meghalaya",
    "ml": "Meghalaya",
    "mizoram": "Mizoram",
    "mz": "Mizoram",
    "nagaland": "Nagaland",
    "nl": "Nagaland",
    "odisha": "Odisha",
    "orissa": "Odisha",
    "od": "Odisha",
    "or": "Odisha",
    "punjab": "Punjab",
    "pb": "Punjab",
    "rajasthan": "Rajasthan",
    "rj": "Rajasthan",
    "sikkim": "Sikkim",
    "sk": "Sikkim",
    "tamil nadu": "Tamil Nadu",
    "tamilnadu": "Tamil Nadu",
    "tn": "Tamil Nadu",
    "telangana": "Telangana",
    "tg": "Telangana",
    "ts": "Telangana",
    "tripura": "Tripura",
    "tr": "Tripura",
    "uttar pradesh": "Uttar Pradesh",
    "uttarpradesh": "Uttar Pradesh",
    "up": "Uttar Pradesh",
    "uttarakhand": "Uttarakhand",
    "uttaranchal": "Uttarakhand",
    "uk": "Uttarakhand",
    "ut": "Uttarakhand",
    "west bengal": "West Bengal",
    "westbengal": "West Bengal",
    "wb": "West Bengal",
    # Union Territories
    "andaman and nicobar islands": "Andaman and Nicobar Islands",
    "andaman and nicobar": "Andaman and Nicobar Islands",
    "andaman & nicobar islands": "Andaman and Nicobar Islands",
    "andaman & nicobar": "Andaman and Nicobar Islands",
    "a&n islands": "Andaman and Nicobar Islands",
    "an": "Andaman and Nicobar Islands",
    "chandigarh": "Chandigarh",
    "ch": "Chandigarh",
    "dadra and nagar haveli and daman and diu": "Dadra and Nagar Haveli and Daman and Diu",
    "dadra and nagar haveli": "Dadra and Nagar Haveli and Daman and Diu",
    "dadra & nagar haveli": "Dadra and Nagar Haveli and Daman and Diu",
    "daman and diu": "Dadra and Nagar Haveli and Daman and Diu",
    "daman & diu": "Dadra and Nagar Haveli and Daman and Diu",
    "dnhdd": "Dadra and Nagar Haveli and Daman and Diu",
    "dn": "Dadra and Nagar Haveli and Daman and Diu",
    "dd": "Dadra and Nagar Haveli and Daman and Diu",
    "delhi": "Delhi",
    "nct of delhi": "Delhi",
    "new delhi": "Delhi",
    "dl": "Delhi",
    "jammu and kashmir": "Jammu and Kashmir",
    "jammu & kashmir": "Jammu and Kashmir",
    "j&k": "Jammu and Kashmir",
    "jk": "Jammu and Kashmir",
    "ladakh": "Ladakh",
    "la": "Ladakh",
    "lakshadweep": "Lakshadweep",
    "ld": "Lakshadweep",
    "puducherry": "Puducherry",
    "pondicherry": "Puducherry",
    "py": "Puducherry",
}

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Per-calendar-month forecast multipliers (academic/administrative cycles)
SEASONAL_FACTORS = {
    1: 0.95, 2: 0.90, 3: 1.15, 4: 1.05,
    5: 0.85, 6: 0.80, 7: 1.10, 8: 1.20,
    9: 1.15, 10: 1.05, 11: 0.95, 12: 0.85,
}

# State -> 1-indexed calendar month (as str) -> known event
STATE_EVENTS = {
    "Maharashtra": {
        "6": "SSC/HSC Results - High demographic updates expected",
        "7": "Academic Admissions - Spike in new enrollments",
        "10": "Diwali Festive Period - Slowdown in biometric updates",
    },
    "Uttar Pradesh": {
        "3": "Board Exams - Verification peak",
        "7": "New Welfare Scheme Launch - Mass enrollment drives",
        "12": "Year-end Audit - Data cleanup activity",
    },
    "Karnataka": {
        "5": "Election Verification - Update surge",
        "6": "IT Sector Joining - Demographic update peak",
        "9": "Dasara Holidays - Operational dip",
    },
    "Bihar": {
        "7": "Scholarship Season - Surge in children enrollment",
        "8": "Monsoon Impact - Regional accessibility drops",
    },
}

GENERIC_ANOMALY_REASON = "Data synchronization spike"

# Severity levels for anomalies ("low" is reserved, never produced by the z-score rule)
SEVERITY_LEVELS = ["high", "medium", "low"]

# Date strings the upload layer may leave behind for missing values
PLACEHOLDER_DATES = frozenset(["", "undefined", "null"])
