"""
Production defaults for the print shop.

Per-unit process durations (minutes) for each garment type, the sizes the
workshop handles, and weekday conventions used by the work calendar.
"""

# =============================================================================
# WEEKDAYS
# =============================================================================
# Work days are stored 0=Sunday ... 6=Saturday (the settings screen convention).
# Python's date.weekday() is 0=Monday, see services.delivery_projector_service.

WEEKDAY_NAMES = {
    0: "sunday",
    1: "monday",
    2: "tuesday",
    3: "wednesday",
    4: "thursday",
    5: "friday",
    6: "saturday",
}

# Monday to Saturday
DEFAULT_WORK_DAYS = [1, 2, 3, 4, 5, 6]


# =============================================================================
# PROCESS DURATIONS (minutes per unit)
# =============================================================================

# Printing for polos is averaged over size groups at 5 m of paper per hour:
#   sizes 4-8:    10 polos/hour = 6 min
#   sizes 10-14:   7 polos/hour = 8.57 min
#   sizes 16-XXL:  5 polos/hour = 12 min
#   average ~8.86, rounded up to 8.9
DEFAULT_PROCESS_DURATIONS = {
    "polo": {
        "printing": 8.9,
        "cutting": 1,
        "pressing": 2.5,
        "qc": 1.0,
        "contingency": 1.25,
    },
    "long_sleeve_polo": {
        "printing": 10.0,
        "cutting": 1,
        "pressing": 3.0,
        "qc": 1.0,
        "contingency": 1.5,
    },
    "shorts": {
        "printing": 6.5,
        "cutting": 1,
        "pressing": 2.0,
        "qc": 1.0,
        "contingency": 1.05,
    },
    "skirt_shorts": {
        "printing": 8.0,
        "cutting": 1,
        "pressing": 2.5,
        "qc": 1.0,
        "contingency": 1.25,
    },
    "athletic_shorts": {
        "printing": 7.0,
        "cutting": 1,
        "pressing": 2.0,
        "qc": 1.0,
        "contingency": 1.1,
    },
}

# Sizes offered in the per-size duration table
KNOWN_SIZES = ["4", "6", "8", "10", "12", "14", "16", "S", "M", "L", "XL", "XXL"]

# Number of production stages sharing the item-weighted estimate
# when approximating time left in a partially finished pipeline
PRODUCTION_STAGE_COUNT = 4
