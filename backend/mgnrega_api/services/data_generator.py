# backend/mgnrega_api/services/data_generator.py
"""
Deterministic stand-in for MGNREGA district metrics.

There is no upstream feed behind this API, so each (district, month, year)
gets a reproducible record derived from a sine transform of a small seed.
Months are zero-based (0 = January) throughout the service.
"""
import math
from datetime import datetime

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# metric -> [min, max)
METRIC_RANGES = {
    "totalJobCards": (80000, 150000),
    "activeWorkers": (40000, 90000),
    "completedWorks": (150, 600),
    "ongoingWorks": (50, 200),
    "totalExpenditure": (80, 200),
    "avgWagePaid": (250, 320),
    "workDemand": (50000, 100000),
    "workProvided": (45000, 95000),
    "avgPaymentDays": (8, 18),
    "womenParticipation": (45, 65),
}


def _seed(district_code, month, year):
    first = ord(district_code[0]) if district_code else 0
    return first + month + year


def _pseudo_random(seed, low, high):
    # Python's % floors, so a negative sine term still maps into [low, high)
    return math.floor(math.sin(seed * 9999) * 10000) % (high - low) + low


def generate_district_data(district_code, month, year):
    seed = _seed(district_code, month, year)
    return {
        metric: _pseudo_random(seed, low, high)
        for metric, (low, high) in METRIC_RANGES.items()
    }


def current_period(now=None):
    now = now or datetime.now()
    return now.month - 1, now.year


def trailing_periods(count=7, now=None):
    """(month, year) pairs for the last `count` months, oldest first, ending now."""
    month, year = current_period(now)
    periods = []
    for offset in range(count - 1, -1, -1):
        y, m = divmod(year * 12 + month - offset, 12)
        periods.append((m, y))
    return periods


def month_short_name(month):
    return MONTH_NAMES[month % 12]
