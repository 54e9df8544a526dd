"""Fixed lookup tables used by the scorers.

Keys are normalized (see :func:`careflow.core.utils.lookup_table`), so lookups
ignore case and surrounding whitespace.
"""

from __future__ import annotations

from careflow.core.utils import lookup_table, normalize_key


DEFAULT_ACCESS_WEIGHT = 6

# Equity score weights
TRANSPORT_WEIGHTS = lookup_table({
    "Public transit": 12,
    "Bus": 12,
    "Community shuttle": 10,
    "Rideshare support": 6,
    "Family driver": 4,
    "Limited": 10,
    "None": 15,
    "Ambulance": 8,
})

INSURANCE_WEIGHTS = lookup_table({
    "Medicaid": 15,
    "Medicare": 10,
    "Uninsured": 18,
    "Commercial PPO": 4,
    "Private": 5,
    "None": 18,
})

HOUSING_WEIGHTS = lookup_table({
    "Homeless": 20,
    "Unstable housing": 15,
    "Shelter": 18,
    "Temporary": 12,
    "Stable": 0,
    "Owned": 0,
    "Rented": 0,
})

FOOD_SECURITY_WEIGHTS = lookup_table({
    "Food insecure": 12,
    "Very food insecure": 15,
    "Limited access": 10,
    "Secure": 0,
})

EMPLOYMENT_WEIGHTS = lookup_table({
    "Unemployed": 8,
    "Underemployed": 6,
    "Part-time": 4,
    "Disabled": 10,
    "Retired": 2,
    "Employed": 0,
    "Full-time": 0,
})

LANGUAGE_BARRIER_WEIGHTS = lookup_table({
    "Limited English": 10,
    "Non-English speaker": 12,
    "Interpreter needed": 10,
    "English proficient": 0,
})

SUPPORT_NETWORK_WEIGHTS = lookup_table({
    "No support": 10,
    "Limited support": 6,
    "Family nearby": 0,
    "Strong support": 0,
})

INCOME_WEIGHTS = lookup_table({
    "Low": 10,
    "Very low": 15,
})

# Match barrier factors (scaled by 0.5 into the barrier bonus)
TRANSPORT_BARRIER_FACTORS = lookup_table({
    "Limited": 8,
    "Public transit": 6,
    "Bus": 6,
    "Community shuttle": 5,
    "Rideshare support": 4,
    "Family driver": 2,
    "Personal vehicle": 0,
})

INSURANCE_BARRIER_FACTORS = lookup_table({
    "Uninsured": 10,
    "Medicaid": 8,
    "Medicare": 4,
    "Commercial PPO": 1,
    "Private": 1,
})

# Values that count as an equity barrier for tier 1
BARRIER_TRANSPORT_MODES = frozenset(
    normalize_key(v) for v in ("Limited", "Public transit", "Bus", "Ambulance", "None")
)
BARRIER_INSURANCE_TYPES = frozenset(normalize_key(v) for v in ("Medicaid", "Uninsured", "None"))

# Insurance values meaning "every plan accepted"
ACCEPTS_ALL_INSURANCE = frozenset({"all", "any"})
