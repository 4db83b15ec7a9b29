# reldate/core/contract.py
"""
reldate Rendering Contract

This module defines the locked constants for how reldate maps a time delta
onto a rule template: placeholder tokens, unit sizes and the fallback format.

If you change any constants in here, bump RELDATE_RULES_VERSION.
"""

RELDATE_RULES_VERSION = "0.1.0"

# Unit sizes (seconds). Months are a fixed 30-day approximation.
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY

# Week numbers are compared modulo this value
WEEKS_PER_YEAR = 52

# Template placeholders -> Magnitudes attribute
PLACEHOLDER_TOKENS = {
    "%(M)": "minutes",
    "%(H)": "hours",
    "%(d)": "days",
    "%(w)": "weeks",
    "%(m)": "months",
    "%(y)": "years",
}

# Used when no rule matches (or the table is empty)
FALLBACK_FORMAT = "%Y-%m-%d"

# Config spelling of the catch-all criterion
CATCH_ALL = "always"
