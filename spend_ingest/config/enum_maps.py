"""Enum mappings for standardizing categorical data."""

DELIVERY_LEVEL_MAP = {
    "campaign": "campaign",
    "adset": "adset",
    "ad set": "adset",
    "ad_set": "adset",
    "ad": "ad",
}

# Cold-traffic naming markers
PROSPECTING_KEYWORDS = ("prospecting", "cold", "broad")

# Warm/retargeting markers; any match overrides a cold match
REMARKETING_KEYWORDS = ("remarketing", "retarget", "rmk", "retargeting", "rm")

# Trailing summary rows in ad exports
SUMMARY_ROW_NAMES = {"total", "grand total"}
