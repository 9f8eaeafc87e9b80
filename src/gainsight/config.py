"""Deploy-time configuration for gainsight.

Thresholds and window lengths used by the insights engine are fixed here so
every caller sees the same numbers.
"""

import os
from pathlib import Path

from .models.insights import AggregationMode

# Default data directory (overridable with GAINSIGHT_DATA_DIR)
DATA_DIR = Path(
    os.environ.get(
        "GAINSIGHT_DATA_DIR",
        Path(__file__).parent.parent.parent / "data",
    )
)

# Used when a request carries no explicit user id
DEFAULT_USER_ID = os.environ.get("GAINSIGHT_DEFAULT_USER", "local")

# How per-exercise session scores combine into one daily strength value
STRENGTH_AGGREGATION_MODE = AggregationMode.SUM

# Correlation
MIN_OVERLAP_DAYS = 5
STRONG_CORRELATION = 0.6
MODERATE_CORRELATION = 0.3

# Facts
SHORT_WINDOW_DAYS = 7
LONG_WINDOW_DAYS = 30

# Improvements: recent window compared with the window right before it
TREND_WINDOW_DAYS = 14
STRENGTH_IMPROVEMENT_PCT = 2.0
STRENGTH_DECLINE_PCT = 5.0

# Achievements
MIN_STREAK_DAYS = 3
MAX_ACHIEVEMENTS = 6

# Suggestions
STALE_LOG_DAYS = 7
