"""Services that sit between storage and the insights engine."""

from .dashboard import DashboardLoadResult, DashboardService
from .insights import InsightsLoadResult, InsightsService

__all__ = [
    "DashboardLoadResult",
    "DashboardService",
    "InsightsLoadResult",
    "InsightsService",
]
