from .base_collector import BaseCollector
from .stats_summary_collector import StatsSummaryCollector

__all__ = [
    "BaseCollector",
    "StatsSummaryCollector",
]
