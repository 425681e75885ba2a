from .stats import PodEphemeralStorageStat, Snapshot, build_snapshot
from .summary import FsStats, NodeStats, PodReference, PodStats, Summary, parse_summary

__all__ = [
    "FsStats",
    "NodeStats",
    "PodEphemeralStorageStat",
    "PodReference",
    "PodStats",
    "Snapshot",
    "Summary",
    "build_snapshot",
    "parse_summary",
]
