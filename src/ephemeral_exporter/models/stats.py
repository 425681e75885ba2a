# src/ephemeral_exporter/models/stats.py

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from .summary import Summary


class PodEphemeralStorageStat(BaseModel):
    """
    One pod's ephemeral storage reading at a point in time.

    Attributes:
        node_name: Name of the polled node
        pod_name: Pod name
        namespace: Pod namespace
        used_bytes: Bytes used by the pod's ephemeral storage, if reported
        available_bytes: Bytes still available on the backing filesystem, if reported
        capacity_bytes: Total capacity of the backing filesystem, if reported
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    node_name: str = Field(..., description="Name of the polled node")
    pod_name: str = Field(..., description="Pod name")
    namespace: str = Field(..., description="Pod namespace")
    used_bytes: Optional[NonNegativeInt] = Field(None, description="Used ephemeral storage in bytes")
    available_bytes: Optional[NonNegativeInt] = Field(None, description="Available ephemeral storage in bytes")
    capacity_bytes: Optional[NonNegativeInt] = Field(None, description="Ephemeral storage capacity in bytes")


class Snapshot(BaseModel):
    """
    The complete result of one poll cycle. Snapshots are never mutated;
    a new poll publishes a brand-new instance.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stats: Tuple[PodEphemeralStorageStat, ...] = Field(default_factory=tuple)
    node_name: str = ""
    captured_at: Optional[datetime] = Field(None, description="UTC time the poll cycle completed")

    def __len__(self) -> int:
        return len(self.stats)


def build_snapshot(summary: Summary, captured_at: Optional[datetime] = None) -> Snapshot:
    """
    Projects a decoded stats summary into a snapshot.

    Pods missing a reference (name and namespace) or ephemeral storage
    stats are left out instead of producing partial records.
    """
    node_name = summary.node.node_name
    stats: List[PodEphemeralStorageStat] = []
    for pod in summary.pods:
        pod_ref = pod.pod_ref
        fs = pod.ephemeral_storage
        if pod_ref is None or not pod_ref.name or not pod_ref.namespace or fs is None:
            continue
        stats.append(
            PodEphemeralStorageStat(
                node_name=node_name,
                pod_name=pod_ref.name,
                namespace=pod_ref.namespace,
                used_bytes=fs.used_bytes,
                available_bytes=fs.available_bytes,
                capacity_bytes=fs.capacity_bytes,
            )
        )
    return Snapshot(stats=tuple(stats), node_name=node_name, captured_at=captured_at)
