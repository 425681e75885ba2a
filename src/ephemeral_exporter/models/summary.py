# src/ephemeral_exporter/models/summary.py
"""
Pydantic models for the subset of the kubelet stats summary
(/api/v1/nodes/<node>/proxy/stats/summary) the exporter reads.

Only the fields needed to project per-pod ephemeral storage are modelled;
everything else in the payload is ignored.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError, field_validator

from ..core.exceptions import DecodeError


class FsStats(BaseModel):
    """Filesystem usage as reported by the kubelet."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    available_bytes: Optional[NonNegativeInt] = Field(None, alias="availableBytes")
    capacity_bytes: Optional[NonNegativeInt] = Field(None, alias="capacityBytes")
    used_bytes: Optional[NonNegativeInt] = Field(None, alias="usedBytes")
    inodes_free: Optional[NonNegativeInt] = Field(None, alias="inodesFree")
    inodes: Optional[NonNegativeInt] = Field(None, alias="inodes")
    inodes_used: Optional[NonNegativeInt] = Field(None, alias="inodesUsed")


class PodReference(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    namespace: Optional[str] = None
    uid: Optional[str] = None


class PodStats(BaseModel):
    """
    Stats for a single pod. A pod that has just been created may not carry
    a reference or ephemeral storage stats yet, so both are optional.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pod_ref: Optional[PodReference] = Field(None, alias="podRef")
    ephemeral_storage: Optional[FsStats] = Field(
        None,
        validation_alias=AliasChoices("ephemeral-storage", "ephemeralStorage", "ephemeral_storage"),
    )


class NodeStats(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    node_name: str = Field(..., alias="nodeName")


class Summary(BaseModel):
    """
    Top-level kubelet stats summary.

    The node section is required: an API server Status object (or any other
    JSON document) served in place of a summary is rejected instead of being
    read as a summary without pods.
    """

    model_config = ConfigDict(extra="ignore")

    node: NodeStats
    pods: List[PodStats] = Field(default_factory=list)

    @field_validator("pods", mode="before")
    @classmethod
    def _null_pods_as_empty(cls, value):
        # The kubelet encodes an empty pod list as null
        if value is None:
            return []
        return value


def parse_summary(content: bytes) -> Summary:
    """
    Decodes a raw stats summary payload.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the summary schema.
    """
    try:
        summary = Summary.model_validate_json(content)
    except ValidationError as e:
        raise DecodeError(f"Malformed stats summary payload: {e.error_count()} error(s)") from e
    return summary
