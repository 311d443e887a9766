"""Topic models shared by both reconcilers."""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

# Broker-side defaults (CreateTopics v4+ accepts -1 for both).
BROKER_DEFAULT = -1
CLEANUP_POLICY_DELETE = "delete"


def qualify(origin: str, name: str) -> str:
    """Return the origin-scoped topic name, e.g. ``staging.orders``."""
    return f"{origin}.{name}"


class DesiredTopic(BaseModel):
    """A declared topic and its target partition count."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(
        ...,
        pattern=r"^[\w\-.]+$",
        examples=["orders"],
        description="Topic name without the origin prefix",
    )
    num_partitions: int = Field(..., ge=1, alias="numPartitions")


class ObservedTopic(BaseModel):
    """Topic metadata as read from the cluster admin API."""

    name: str
    partitions: List[int] = Field(default_factory=list)

    @property
    def partition_count(self) -> int:
        return len(self.partitions)


class PartitionIncrease(BaseModel):
    """Request to add *count* partitions to *topic*."""

    topic: str
    count: int = Field(..., gt=0)


class TopicCreation(BaseModel):
    """A topic the cluster-admin reconciler will create."""

    topic: str
    num_partitions: int = BROKER_DEFAULT
    replication_factor: int = BROKER_DEFAULT
    configs: Dict[str, str] = Field(
        default_factory=lambda: {"cleanup.policy": CLEANUP_POLICY_DELETE}
    )


class TopicPlan(BaseModel):
    """Changes computed from one desired vs. observed comparison."""

    to_create: List[TopicCreation] = Field(default_factory=list)
    to_increase: List[PartitionIncrease] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.to_create and not self.to_increase
