"""Payloads exchanged with the Upstash Kafka control plane."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from topicsync.domain.models.topic import CLEANUP_POLICY_DELETE

RETENTION_TIME_MS = 604_800_000  # 7 days
RETENTION_SIZE_BYTES = 268_435_456  # 256 MiB
MAX_MESSAGE_SIZE_BYTES = 10_485_760  # 10 MiB


class ManagedTopic(BaseModel):
    """One entry of ``GET /topics/{cluster_id}``; vendor extras are ignored."""

    model_config = ConfigDict(extra="ignore")

    topic_name: str


class UpstashTopicRequest(BaseModel):
    """Body of ``POST /topic``."""

    name: str
    partitions: int
    retention_time: int = RETENTION_TIME_MS
    retention_size: int = RETENTION_SIZE_BYTES
    max_message_size: int = MAX_MESSAGE_SIZE_BYTES
    cleanup_policy: str = CLEANUP_POLICY_DELETE
    cluster_id: str
