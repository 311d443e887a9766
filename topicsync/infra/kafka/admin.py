"""Kafka Admin façade built on kafka-python."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Sequence

from kafka.admin import KafkaAdminClient, NewPartitions, NewTopic  # kafka-python

from topicsync.core.config import Settings, get_settings
from topicsync.domain.models.topic import ObservedTopic, PartitionIncrease, TopicCreation

logger = logging.getLogger(__name__)

CREATE_PARTITIONS_TIMEOUT_MS = 5_000


def _field(entry: dict, key: str, legacy_key: str):
    """Read a metadata field by its kafka-python 3.x name, falling back to the 2.x name."""
    if key in entry:
        return entry[key]
    return entry[legacy_key]


class KafkaAdminFacade:
    """Encapsulates the admin calls the cluster reconciler needs."""

    def __init__(self, client: KafkaAdminClient) -> None:
        self._client = client

    # ---------- Metadata ---------------------------------------------------

    def fetch_topic_metadata(self) -> list[ObservedTopic]:
        """Return every topic in the cluster with its partition ids."""
        names = list(self._client.list_topics())
        if not names:
            return []
        out = []
        for t in self._client.describe_topics(names):
            out.append(
                ObservedTopic(
                    name=_field(t, "name", "topic"),
                    partitions=[_field(p, "partition_index", "partition") for p in t.get("partitions") or []],
                )
            )
        logger.debug("Fetched metadata for %d topics", len(out))
        return out

    # ---------- Mutations --------------------------------------------------

    def create_topics(self, topics: Sequence[TopicCreation]) -> None:
        """Create *topics* in one batched request."""
        new_topics = [
            NewTopic(
                name=t.topic,
                num_partitions=t.num_partitions,
                replication_factor=t.replication_factor,
                topic_configs=dict(t.configs),
            )
            for t in topics
        ]
        self._client.create_topics(new_topics=new_topics, validate_only=False)

    def create_partitions(
        self,
        increases: Sequence[PartitionIncrease],
        current: dict[str, int],
    ) -> None:
        """Add partitions in one batched request.

        ``NewPartitions`` takes the resulting total, so each increase is
        added to the topic's *current* partition count.
        """
        self._client.create_partitions(
            topic_partitions={
                inc.topic: NewPartitions(total_count=current[inc.topic] + inc.count)
                for inc in increases
            },
            timeout_ms=CREATE_PARTITIONS_TIMEOUT_MS,
            validate_only=False,
        )

    def close(self) -> None:
        self._client.close()


@contextmanager
def admin_session(
    settings: Settings | None = None,
    client_factory: Callable[..., KafkaAdminClient] = KafkaAdminClient,
) -> Iterator[KafkaAdminFacade]:
    """Open an admin connection and close it on every exit path."""
    settings = settings or get_settings()
    admin = KafkaAdminFacade(client_factory(**settings.kafka_kwargs()))
    try:
        yield admin
    finally:
        admin.close()
