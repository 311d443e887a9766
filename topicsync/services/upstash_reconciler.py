"""Create missing topics on an Upstash managed Kafka cluster."""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from topicsync.core.config import Settings
from topicsync.domain.models.topic import DesiredTopic, qualify
from topicsync.domain.services.reconciliation import missing_topics
from topicsync.infra.upstash.api import UpstashApi

logger = logging.getLogger(__name__)


class UpstashTopicReconciler:
    """
    Creates declared topics absent from the managed cluster.

    The vendor API cannot change partition counts, so existing topics are
    never touched. Creates run one at a time in declaration order; the first
    failing request propagates and the remaining topics are skipped.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        api_factory: Callable[[], UpstashApi] | None = None,
    ) -> None:
        self._api_factory = api_factory or (lambda: UpstashApi(settings))

    def reconcile(self, desired: Sequence[DesiredTopic], origin: str) -> List[str]:
        """Return the scoped names that were created."""
        with self._api_factory() as api:
            existing = [t.topic_name for t in api.list_topics()]
            to_add = missing_topics(desired, origin, existing)

            if not to_add:
                logger.info("No topics to create")
                return []

            logger.info("Creating topics: %s", ", ".join(t.name for t in to_add))

            created: List[str] = []
            for topic in to_add:
                name = qualify(origin, topic.name)
                api.create_topic(name, topic.num_partitions)
                created.append(name)

        logger.info("Topics created successfully")
        return created
