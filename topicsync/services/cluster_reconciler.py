"""Create missing topics and widen partitions on a self-managed cluster."""
from __future__ import annotations

import logging
from typing import Callable, ContextManager, Sequence

from topicsync.core.config import Settings
from topicsync.domain.models.topic import DesiredTopic, TopicPlan
from topicsync.domain.services.reconciliation import plan_cluster_changes
from topicsync.infra.kafka.admin import KafkaAdminFacade, admin_session

logger = logging.getLogger(__name__)


class ClusterTopicReconciler:
    """
    One-shot reconciliation through the Kafka admin API.

    Partition counts only ever grow. Errors from any admin call propagate
    unchanged; topics created before a failure stay created.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: Callable[[], ContextManager[KafkaAdminFacade]] | None = None,
    ) -> None:
        self._session = session or (lambda: admin_session(settings))

    def reconcile(self, desired: Sequence[DesiredTopic], origin: str) -> TopicPlan:
        """Apply the computed plan and return it."""
        with self._session() as admin:
            observed = admin.fetch_topic_metadata()
            plan = plan_cluster_changes(desired, origin, observed)

            if plan.to_increase:
                logger.info(
                    "Modifying partitions for topics: %s",
                    ", ".join(inc.topic for inc in plan.to_increase),
                )
                current = {t.name: t.partition_count for t in observed}
                admin.create_partitions(plan.to_increase, current)

            if plan.to_create:
                logger.info(
                    "Creating topics: %s",
                    ", ".join(t.topic for t in plan.to_create),
                )
                admin.create_topics(plan.to_create)

            if plan.empty:
                logger.info("Topics already in sync for origin %s", origin)
        return plan
