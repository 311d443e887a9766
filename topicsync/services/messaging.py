"""Producer/consumer handles scoped to an origin, plus topic sync."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from kafka import KafkaConsumer, KafkaProducer

from topicsync.core.config import Settings, get_settings
from topicsync.domain.models.topic import DesiredTopic, TopicPlan
from topicsync.domain.services.reconciliation import qualified_names
from topicsync.services.cluster_reconciler import ClusterTopicReconciler

logger = logging.getLogger(__name__)


class KafkaMessaging:
    """
    Owns the kafka-python consumer and producer for one service.

    The handles are exposed as-is; producing and consuming is up to the
    caller.
    """

    def __init__(
        self,
        group_id: str,
        origin: str,
        subscribed_topics: Sequence[DesiredTopic],
        settings: Optional[Settings] = None,
        reconciler: Optional[ClusterTopicReconciler] = None,
        consumer_factory: Callable[..., KafkaConsumer] = KafkaConsumer,
        producer_factory: Callable[..., KafkaProducer] = KafkaProducer,
    ) -> None:
        self._settings = settings or get_settings()
        self.group_id = group_id
        self.origin = origin
        self.subscribed_topics = list(subscribed_topics)
        self.topics: List[str] = qualified_names(self.subscribed_topics, origin)
        self._reconciler = reconciler or ClusterTopicReconciler(self._settings)
        self._consumer_factory = consumer_factory
        self._producer_factory = producer_factory
        self._consumer: KafkaConsumer | None = None
        self._producer: KafkaProducer | None = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kw) -> "KafkaMessaging":
        settings = settings or get_settings()
        return cls(settings.group_id, settings.origin, settings.topics, settings=settings, **kw)

    def sync_topics(self) -> TopicPlan:
        return self._reconciler.reconcile(self.subscribed_topics, self.origin)

    def connect(self) -> None:
        kw = self._settings.kafka_kwargs()
        if self._consumer is None:
            self._consumer = self._consumer_factory(*self.topics, group_id=self.group_id, **kw)
        if self._producer is None:
            self._producer = self._producer_factory(**kw)
        logger.info("Connected consumer group %s to %d topics", self.group_id, len(self.topics))

    @property
    def consumer(self) -> KafkaConsumer:
        if self._consumer is None:
            raise RuntimeError("connect() must be called before using the consumer")
        return self._consumer

    @property
    def producer(self) -> KafkaProducer:
        if self._producer is None:
            raise RuntimeError("connect() must be called before using the producer")
        return self._producer

    def close(self) -> None:
        consumer, self._consumer = self._consumer, None
        producer, self._producer = self._producer, None
        try:
            if consumer is not None:
                consumer.close()
        finally:
            if producer is not None:
                producer.close()
