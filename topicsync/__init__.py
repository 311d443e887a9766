"""Reconcile declared Kafka topics against a cluster or Upstash."""
from topicsync.domain.models.topic import DesiredTopic, qualify
from topicsync.services.cluster_reconciler import ClusterTopicReconciler
from topicsync.services.messaging import KafkaMessaging
from topicsync.services.upstash_reconciler import UpstashTopicReconciler

__all__ = [
    "ClusterTopicReconciler",
    "DesiredTopic",
    "KafkaMessaging",
    "UpstashTopicReconciler",
    "qualify",
]
