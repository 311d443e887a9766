"""Desired vs. observed topic comparison.

Pure functions only; the reconcilers in ``topicsync.services`` feed them live
metadata and act on the result.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from topicsync.domain.models.topic import (
    BROKER_DEFAULT,
    DesiredTopic,
    ObservedTopic,
    PartitionIncrease,
    TopicCreation,
    TopicPlan,
    qualify,
)


def qualified_names(desired: Sequence[DesiredTopic], origin: str) -> List[str]:
    """Return origin-scoped names in declaration order."""
    return [qualify(origin, t.name) for t in desired]


def find_desired(
    desired: Sequence[DesiredTopic], origin: str, qualified_name: str
) -> Optional[DesiredTopic]:
    """Return the declaration whose scoped name is *qualified_name*, or None."""
    for topic in desired:
        if qualify(origin, topic.name) == qualified_name:
            return topic
    return None


def missing_topics(
    desired: Sequence[DesiredTopic], origin: str, observed_names: Iterable[str]
) -> List[DesiredTopic]:
    """Return declarations whose scoped name is absent from *observed_names*."""
    present = set(observed_names)
    return [t for t in desired if qualify(origin, t.name) not in present]


def under_provisioned(
    desired: Sequence[DesiredTopic], origin: str, observed: Sequence[ObservedTopic]
) -> List[PartitionIncrease]:
    """Return partition increases for observed topics below their target.

    Observed topics without a matching declaration are never touched, and a
    topic at or above its target count is left alone.
    """
    increases: List[PartitionIncrease] = []
    for meta in observed:
        match = find_desired(desired, origin, meta.name)
        if match is None:
            continue
        if meta.partition_count < match.num_partitions:
            increases.append(
                PartitionIncrease(
                    topic=meta.name,
                    count=match.num_partitions - meta.partition_count,
                )
            )
    return increases


def plan_cluster_changes(
    desired: Sequence[DesiredTopic], origin: str, observed: Sequence[ObservedTopic]
) -> TopicPlan:
    """Combine missing and under-provisioned topics into one plan."""
    absent = missing_topics(desired, origin, (m.name for m in observed))

    to_create: List[TopicCreation] = []
    for name in qualified_names(absent, origin):
        match = find_desired(desired, origin, name)
        # Unreachable while names derive from the same declarations; kept as a fallback.
        num_partitions = match.num_partitions if match is not None else BROKER_DEFAULT
        to_create.append(TopicCreation(topic=name, num_partitions=num_partitions))

    return TopicPlan(
        to_create=to_create,
        to_increase=under_provisioned(desired, origin, observed),
    )
