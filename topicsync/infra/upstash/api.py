"""Thin httpx client for the Upstash Kafka control plane."""
from __future__ import annotations

import httpx

from topicsync.core.config import Settings, get_settings
from topicsync.domain.models.upstash import ManagedTopic, UpstashTopicRequest


def _authorization(token: str) -> str:
    # Tokens that already carry a scheme ("Basic ...", "Bearer ...") pass through.
    return token if " " in token.strip() else f"Bearer {token}"


class UpstashApi:
    """Wraps the two endpoints topic reconciliation uses.

    Non-2xx responses raise ``httpx.HTTPStatusError``; nothing is retried.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        if not settings.upstash_token or not settings.upstash_cluster_id:
            raise ValueError("upstash_token and upstash_cluster_id must be configured")
        self.cluster_id = settings.upstash_cluster_id
        self._http = httpx.Client(
            base_url=settings.upstash_api_base,
            headers={"Authorization": _authorization(settings.upstash_token)},
            transport=transport,
        )

    def list_topics(self) -> list[ManagedTopic]:
        resp = self._http.get(f"/topics/{self.cluster_id}")
        resp.raise_for_status()
        return [ManagedTopic.model_validate(t) for t in resp.json() or []]

    def create_topic(self, name: str, partitions: int) -> None:
        body = UpstashTopicRequest(name=name, partitions=partitions, cluster_id=self.cluster_id)
        resp = self._http.post("/topic", json=body.model_dump())
        resp.raise_for_status()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "UpstashApi":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
