# topicsync/core/config.py
import json
import logging
from functools import lru_cache
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from topicsync.domain.models.topic import DesiredTopic

UPSTASH_API_BASE = "https://api.upstash.com/v2/kafka"


class Settings(BaseSettings):
    """
    Settings loaded from environment variables (prefix ``TOPICSYNC_``) and .env.

    Notes
    -----
    - `topics` accepts either JSON (recommended) or a compact string form:
        TOPICSYNC_TOPICS='[{"name": "orders", "numPartitions": 3}]'
      or:
        TOPICSYNC_TOPICS='orders:3, payments:6'
    - Upstash settings are only needed by the managed-service reconciler.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOPICSYNC_",
        extra="ignore",
    )

    # ---------- Kafka client/admin ----------
    kafka_bootstrap: str = Field("localhost:9092")
    client_id: str = "topicsync"
    request_timeout_ms: int = 20_000

    # ---------- Security (set when using SASL/SSL) ----------
    security_protocol: str = "PLAINTEXT"   # e.g. "SASL_SSL", "SSL"
    sasl_mechanism: str | None = None
    sasl_plain_username: str | None = None
    sasl_plain_password: str | None = None
    ssl_cafile: str | None = None

    # ---------- Topic declarations ----------
    origin: str = "local"
    group_id: str = "topicsync"
    topics: Annotated[List[DesiredTopic], NoDecode] = Field(default_factory=list)

    # ---------- Upstash ----------
    upstash_token: str | None = None
    upstash_cluster_id: str | None = None
    upstash_api_base: str = UPSTASH_API_BASE

    # ---------- Logging ----------
    log_level: str = "INFO"

    @field_validator("topics", mode="before")
    def _parse_topics(cls, v):
        """Accept a JSON array of objects or 'name:partitions' pairs."""
        if v is None:
            return []
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except ValueError:
                pass
            result = []
            for part in v.split(","):
                part = part.strip()
                if not part:
                    continue
                name, _, count = part.partition(":")
                if not count:
                    raise ValueError(f"topic {name!r} is missing a partition count")
                result.append({"name": name.strip(), "num_partitions": int(count)})
            return result
        return v

    @field_validator("topics")
    def _unique_topic_names(cls, v: List[DesiredTopic]) -> List[DesiredTopic]:
        """Reject topics declared more than once."""
        seen: set[str] = set()
        dupes = []
        for t in v:
            if t.name in seen and t.name not in dupes:
                dupes.append(t.name)
            seen.add(t.name)
        if dupes:
            raise ValueError(f"duplicate topic declarations: {', '.join(dupes)}")
        return v

    def kafka_kwargs(self) -> dict:
        """Common kafka-python client kwargs (admin, producer, consumer)."""
        kw = dict(
            bootstrap_servers=self.kafka_bootstrap.split(","),
            client_id=self.client_id,
            request_timeout_ms=self.request_timeout_ms,
            security_protocol=self.security_protocol,
        )
        if self.security_protocol.startswith("SASL"):
            kw.update(
                sasl_mechanism=self.sasl_mechanism,
                sasl_plain_username=self.sasl_plain_username,
                sasl_plain_password=self.sasl_plain_password,
            )
        if self.security_protocol.endswith("SSL"):
            kw.update(ssl_cafile=self.ssl_cafile)
        return kw


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()  # pragma: no cover


def configure_logging(level: str | int | None = None) -> None:
    """Minimal logging for the bootstrap process; the library never calls this itself."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("kafka").setLevel(logging.WARNING)
