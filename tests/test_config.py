from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from topicsync.core.config import UPSTASH_API_BASE, Settings, configure_logging
from topicsync.domain.models.topic import DesiredTopic


def test_topics_from_json_env(monkeypatch):
    monkeypatch.setenv("TOPICSYNC_TOPICS", '[{"name": "orders", "numPartitions": 3}]')
    settings = Settings(_env_file=None)
    assert settings.topics == [DesiredTopic(name="orders", num_partitions=3)]


def test_topics_from_compact_env(monkeypatch):
    monkeypatch.setenv("TOPICSYNC_TOPICS", "orders:3, payments:6")
    settings = Settings(_env_file=None)
    assert [(t.name, t.num_partitions) for t in settings.topics] == [("orders", 3), ("payments", 6)]


def test_compact_topic_without_count_is_rejected(monkeypatch):
    monkeypatch.setenv("TOPICSYNC_TOPICS", "orders")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    for var in ("TOPICSYNC_TOPICS", "TOPICSYNC_ORIGIN", "TOPICSYNC_UPSTASH_API_BASE"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.topics == []
    assert settings.upstash_api_base == UPSTASH_API_BASE


def test_kafka_kwargs_plaintext(settings):
    kw = settings.kafka_kwargs()
    assert kw["bootstrap_servers"] == ["broker-1:9092", "broker-2:9092"]
    assert "sasl_mechanism" not in kw
    assert "ssl_cafile" not in kw


def test_kafka_kwargs_sasl_ssl(settings):
    secured = settings.model_copy(
        update={
            "security_protocol": "SASL_SSL",
            "sasl_mechanism": "PLAIN",
            "sasl_plain_username": "user",
            "sasl_plain_password": "pass",
            "ssl_cafile": "/etc/ca.pem",
        }
    )
    kw = secured.kafka_kwargs()
    assert kw["sasl_mechanism"] == "PLAIN"
    assert kw["sasl_plain_username"] == "user"
    assert kw["ssl_cafile"] == "/etc/ca.pem"


def test_configure_logging_quiets_kafka_client():
    configure_logging("DEBUG")
    assert logging.getLogger("kafka").level == logging.WARNING


@pytest.mark.parametrize(
    "value",
    [
        "orders:3, orders:5",
        '[{"name": "orders", "numPartitions": 3}, {"name": "orders", "numPartitions": 5}]',
    ],
)
def test_duplicate_topic_declarations_are_rejected(monkeypatch, value):
    monkeypatch.setenv("TOPICSYNC_TOPICS", value)
    with pytest.raises(ValidationError, match="duplicate topic declarations: orders"):
        Settings(_env_file=None)
