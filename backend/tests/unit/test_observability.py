"""Unit tests for logging, request IDs and health checks"""

import json
import logging
from unittest.mock import MagicMock

from ai.ports import UnconfiguredVisionProvider
from domain.catalog.ports import CatalogStoreError
from infrastructure.storage.catalog_store import InMemoryCatalogStore
from observability.health import (
    ComponentHealth,
    HealthStatus,
    check_catalog_health,
    check_catalog_store_health,
    check_vision_health,
    get_overall_health,
)
from observability.logging_config import JSONFormatter, RequestIDFilter
from observability.request_id import (
    get_request_id,
    request_id_var,
    resolve_request_id,
    set_request_id,
)


class TestRequestId:
    """Test request id helpers"""

    def test_default_outside_request(self):
        token = request_id_var.set(None)
        try:
            assert get_request_id() == "no-request-id"
        finally:
            request_id_var.reset(token)

    def test_set_and_get(self):
        token = request_id_var.set(None)
        try:
            set_request_id("abc-123")
            assert get_request_id() == "abc-123"
        finally:
            request_id_var.reset(token)

    def test_incoming_id_reused(self):
        assert resolve_request_id("req_42.a-b") == "req_42.a-b"

    def test_malformed_incoming_id_replaced(self):
        generated = resolve_request_id("bad id\nwith newline")
        assert generated != "bad id\nwith newline"
        assert len(generated) == 32

    def test_missing_incoming_id(self):
        assert resolve_request_id(None)


class TestJSONFormatter:
    """Test JSON log formatting"""

    def make_record(self, message, **extra):
        record = logging.LogRecord("catalog.import_service", logging.INFO, __file__, 10, message, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        RequestIDFilter().filter(record)
        return record

    def test_fields(self):
        data = json.loads(JSONFormatter().format(self.make_record("Catalog imported")))
        assert data["level"] == "INFO"
        assert data["logger"] == "catalog.import_service"
        assert data["message"] == "Catalog imported"
        assert data["timestamp"].endswith("Z")
        assert "request_id" in data

    def test_arabic_not_escaped(self):
        line = JSONFormatter().format(self.make_record("بيبسي"))
        assert "بيبسي" in line

    def test_extra_fields(self):
        record = self.make_record("x", filename="catalog.xlsx", catalog_size=3, unrelated="nope")
        data = json.loads(JSONFormatter().format(record))
        assert data["filename"] == "catalog.xlsx"
        assert data["catalog_size"] == 3
        assert "unrelated" not in data


class TestHealthChecks:
    """Test component health checks"""

    def test_store_healthy(self):
        health = check_catalog_store_health(InMemoryCatalogStore())
        assert health.status == HealthStatus.HEALTHY
        assert health.latency_ms is not None

    def test_store_unreachable(self):
        store = MagicMock()
        store.ping.return_value = False
        assert check_catalog_store_health(store).status == HealthStatus.UNHEALTHY

    def test_store_error(self):
        store = MagicMock()
        store.ping.side_effect = CatalogStoreError("down")
        assert check_catalog_store_health(store).status == HealthStatus.UNHEALTHY

    def test_empty_catalog_degraded(self):
        assert check_catalog_health(0).status == HealthStatus.DEGRADED
        assert check_catalog_health(5).status == HealthStatus.HEALTHY

    def test_unconfigured_vision_degraded(self, fake_vision):
        assert check_vision_health(UnconfiguredVisionProvider()).status == HealthStatus.DEGRADED
        assert check_vision_health(fake_vision).status == HealthStatus.HEALTHY

    def test_overall(self):
        healthy = ComponentHealth(HealthStatus.HEALTHY)
        degraded = ComponentHealth(HealthStatus.DEGRADED)
        unhealthy = ComponentHealth(HealthStatus.UNHEALTHY)

        assert get_overall_health({"a": healthy, "b": healthy}) == HealthStatus.HEALTHY
        assert get_overall_health({"a": healthy, "b": degraded}) == HealthStatus.DEGRADED
        assert get_overall_health({"a": degraded, "b": unhealthy}) == HealthStatus.UNHEALTHY
