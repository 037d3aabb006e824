"""Tests for the Azure Functions wiring layer.

The module builds its service at import, so each test imports a fresh
copy with the environment pointed at the sample coordinate table.
"""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from types import ModuleType

import azure.functions as func
import pytest

from landsat_revisit.core.config import ConfigValidationError
from landsat_revisit.core.ingress import HttpReply


def _fresh_import() -> ModuleType:
    sys.modules.pop("function_app", None)
    return importlib.import_module("function_app")


@pytest.fixture()
def function_app(monkeypatch: pytest.MonkeyPatch, sample_table_csv: Path) -> ModuleType:
    monkeypatch.setenv("SPATIAL_QUERY_URL", "https://spatial.example.test/query")
    monkeypatch.setenv("COORDINATE_TABLE_PATH", str(sample_table_csv))
    monkeypatch.setenv("CORS_ALLOWED_ORIGIN", "https://app.example.test")
    return _fresh_import()


def _request(headers: dict[str, str] | None = None) -> func.HttpRequest:
    return func.HttpRequest(
        method="GET",
        url="/api/lookup",
        headers=headers or {},
        params={},
        body=b"",
    )


class TestStartup:
    def test_service_loaded(self, function_app: ModuleType) -> None:
        assert len(function_app.service.index) == 4

    def test_bad_config_fails_import(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SPATIAL_QUERY_URL", raising=False)
        with pytest.raises(ConfigValidationError):
            _fresh_import()
        sys.modules.pop("function_app", None)


class TestResponseWiring:
    def test_correlation_id_from_header(self, function_app: ModuleType) -> None:
        req = _request({"x-correlation-id": "abc-123"})
        assert function_app._correlation_id(req) == "abc-123"  # noqa: SLF001

    def test_correlation_id_generated(self, function_app: ModuleType) -> None:
        assert len(function_app._correlation_id(_request())) == 36  # noqa: SLF001

    def test_json_response_headers(self, function_app: ModuleType) -> None:
        reply = HttpReply(404, {"error": {"code": "NO_MATCH", "message": "none"}})
        resp = function_app._to_http_response(reply, "c-1")  # noqa: SLF001
        assert resp.status_code == 404
        assert resp.mimetype == "application/json"
        assert resp.headers["Access-Control-Allow-Origin"] == "https://app.example.test"
        assert resp.headers["x-correlation-id"] == "c-1"
        assert json.loads(resp.get_body()) == reply.body
