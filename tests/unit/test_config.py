"""Tests for service configuration.

Covers:
- Default values
- Loading from environment variables
- Type coercion (string env vars → numeric/tuple fields)
- Fail-fast validation
"""

from __future__ import annotations

import os
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from landsat_revisit.core.config import ConfigValidationError, ServiceConfig
from landsat_revisit.core.constants import DEFAULT_CYCLE_CALENDAR_URL

_REQUIRED_ENV = {"SPATIAL_QUERY_URL": "https://gis.example.test/FeatureServer/0/query"}


class TestServiceConfigDefaults:
    """Verify default configuration values."""

    def test_default_calendar_url(self) -> None:
        assert ServiceConfig().cycle_calendar_url == DEFAULT_CYCLE_CALENDAR_URL

    def test_default_table_path(self) -> None:
        assert ServiceConfig().coordinate_table_path == "data/wrs2_coordinates.csv"

    def test_default_timeout(self) -> None:
        assert ServiceConfig().http_timeout_s == 30.0

    def test_default_display_satellites(self) -> None:
        assert ServiceConfig().display_satellites == (7, 8, 9)

    def test_default_timezone(self) -> None:
        cfg = ServiceConfig()
        assert cfg.calendar_timezone == "UTC"
        assert cfg.tzinfo == ZoneInfo("UTC")

    def test_default_token_empty(self) -> None:
        assert ServiceConfig().spatial_query_token == ""


class TestServiceConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = {
            "SPATIAL_QUERY_URL": "https://gis.example.test/query",
            "SPATIAL_QUERY_TOKEN": "abc",
            "CYCLE_CALENDAR_URL": "http://mirror.example.test/cycles.json",
            "COORDINATE_TABLE_PATH": "/srv/wrs2.xlsx",
            "HTTP_TIMEOUT_S": "12.5",
            "CALENDAR_TIMEZONE": "America/Chicago",
            "DISPLAY_SATELLITES": "8, 9",
            "CORS_ALLOWED_ORIGIN": "https://app.example.test",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = ServiceConfig.from_env()

        assert cfg.spatial_query_url == "https://gis.example.test/query"
        assert cfg.spatial_query_token == "abc"
        assert cfg.cycle_calendar_url == "http://mirror.example.test/cycles.json"
        assert cfg.coordinate_table_path == "/srv/wrs2.xlsx"
        assert cfg.http_timeout_s == 12.5
        assert cfg.calendar_timezone == "America/Chicago"
        assert cfg.display_satellites == (8, 9)
        assert cfg.cors_allowed_origin == "https://app.example.test"

    def test_defaults_when_optional_env_missing(self) -> None:
        with patch.dict(os.environ, _REQUIRED_ENV, clear=True):
            cfg = ServiceConfig.from_env()
        assert cfg.cycle_calendar_url == DEFAULT_CYCLE_CALENDAR_URL
        assert cfg.display_satellites == (7, 8, 9)
        assert cfg.cors_allowed_origin == "*"

    def test_frozen_immutability(self) -> None:
        cfg = ServiceConfig()
        with pytest.raises(AttributeError):
            cfg.http_timeout_s = 1.0  # type: ignore[misc]


class TestServiceConfigValidation:
    """Fail-fast validation in from_env."""

    def test_spatial_url_required(self) -> None:
        with (
            patch.dict(os.environ, {}, clear=True),
            pytest.raises(ConfigValidationError, match="SPATIAL_QUERY_URL"),
        ):
            ServiceConfig.from_env()

    def test_spatial_url_must_be_http(self) -> None:
        with (
            patch.dict(os.environ, {"SPATIAL_QUERY_URL": "ftp://x"}, clear=True),
            pytest.raises(ConfigValidationError, match="http"),
        ):
            ServiceConfig.from_env()

    def test_calendar_url_must_be_http(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "CYCLE_CALENDAR_URL": "cycles.json"}, clear=True),
            pytest.raises(ConfigValidationError, match="CYCLE_CALENDAR_URL"),
        ):
            ServiceConfig.from_env()

    def test_empty_table_path_rejected(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "COORDINATE_TABLE_PATH": ""}, clear=True),
            pytest.raises(ConfigValidationError, match="COORDINATE_TABLE_PATH"),
        ):
            ServiceConfig.from_env()

    def test_timeout_zero_rejected(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "HTTP_TIMEOUT_S": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="must be > 0"),
        ):
            ServiceConfig.from_env()

    def test_timeout_not_numeric(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "HTTP_TIMEOUT_S": "abc"}, clear=True),
            pytest.raises(ValueError),
        ):
            ServiceConfig.from_env()

    def test_unknown_timezone_rejected(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "CALENDAR_TIMEZONE": "Mars/Olympus_Mons"}, clear=True),
            pytest.raises(ConfigValidationError, match="CALENDAR_TIMEZONE"),
        ):
            ServiceConfig.from_env()

    def test_display_satellites_not_integers(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "DISPLAY_SATELLITES": "7,eight"}, clear=True),
            pytest.raises(ConfigValidationError, match="DISPLAY_SATELLITES"),
        ):
            ServiceConfig.from_env()

    def test_display_satellites_empty(self) -> None:
        with (
            patch.dict(os.environ, {**_REQUIRED_ENV, "DISPLAY_SATELLITES": " , "}, clear=True),
            pytest.raises(ConfigValidationError, match="at least one"),
        ):
            ServiceConfig.from_env()

    def test_error_attributes(self) -> None:
        err = ConfigValidationError("HTTP_TIMEOUT_S", -1.0, "must be > 0 (seconds)")
        assert err.key == "HTTP_TIMEOUT_S"
        assert err.value == -1.0
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
