"""Service configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  Bad configuration is caught at startup rather
    than on the first request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from landsat_revisit.core.constants import (
    DEFAULT_COORDINATE_TABLE_PATH,
    DEFAULT_CYCLE_CALENDAR_URL,
    DEFAULT_DISPLAY_SATELLITES,
)
from landsat_revisit.core.exceptions import ServiceError


class ConfigValidationError(ServiceError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        self.message = message
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Immutable service configuration.

    Loaded once at function startup and injected into the service.

    Attributes:
        spatial_query_url: Feature-layer ``query`` endpoint returning WRS-2 cells.
        spatial_query_token: Opaque credential passed through as ``token``.
        cycle_calendar_url: URL of the acquisition cycle calendar JSON.
        coordinate_table_path: CSV or XLSX file with WRS-2 corner coordinates.
        http_timeout_s: Timeout in seconds for each upstream call.
        calendar_timezone: IANA zone used to build today's calendar key.
        display_satellites: Satellites always listed in the ``satellites`` shape.
        cors_allowed_origin: Value of ``Access-Control-Allow-Origin``.
    """

    spatial_query_url: str = ""
    spatial_query_token: str = ""
    cycle_calendar_url: str = DEFAULT_CYCLE_CALENDAR_URL
    coordinate_table_path: str = DEFAULT_COORDINATE_TABLE_PATH
    http_timeout_s: float = 30.0
    calendar_timezone: str = "UTC"
    display_satellites: tuple[int, ...] = DEFAULT_DISPLAY_SATELLITES
    cors_allowed_origin: str = "*"

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the calendar timezone as a ``ZoneInfo``."""
        return ZoneInfo(self.calendar_timezone)

    @classmethod
    def from_env(cls) -> ServiceConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``HTTP_TIMEOUT_S=abc``).
        """
        config = cls(
            spatial_query_url=os.getenv("SPATIAL_QUERY_URL", ""),
            spatial_query_token=os.getenv("SPATIAL_QUERY_TOKEN", ""),
            cycle_calendar_url=os.getenv("CYCLE_CALENDAR_URL", DEFAULT_CYCLE_CALENDAR_URL),
            coordinate_table_path=os.getenv(
                "COORDINATE_TABLE_PATH", DEFAULT_COORDINATE_TABLE_PATH
            ),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "30")),
            calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "UTC"),
            display_satellites=_parse_satellites(os.getenv("DISPLAY_SATELLITES", "7,8,9")),
            cors_allowed_origin=os.getenv("CORS_ALLOWED_ORIGIN", "*"),
        )
        _validate(config)
        return config


def _parse_satellites(raw: str) -> tuple[int, ...]:
    """Parse ``"7,8,9"`` into ``(7, 8, 9)``."""
    try:
        return tuple(int(token) for token in raw.split(",") if token.strip())
    except ValueError as exc:
        raise ConfigValidationError(
            "DISPLAY_SATELLITES", raw, "must be a comma-separated list of integers"
        ) from exc


def _is_http_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def _validate(config: ServiceConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not _is_http_url(config.spatial_query_url):
        raise ConfigValidationError(
            "SPATIAL_QUERY_URL",
            config.spatial_query_url,
            "must be an http(s) URL",
        )

    if not _is_http_url(config.cycle_calendar_url):
        raise ConfigValidationError(
            "CYCLE_CALENDAR_URL",
            config.cycle_calendar_url,
            "must be an http(s) URL",
        )

    if not config.coordinate_table_path:
        raise ConfigValidationError(
            "COORDINATE_TABLE_PATH",
            config.coordinate_table_path,
            "must not be empty",
        )

    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            "HTTP_TIMEOUT_S",
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )

    try:
        ZoneInfo(config.calendar_timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigValidationError(
            "CALENDAR_TIMEZONE",
            config.calendar_timezone,
            "must be a valid IANA timezone name",
        ) from exc

    if not config.display_satellites:
        raise ConfigValidationError(
            "DISPLAY_SATELLITES",
            config.display_satellites,
            "must list at least one satellite",
        )
