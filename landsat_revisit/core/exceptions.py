"""Unified service exception taxonomy.

Provides a shared base exception hierarchy for the lookup service, its
upstream providers and its startup loaders. Every domain exception
inherits from ``ServiceError`` and carries structured context fields
that drive HTTP status mapping, logging and operator diagnostics.

Taxonomy categories
-------------------
- ``ValidationError``   — caller input violations, never retryable.
- ``TransientError``    — temporary failures (network, upstream), retryable.
- ``PermanentError``    — unrecoverable failures (bad startup data).
- ``NoMatchError``      — valid request, zero results ("not found").

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and response bodies.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Service stage where the error occurred
            (e.g. ``"ingress"``, ``"spatial_query"``).
        code: Machine-readable error code (e.g. ``"INVALID_PARAMS"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, NoMatchError):
            return "not_found"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ServiceError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(ServiceError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(ServiceError):
    """Unrecoverable failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Request-facing errors
# ---------------------------------------------------------------------------


class InvalidParamsError(ValidationError):
    """Malformed or missing request input (e.g. non-numeric latitude).

    Raised before any upstream call is attempted.

    Attributes:
        param: Name of the offending request parameter.
    """

    default_stage = "ingress"
    default_code = "INVALID_PARAMS"

    def __init__(self, param: str, message: str) -> None:
        self.param = param
        super().__init__(message)


class NoMatchError(ServiceError):
    """Valid request and well-formed upstream data, but zero results."""

    default_stage = "matching"
    default_code = "NO_MATCH"


class UpstreamError(TransientError):
    """Transport failure, non-success status or unparseable upstream payload.

    ``message`` holds the full diagnostic for server-side logs; callers
    only ever see ``PUBLIC_MESSAGE``.

    Attributes:
        source: Name of the upstream collaborator (``"spatial_query"``,
            ``"cycle_calendar"``).
    """

    default_code = "UPSTREAM_UNAVAILABLE"

    PUBLIC_MESSAGE = "External data unavailable"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(message, stage=source)

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"
