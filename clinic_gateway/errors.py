"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base class for failures that map onto an HTTP reply."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(GatewayError):
    """The caller supplied missing or malformed input."""

    status_code = 400


class ProviderError(GatewayError):
    """The upstream provider call failed."""

    status_code = 500

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message, details)


class ProviderResponseError(ProviderError):
    """The provider answered, but with content that cannot be used."""


class ProviderTimeoutError(ProviderError):
    """The upstream call did not answer before its deadline."""
