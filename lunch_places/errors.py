from __future__ import annotations

from typing import Any, Dict, Optional


class LunchPlacesError(Exception):
    """Base error carrying the HTTP status and the JSON body returned to the caller."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InputValidationError(LunchPlacesError):
    status_code = 400
    default_message = "Invalid request."


class MethodNotAllowedError(LunchPlacesError):
    status_code = 405
    default_message = "Method Not Allowed"


class ConfigurationError(LunchPlacesError):
    status_code = 500
    default_message = "Server configuration error: API key missing."


class UpstreamError(LunchPlacesError):
    status_code = 502
    default_message = "Upstream request failed."


class UpstreamGeocodeError(UpstreamError):
    default_message = "Failed to geocode zip code."


class UpstreamSearchError(UpstreamError):
    default_message = "Failed to fetch nearby places."


class UpstreamEstimationError(UpstreamError):
    default_message = "Failed to compute travel times."


class UnexpectedError(LunchPlacesError):
    status_code = 500
    default_message = "Internal server error."
