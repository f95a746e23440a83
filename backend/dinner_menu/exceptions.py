"""
Errors raised while serving a menu request.

Each error carries the HTTP status and the `{error, message}` body the API
returns for it; `main` registers one handler that renders them all.
"""

from typing import Any, Optional


class MenuApiError(Exception):
    """Base class for every request-terminating error.

    Attributes:
        error: short machine-facing error title (the `error` field)
        message: human-readable message shown to the user
        details: optional extra context, omitted from the body when None
        http_status: status code the handler responds with
    """

    http_status = 500
    error = "Internal error"
    message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return f"{self.error}: {self.message}"


# Request errors


class BadRequestError(MenuApiError):
    http_status = 400
    error = "Bad request"
    message = "The request body is invalid."


class MethodNotAllowedError(MenuApiError):
    http_status = 405
    error = "Method not allowed"
    message = "This endpoint only accepts POST requests"


class RateLimitedError(MenuApiError):
    http_status = 429
    error = "Too many requests"
    message = "Please wait a minute before generating another menu"


class ConfigurationError(MenuApiError):
    http_status = 500
    error = "Configuration error"
    message = "API key not configured. Please contact support."


# Provider errors (raised by the generation API)


class ServiceBusyError(MenuApiError):
    http_status = 429
    error = "Service busy"
    message = "The AI service is currently busy. Please try again in a moment."


class ContentFilteredError(MenuApiError):
    http_status = 400
    error = "Content filtered"
    message = "The request was filtered by safety systems. Please adjust your selections."


class GenerationFailedError(MenuApiError):
    http_status = 500
    error = "Generation failed"
    message = "Failed to generate menu. Please try again."


# Response-shape errors (the model answered, but not with a usable menu)


class InvalidAIResponseError(MenuApiError):
    http_status = 500
    error = "Invalid AI response"
    message = "The AI did not return a valid menu format. Please try again."


class MenuParseError(MenuApiError):
    http_status = 500
    error = "Parse error"
    message = "Could not parse AI response. Please try again."


class InvalidMenuStructureError(MenuApiError):
    http_status = 500
    error = "Invalid menu structure"
    message = "The AI returned an incomplete menu. Please try again."


class InvalidMenuItemError(MenuApiError):
    http_status = 500
    error = "Invalid menu item"
    message = "One or more menu items are incomplete. Please try again."
