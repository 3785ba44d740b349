"""
Unified error handling for anxcloud.
"""

from typing import Any


class AnxcloudError(Exception):
    """Base exception for anxcloud errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}. {self.suggestion}"
        return self.message


class ConfigurationError(AnxcloudError):
    """The given configuration is insufficient or erroneous."""

    pass


class EnvMissingError(ConfigurationError):
    """A required environment variable is missing."""

    def __init__(self, name: str):
        super().__init__(
            f"environment variable missing: {name}",
            suggestion=f"Export {name} or pass the value explicitly",
        )
        self.name = name


class TransportError(AnxcloudError):
    """The HTTP round trip itself failed (connection, timeout, ...)."""

    pass


class ServerError(AnxcloudError):
    """The API answered with a 5xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(AnxcloudError):
    """A response body could not be parsed into the expected shape."""

    pass


class ResponseError(AnxcloudError):
    """
    A non-2xx, non-5xx response from the API.

    Carries the structured error body returned by the engine:
    ``{"error": {"code", "message", "validation"}, "debug": {"source"}}``.
    """

    def __init__(
        self,
        status_code: int,
        code: int = 0,
        message: str = "",
        validation: dict[str, str] | None = None,
        debug_source: str | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.error_message = message
        self.validation = validation or {}
        self.debug_source = debug_source
        super().__init__(
            f"received error from api: code={code} message={message!r} "
            f"validation={self.validation}"
        )


class ConditionNeverMetError(AnxcloudError):
    """Looped all scanned items and the condition was never met."""

    def __init__(self, message: str = "looped all items and the condition was never met"):
        super().__init__(message)


class InvalidContentTypeError(AnxcloudError):
    """Page content is not an ordered sequence. Not recoverable."""

    def __init__(self, content: Any):
        super().__init__(
            "The page content is supposed to be a list or tuple "
            f"but was {type(content).__name__}"
        )
        self.content = content
