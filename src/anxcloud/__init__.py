"""
anxcloud.

Async client for the anxcloud engine API with generic pagination helpers.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("anxcloud")
except PackageNotFoundError:
    __version__ = "unknown"

from .client import AnxcloudClient
from .errors import (
    AnxcloudError,
    ConditionNeverMetError,
    ConfigurationError,
    DecodeError,
    EnvMissingError,
    InvalidContentTypeError,
    ResponseError,
    ServerError,
    TransportError,
)
from .pagination import (
    Page,
    PageEnvelope,
    Pageable,
    PageStream,
    has_next,
    loop_until,
    stream_async,
)
from .settings import AnxcloudSettings

__all__ = [
    "__version__",
    "AnxcloudClient",
    "AnxcloudSettings",
    "AnxcloudError",
    "ConditionNeverMetError",
    "ConfigurationError",
    "DecodeError",
    "EnvMissingError",
    "InvalidContentTypeError",
    "ResponseError",
    "ServerError",
    "TransportError",
    "Page",
    "PageEnvelope",
    "Pageable",
    "PageStream",
    "has_next",
    "loop_until",
    "stream_async",
]
