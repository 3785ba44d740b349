"""
anxcloud API client.

Thin async wrapper around httpx that authenticates every request with the
engine API token and maps failed responses onto the anxcloud error types.
"""

import logging
import os
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from anxcloud.errors import (
    ConfigurationError,
    DecodeError,
    EnvMissingError,
    ResponseError,
    ServerError,
    TransportError,
)
from anxcloud.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    TOKEN_ENV_NAME,
    AnxcloudSettings,
)
from anxcloud.utils.logging_config import REDACTED, PerformanceMonitor

logger = logging.getLogger(__name__)

USER_AGENT = "anxcloud-python"


class APIError(BaseModel):
    code: int = 0
    message: str = ""
    validation: dict[str, str] = Field(default_factory=dict)


class DebugInfo(BaseModel):
    source: str | None = None


class ErrorResponse(BaseModel):
    """Body the engine sends with a failed (non-5xx) response."""

    error: APIError = Field(default_factory=APIError)
    debug: DebugInfo = Field(default_factory=DebugInfo)


class AnxcloudClient:
    """
    Client for the anxcloud engine API.

    Signs requests with ``Authorization: Token <token>`` and raises:
    - TransportError when the round trip fails
    - ServerError on 5xx responses
    - ResponseError on any other non-2xx response
    - DecodeError when a body is not the expected JSON
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
        log_requests: bool = False,
    ):
        """
        Initialize the client.

        Args:
            token: API token
            base_url: Engine base URL
            timeout: Per-request timeout in seconds
            http_client: Pre-configured httpx client; the caller keeps ownership
            log_requests: Dump requests and responses at DEBUG level
        """
        if not token:
            raise ConfigurationError(
                "could not configure client: token not set",
                suggestion=f"Pass a token or set {TOKEN_ENV_NAME}",
            )
        self._token = token
        self._base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.log_requests = log_requests
        self._client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_env(cls, unset: bool = False, **kwargs: Any) -> "AnxcloudClient":
        """
        Create a client with the token taken from ANEXIA_TOKEN.

        Args:
            unset: Remove the token from the process environment after reading it
            **kwargs: Passed through to the constructor

        Raises:
            EnvMissingError: If ANEXIA_TOKEN is not set
        """
        token = os.environ.get(TOKEN_ENV_NAME)
        if token is None:
            raise EnvMissingError(TOKEN_ENV_NAME)
        if unset:
            del os.environ[TOKEN_ENV_NAME]
        return cls(token, **kwargs)

    @classmethod
    def from_settings(
        cls, settings: AnxcloudSettings, **kwargs: Any
    ) -> "AnxcloudClient":
        """Create a client from loaded settings."""
        if settings.token is None:
            raise EnvMissingError(TOKEN_ENV_NAME)
        kwargs.setdefault("base_url", settings.base_url)
        kwargs.setdefault("timeout", settings.request_timeout)
        return cls(settings.token, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        """Absolute URL for an API path."""
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AnxcloudClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Send a signed request and return the successful response.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            params: Query parameters
            json: JSON request body

        Returns:
            The 2xx httpx.Response
        """
        client = await self._get_client()
        request = client.build_request(
            method,
            self.url(path),
            params=params,
            json=json,
            headers={"Authorization": f"Token {self._token}"},
        )

        if self.log_requests:
            logger.debug(f"request: {_dump_request(request)}")

        try:
            with PerformanceMonitor(logger, f"{method} {request.url.path}"):
                response = await client.send(request)
        except httpx.HTTPError as e:
            raise TransportError(f"error when executing request: {e}") from e

        ok = response.is_success
        if self.log_requests:
            logger.debug(f"response: {_dump_response(response, with_body=ok)}")

        if ok:
            return response

        if response.is_server_error:
            raise ServerError(
                f"{method} {request.url.path} failed: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            body = ErrorResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"could not decode error response: {e}") from e
        raise ResponseError(
            response.status_code,
            code=body.error.code,
            message=body.error.message,
            validation=body.error.validation,
            debug_source=body.debug.source,
        )

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        response = await self.request("GET", path, params=params)
        return _decode(response)

    async def send_json(self, method: str, path: str, payload: Any = None) -> Any:
        """
        Send ``payload`` as JSON and return the decoded body.

        Returns None for responses without a body (e.g. DELETE).
        """
        response = await self.request(method, path, json=payload)
        if not response.content:
            return None
        return _decode(response)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(
            f"could not parse response of {response.request.method} "
            f"{response.request.url.path}: {e}"
        ) from e


def _dump_request(request: httpx.Request) -> str:
    headers = {
        key: (REDACTED if key.lower() == "authorization" else value)
        for key, value in request.headers.items()
    }
    body = request.content.decode("utf-8", errors="replace")
    return f"{request.method} {request.url} headers={headers} body={body!r}"


def _dump_response(response: httpx.Response, with_body: bool) -> str:
    dump = f"{response.status_code} {response.reason_phrase} headers={dict(response.headers)}"
    if with_body:
        dump = f"{dump} body={response.text!r}"
    return dump
