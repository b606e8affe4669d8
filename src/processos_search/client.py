"""HTTP transport for the processos API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import TIMEOUT, get_base_url

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Erro ao processar requisição"
UNKNOWN_ERROR_MESSAGE = "Erro desconhecido"


class ApiError(Exception):
    """Uniform error raised for every transport failure."""

    def __init__(self, message: str, status: int | None = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


def _response_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def _body_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, list):
        return ". ".join(str(m) for m in message) or None
    if isinstance(message, str) and message:
        return message
    return None


def handle_api_error(error: BaseException) -> ApiError:
    """Normalize any transport failure into an ApiError."""
    if isinstance(error, ApiError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        body = _response_body(error.response)
        message = _body_message(body) or str(error) or DEFAULT_ERROR_MESSAGE
        return ApiError(message, status=error.response.status_code, data=body)
    if isinstance(error, httpx.HTTPError):
        return ApiError(str(error) or DEFAULT_ERROR_MESSAGE)
    return ApiError(str(error) or UNKNOWN_ERROR_MESSAGE)


class ApiClient:
    """Thin wrapper over httpx.Client bound to the configured base URL."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or get_base_url()
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=TIMEOUT,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s params=%s", path, params)
        resp = self._client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
