"""HTTP client with timeouts and transport failure typing."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any
from urllib.parse import urlparse

import requests

from solar_insights.common.constants import USER_AGENT
from solar_insights.common.errors import NetworkError, PipelineError, RequestTimeoutError

@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 10.0
    read: float = 30.0


class HttpRequestError(PipelineError):
    error_code = "HTTP_ERROR"

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def describe(self) -> str:
        if self.detail and self.status_code is not None:
            return f"HTTP {self.status_code}: {self.detail}"
        if self.status_code is None or is_success(self.status_code):
            return str(self)
        return f"HTTP {self.status_code}"


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _error_detail(response: requests.Response) -> str | None:
    # Google APIs report {"error": {"message": ...}} or {"error_message": ...}.
    try:
        payload = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text[:200] or None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if payload.get("error_message"):
            return str(payload["error_message"])
    return None


class HttpClient:
    def __init__(self, *, timeout: TimeoutConfig | None = None) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.session = requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _host(self, url: str) -> str:
        return urlparse(url).netloc

    def _headers(self, headers: dict[str, str] | None, accept: str = "application/json") -> dict[str, str]:
        out = {"User-Agent": USER_AGENT, "Accept": accept}
        if headers:
            out.update(headers)
        return out

    def _send(self, method: str, url: str, *, timeout: TimeoutConfig | None = None, **kwargs: Any) -> requests.Response:
        req_timeout = timeout or self.timeout
        try:
            return self.session.request(
                method=method,
                url=url,
                timeout=(req_timeout.connect, req_timeout.read),
                **kwargs,
            )
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"Request to {self._host(url)} timed out") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Network error: no response from {self._host(url)}") from exc

    def _raise_for_status(self, response: requests.Response, url: str) -> None:
        status = response.status_code
        if not is_success(status):
            raise HttpRequestError(
                f"HTTP status {status} from {self._host(url)}",
                status_code=status,
                detail=_error_detail(response),
            )

    def request_json(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> dict[str, Any]:
        response = self._send(
            method,
            url,
            params=params,
            json=json_body,
            headers=self._headers(headers),
            timeout=timeout,
        )
        self._raise_for_status(response, url)

        try:
            payload = response.json()
        except ValueError as exc:
            raise HttpRequestError(
                f"Invalid JSON payload from {self._host(url)}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise HttpRequestError(
                f"Unexpected JSON payload from {self._host(url)}",
                status_code=response.status_code,
            )
        return payload

    def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> dict[str, Any]:
        return self.request_json("GET", url, params=params, headers=headers, timeout=timeout)

    def post_json(
        self,
        url: str,
        *,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> dict[str, Any]:
        merged = {"Content-Type": "application/json"}
        if headers:
            merged.update(headers)
        return self.request_json("POST", url, json_body=payload, headers=merged, timeout=timeout)

    def fetch_status(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: TimeoutConfig | None = None,
    ) -> tuple[int, str | None]:
        """GET ``url`` and return ``(status_code, error_detail)`` without reading the body on success."""
        response = self._send(
            "GET",
            url,
            params=params,
            headers=self._headers(None, accept="image/*"),
            timeout=timeout,
            stream=True,
        )
        try:
            status = response.status_code
            detail = None if is_success(status) else _error_detail(response)
        finally:
            response.close()
        return status, detail
