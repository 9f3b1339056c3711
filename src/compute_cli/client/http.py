"""Compute API HTTP client."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from compute_cli.api.definitions import Operation
from compute_cli.client.auth import resolve_auth
from compute_cli.client.errors import (
    AuthenticationError,
    ConflictError,
    MalformedResponseError,
    NotFoundError,
    RemoteOperationError,
    TransportError,
)
from compute_cli.config.models import CloudProfile

logger = logging.getLogger(__name__)


def find_message(obj: Any) -> str | None:
    """Find a ``message`` or ``detail`` value at any depth of an error body."""
    if isinstance(obj, dict):
        for key in ("message", "detail"):
            if isinstance(obj.get(key), str):
                return obj[key]
        for item in obj.values():
            message = find_message(item)
            if message:
                return message
    elif isinstance(obj, list):
        for item in obj:
            message = find_message(item)
            if message:
                return message
    return None


class ComputeClient:
    """Synchronous HTTP client for the compute v2 REST API."""

    def __init__(
        self,
        profile: CloudProfile,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self.base_url = profile.url
        headers = {"Accept": "application/json"}
        if profile.microversion:
            headers["OpenStack-API-Version"] = f"compute {profile.microversion}"
            headers["X-OpenStack-Nova-API-Version"] = profile.microversion
        if not profile.verify_ssl:
            logger.warning("TLS certificate verification is disabled")
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=resolve_auth(profile),
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport,
            headers=headers,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ComputeClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        status = response.status_code
        try:
            body: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        detail = find_message(body) or response.text
        logger.debug("%s %s -> %s: %s", response.request.method,
                     response.request.url, status, detail)
        if status in (401, 403):
            raise AuthenticationError(status, detail, body)
        if status == 404:
            raise NotFoundError(status, detail, body)
        if status == 409:
            raise ConflictError(status, detail, body)
        raise RemoteOperationError(status, detail, body)

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise TransportError(
                f"Cannot connect to compute endpoint at {self.base_url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {self.base_url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise TransportError(
                f"Invalid URL for compute endpoint at {self.base_url}: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                f"Request to {self.base_url} failed: {exc}"
            ) from exc
        return self._handle_response(response)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    @staticmethod
    def parse_json(response: httpx.Response) -> Any:
        """Parse a response body; an empty body parses as ``None``."""
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedResponseError(
                f"Response from {response.request.url} is not valid JSON: {exc}"
            ) from exc

    def execute(
        self, operation: Operation, options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Issue ``operation`` with ``options`` and return the parsed body."""
        prepared = operation.prepare(options)
        kwargs: dict[str, Any] = {}
        if prepared.params:
            kwargs["params"] = prepared.params
        if prepared.json is not None:
            kwargs["json"] = prepared.json
        response = self.request(prepared.method, prepared.path, **kwargs)
        return self.parse_json(response)

    def follow(self, href: str) -> Any:
        """GET an absolute link exactly as the API handed it out."""
        return self.parse_json(self.get(href))
