"""Authentication for the compute API."""

from __future__ import annotations

from collections.abc import Generator

import httpx

from compute_cli.config.models import CloudProfile


class TokenAuth(httpx.Auth):
    """Authenticate with a pre-issued token (X-Auth-Token header)."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["X-Auth-Token"] = self.token
        yield request


def resolve_auth(profile: CloudProfile) -> httpx.Auth | None:
    """Resolve authentication from a cloud profile."""
    if profile.token:
        return TokenAuth(profile.token)
    return None
