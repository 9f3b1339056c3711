"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class ComputeCLIError(Exception):
    """Base exception for compute-cli."""

    exit_code: int = 1


class TransportError(ComputeCLIError):
    """The request never produced a response (refused, timed out, bad URL)."""

    exit_code = 2


class ConfigurationError(ComputeCLIError):
    """No usable cloud connection could be resolved."""

    exit_code = 6


class ValidationError(ComputeCLIError):
    """Options rejected before any request was sent."""

    exit_code = 7

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or "Validation error")


class RemoteOperationError(ComputeCLIError):
    """The compute API answered with a non-success status."""

    exit_code = 8

    def __init__(
        self, status_code: int, detail: str = "", body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.body = body
        super().__init__(f"Compute API returned {status_code}: {detail}")


class AuthenticationError(RemoteOperationError):
    """Authentication failed (401/403)."""

    exit_code = 3


class NotFoundError(RemoteOperationError):
    """Resource not found (404)."""

    exit_code = 4


class ConflictError(RemoteOperationError):
    """Resource conflict (409)."""

    exit_code = 5


class MalformedResponseError(ComputeCLIError):
    """The response body does not have the expected structure."""

    exit_code = 9


def error_handler(func: F) -> F:
    """Decorator that catches ComputeCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ComputeCLIError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
