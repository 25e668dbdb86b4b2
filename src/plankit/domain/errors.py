"""Error types raised across the reconciliation core."""

from __future__ import annotations

from plankit.config.errors import ConfigurationError


class RemoteAPIError(RuntimeError):
    """Raised when the remote catalog service fails or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AdapterContractError(ConfigurationError):
    """Raised when a database adapter lacks a required method group."""

    def __init__(self, adapter: object, missing: list[str]) -> None:
        name = type(adapter).__name__
        super().__init__(f"Database adapter {name} must implement: {', '.join(missing)}")
        self.missing = tuple(missing)
