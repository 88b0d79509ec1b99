"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_request(
        self,
        method: str,
        url: str,
        status: int,
        content_type: str,
        *,
        elapsed: float,
    ) -> None: ...
    def log_error(self, url: str, status: int, message: str) -> None: ...
