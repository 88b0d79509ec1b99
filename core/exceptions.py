"""Custom exception hierarchy for the StreamVault proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors.

    Attributes:
        message: Error message returned to the caller
        status_code: HTTP status code of the error response
    """

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(ProxyError):
    """Raised when the inbound request cannot be forwarded."""

    status_code = 400


class MissingUrlError(BadRequestError):
    """The ``url`` query parameter is absent."""

    def __init__(self) -> None:
        super().__init__('Missing "url" query parameter')


class InvalidUrlError(BadRequestError):
    """The decoded target is not an http(s) URL."""

    def __init__(self) -> None:
        super().__init__("Invalid URL: must start with http:// or https://")


class MalformedUrlError(ProxyError):
    """The ``url`` parameter holds broken percent-escapes or invalid UTF-8."""

    def __init__(self) -> None:
        super().__init__("Proxy error: URI malformed")


class RequestTooLarge(ProxyError):
    """POST body exceeds size limit."""

    status_code = 413


class UpstreamError(ProxyError):
    """Raised when the upstream request fails."""


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream answers with a non-2xx status.

    The error response mirrors the upstream status code.
    """

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Upstream returned {status_code} {reason}", status_code=status_code)
        self.reason = reason


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream does not answer within the time limit."""

    status_code = 504

    def __init__(self, timeout: float) -> None:
        super().__init__(
            f"Request timed out: upstream server took too long ({timeout:g}s limit)"
        )
        self.timeout = timeout


class UpstreamConnectionError(UpstreamError):
    """Raised when the upstream cannot be reached or its body cannot be read."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Proxy error: {message or 'Unknown error'}")
