from typing import Optional


class AppError(Exception):
    """Base class for service errors."""


class ConfigurationError(AppError):
    """Missing or invalid settings (e.g. Binance credentials)."""


class ValidationError(AppError):
    """A required request parameter is missing. Maps to HTTP 400."""


class UpstreamError(AppError):
    """
    A Binance read failed for any reason (network, auth, rate limit, bad symbol).

    The upstream status and message are kept for logging; callers only ever
    see a generic 500 body.
    """

    def __init__(self, operation: str, target: str, message: str, status_code: Optional[int] = None):
        self.operation = operation
        self.target = target
        self.message = message
        self.status_code = status_code
        self.public_message = "Error retrieving data"
        super().__init__(f"{operation} failed for {target}: HTTP {status_code} - {message}")

    def with_public_message(self, public_message: str) -> "UpstreamError":
        self.public_message = public_message
        return self
