"""hosting.de DNS API exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hostingde.models import UpdateOutcome

UNREADABLE_BODY = "Unreadable body"


class HostingdeError(Exception):
    """Base exception for all errors raised by this library."""

    pass


class ConfigError(HostingdeError):
    """Required credential or zone name is missing or invalid."""

    pass


class SerializationError(HostingdeError):
    """An update request could not be built or encoded to JSON."""

    pass


class TransportError(HostingdeError):
    """Network-level failure (connect, timeout, TLS, protocol).

    The underlying httpx exception is available as ``cause`` and is
    also chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class DecodeError(HostingdeError):
    """Response body is not a valid zone update response."""

    def __init__(
        self,
        message: str,
        body: str = UNREADABLE_BODY,
        cause: BaseException | None = None,
    ):
        self.body = body
        self.cause = cause
        super().__init__(message)


class APIError(HostingdeError):
    """The exchange succeeded but hosting.de reported a non-success status.

    Carries the request URL and the raw response body so the failure can
    be diagnosed without repeating the request.
    """

    def __init__(
        self,
        url: str,
        body: str,
        status_code: int | None = None,
        outcome: "UpdateOutcome | None" = None,
    ):
        self.url = url
        self.body = body
        self.status_code = status_code
        self.outcome = outcome
        super().__init__(
            f"hosting.de API error: the request {url} sent the following response: {body}"
        )

    @classmethod
    def from_outcome(
        cls,
        url: str,
        outcome: "UpdateOutcome",
        status_code: int | None = None,
    ) -> "APIError":
        """Create an APIError from a decoded response.

        Args:
            url: The request URL.
            outcome: The decoded (non-success) response.
            status_code: HTTP status code of the exchange.

        Returns:
            APIError instance.
        """
        body = outcome.raw_body if outcome.raw_body is not None else UNREADABLE_BODY
        return cls(url=url, body=body, status_code=status_code, outcome=outcome)

    @property
    def status(self) -> str | None:
        """The status tag reported by hosting.de, if a response was decoded."""
        return self.outcome.status if self.outcome is not None else None

    @property
    def errors(self) -> list[Any]:
        """Error entries reported by hosting.de (opaque JSON values)."""
        return _as_list(self.outcome.errors) if self.outcome is not None else []

    @property
    def warnings(self) -> list[Any]:
        """Warning entries reported by hosting.de (opaque JSON values)."""
        return _as_list(self.outcome.warnings) if self.outcome is not None else []


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
