"""HTTP transport for the hosting.de DNS JSON API."""

import time

import httpx
from pydantic import ValidationError

from hostingde._logging import Timer, get_domain_extra, get_logger
from hostingde.exceptions import UNREADABLE_BODY, APIError, DecodeError, TransportError
from hostingde.models import UpdateOutcome

logger = get_logger(__name__)

API_URL = "https://secure.hosting.de/api/dns/v1/json"
DEFAULT_TIMEOUT = 30.0
ZONE_UPDATE_PATH = "/zoneUpdate"


class TransportClient:
    """Performs single request/response exchanges with the hosting.de API.

    One ``httpx.Client`` is shared by every call, so a single instance can
    be used from several threads at once. No retries are made: every
    failure is raised to the caller.

    Args:
        base_url: API base URL that request paths are appended to.
        timeout: Deadline in seconds for a whole exchange, from sending the
            request to reading the last byte of the reply (default: 30).
    """

    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        _http_client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = _http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "TransportClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def execute(self, method: str, path: str, payload: bytes) -> UpdateOutcome:
        """Send a JSON payload and decode the zone update reply.

        Args:
            method: HTTP method (e.g. "POST").
            path: Path appended to the API base URL (e.g. "/zoneUpdate").
            payload: Serialized JSON request body.

        Returns:
            The decoded reply, whose status is "success".

        Raises:
            TransportError: On connection, timeout, TLS or protocol failure.
            DecodeError: If the reply is not a zone update response.
            APIError: If hosting.de reported a status other than "success".
        """
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        deadline = time.monotonic() + self.timeout

        with Timer() as timer:
            try:
                # The stream context closes the response on every exit path
                with self._http.stream(
                    method, url, content=payload, headers=headers, timeout=self.timeout
                ) as response:
                    status_code = response.status_code
                    body = self._read_body(response, deadline)
                    text = _body_text(body, response.encoding)
            except httpx.HTTPError as exc:
                logger.error(
                    "hosting.de request failed",
                    extra={"method": method, "url": url, "error": str(exc), **get_domain_extra()},
                )
                raise TransportError(f"error querying hosting.de API -> {exc}", cause=exc) from exc

        logger.debug(
            "hosting.de request completed",
            extra={
                "method": method,
                "url": url,
                "status_code": status_code,
                "elapsed_ms": timer.elapsed_ms,
                **get_domain_extra(),
            },
        )

        try:
            outcome = UpdateOutcome.model_validate_json(body)
        except ValidationError as exc:
            logger.error(
                "Invalid hosting.de response",
                extra={"url": url, "status_code": status_code, **get_domain_extra()},
            )
            raise DecodeError(
                f"invalid response from hosting.de API ({status_code}): {exc}",
                body=text,
                cause=exc,
            ) from exc

        outcome = outcome.model_copy(update={"raw_body": text})

        if not outcome.succeeded:
            logger.error(
                "hosting.de API error",
                extra={
                    "url": url,
                    "status_code": status_code,
                    "status": outcome.status,
                    **get_domain_extra(),
                },
            )
            raise APIError.from_outcome(url, outcome, status_code=status_code)

        return outcome

    def _read_body(self, response: httpx.Response, deadline: float) -> bytes:
        """Read the response body, failing once the exchange deadline has passed.

        httpx times each network operation separately; the deadline bounds
        the exchange as a whole.
        """
        chunks = []
        _check_deadline(response, deadline, self.timeout)
        for chunk in response.iter_bytes():
            _check_deadline(response, deadline, self.timeout)
            chunks.append(chunk)
        return b"".join(chunks)


def _check_deadline(response: httpx.Response, deadline: float, timeout: float) -> None:
    if time.monotonic() > deadline:
        raise httpx.ReadTimeout(
            f"exchange did not complete within {timeout}s", request=response.request
        )


def _body_text(body: bytes, encoding: str | None) -> str:
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return UNREADABLE_BODY
