"""hosting.de provider for ACME DNS-01 challenges."""

from collections.abc import Mapping

import httpx

from hostingde._logging import reset_domain, set_domain
from hostingde.challenges.dns01 import dns01_record
from hostingde.config import HostingdeConfig
from hostingde.models import ZoneSelector
from hostingde.providers.base import ChallengeProvider
from hostingde.publisher import RecordPublisher
from hostingde.retractor import RecordRetractor
from hostingde.transport import API_URL, TransportClient


class HostingdeProvider(ChallengeProvider):
    """DNS provider for zones hosted at hosting.de.

    This provider manages TXT records for ACME DNS-01 challenges via the
    hosting.de DNS JSON API (zoneUpdate). A single instance may be shared
    between threads; the only shared state is the HTTP connection pool.

    Args:
        api_key: hosting.de API token.
        zone_name: Name of the zone records are published in.
        ttl: TTL in seconds of published records (default: 120).
        propagation_timeout: Seconds the caller should wait for propagation (default: 120).
        polling_interval: Seconds between the caller's propagation checks (default: 2).
        http_timeout: HTTP request timeout in seconds (default: 30).
        api_url: Base URL of the API.

    Raises:
        ConfigError: If the API key or zone name is empty.
    """

    def __init__(
        self,
        api_key: str,
        zone_name: str,
        *,
        ttl: int | None = None,
        propagation_timeout: float | None = None,
        polling_interval: float | None = None,
        http_timeout: float | None = None,
        api_url: str = API_URL,
        _http_client: httpx.Client | None = None,
    ):
        overrides = {
            "ttl": ttl,
            "propagation_timeout": propagation_timeout,
            "polling_interval": polling_interval,
            "http_timeout": http_timeout,
        }
        config = HostingdeConfig.create(
            api_key=api_key,
            zone_name=zone_name,
            **{key: value for key, value in overrides.items() if value is not None},
        )
        self.config = config
        self.zone = ZoneSelector(name=config.zone_name)
        self.transport = TransportClient(
            base_url=api_url,
            timeout=config.http_timeout,
            _http_client=_http_client,
        )
        self.publisher = RecordPublisher(self.transport)
        self.retractor = RecordRetractor(self.transport)

    @classmethod
    def from_config(
        cls,
        config: HostingdeConfig,
        api_url: str = API_URL,
        _http_client: httpx.Client | None = None,
    ) -> "HostingdeProvider":
        """Create a provider from an already validated configuration."""
        return cls(
            config.api_key,
            config.zone_name,
            ttl=config.ttl,
            propagation_timeout=config.propagation_timeout,
            polling_interval=config.polling_interval,
            http_timeout=config.http_timeout,
            api_url=api_url,
            _http_client=_http_client,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        _http_client: httpx.Client | None = None,
    ) -> "HostingdeProvider":
        """Create a provider from HOSTINGDE_* environment variables.

        Raises:
            ConfigError: If HOSTINGDE_API_KEY or HOSTINGDE_ZONE_NAME is missing.
        """
        return cls.from_config(HostingdeConfig.from_env(environ), _http_client=_http_client)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.transport.close()

    def present(self, domain: str, token: str, key_authorization: str) -> None:
        """Publish the challenge TXT record for a domain.

        Args:
            domain: The domain being validated.
            token: The challenge token (unused, kept for interface).
            key_authorization: The key authorization for the challenge.

        Raises:
            ValueError: If the domain is empty.
            SerializationError: If the request is invalid or cannot be encoded.
            TransportError: On network failure or timeout.
            DecodeError: If the reply cannot be decoded.
            APIError: If hosting.de did not report success.
        """
        record = dns01_record(domain, key_authorization, ttl=self.config.ttl)
        context = set_domain(domain)
        try:
            self.publisher.publish(
                self.zone, self.config.api_key, record.fqdn, record.value, record.ttl
            )
        finally:
            reset_domain(context)

    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        """Remove the challenge TXT record for a domain.

        Args:
            domain: The domain being validated.
            token: The challenge token (unused, kept for interface).
            key_authorization: The key authorization for the challenge.

        Raises:
            ValueError: If the domain is empty.
            SerializationError: If the request is invalid or cannot be encoded.
            TransportError: On network failure or timeout.
            DecodeError: If the reply cannot be decoded.
            APIError: If hosting.de did not report success.
        """
        record = dns01_record(domain, key_authorization)
        context = set_domain(domain)
        try:
            self.retractor.retract(self.zone, self.config.api_key, record.fqdn, record.value)
        finally:
            reset_domain(context)

    def timeout(self) -> tuple[float, float]:
        """Return (propagation timeout, polling interval) in seconds.

        Defaults to 120s / 2s to cope with spikes in propagation times.
        """
        return self.config.propagation_timeout, self.config.polling_interval
