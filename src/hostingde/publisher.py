"""Publishing of DNS-01 challenge TXT records."""

from pydantic import ValidationError

from hostingde._logging import get_domain_extra, get_logger
from hostingde.exceptions import SerializationError
from hostingde.models import RecordMutation, UpdateEnvelope, UpdateOutcome, ZoneSelector
from hostingde.transport import ZONE_UPDATE_PATH, TransportClient

logger = get_logger(__name__)


class RecordPublisher:
    """Adds challenge TXT records to a hosting.de zone.

    Each call sends one zoneUpdate request with a single addition. The
    record is not deduplicated: publishing twice may leave two records,
    depending on hosting.de.

    Args:
        transport: Transport used to reach the API.
    """

    def __init__(self, transport: TransportClient):
        self.transport = transport

    def build_envelope(
        self,
        zone_selector: ZoneSelector,
        auth_token: str,
        record_name: str,
        record_value: str,
        ttl: int,
    ) -> UpdateEnvelope:
        """Build the zoneUpdate request for a single TXT addition.

        Args:
            zone_selector: Zone the record belongs to.
            auth_token: hosting.de API token.
            record_name: Fully qualified record name (trailing dot optional).
            record_value: TXT record content.
            ttl: Record time-to-live in seconds.

        Returns:
            Envelope with one addition and no deletions.

        Raises:
            SerializationError: If the record name, value or TTL is invalid.
        """
        try:
            return UpdateEnvelope(
                auth_token=auth_token,
                zone_config=zone_selector,
                records_to_add=(RecordMutation.add(record_name, record_value, ttl),),
                records_to_delete=(),
            )
        except ValidationError as exc:
            raise SerializationError(f"Invalid TXT record addition: {exc}") from exc

    def publish(
        self,
        zone_selector: ZoneSelector,
        auth_token: str,
        record_name: str,
        record_value: str,
        ttl: int,
    ) -> UpdateOutcome:
        """Add a TXT record via the zoneUpdate endpoint.

        Args:
            zone_selector: Zone the record belongs to.
            auth_token: hosting.de API token.
            record_name: Fully qualified record name (trailing dot optional).
            record_value: TXT record content.
            ttl: Record time-to-live in seconds.

        Returns:
            The successful zone update reply.

        Raises:
            SerializationError: If the request is invalid or cannot be encoded.
            TransportError: On network failure or timeout.
            DecodeError: If the reply cannot be decoded.
            APIError: If hosting.de did not report success.
        """
        envelope = self.build_envelope(zone_selector, auth_token, record_name, record_value, ttl)
        body = envelope.to_json()

        logger.debug(
            "Publishing TXT record",
            extra={"request": envelope.to_payload(redact_token=True), **get_domain_extra()},
        )

        outcome = self.transport.execute("POST", ZONE_UPDATE_PATH, body)
        logger.info(
            "TXT record published",
            extra={"zone": zone_selector.name, "record_name": envelope.records_to_add[0].name},
        )
        return outcome
