"""Removal of DNS-01 challenge TXT records."""

from pydantic import ValidationError

from hostingde._logging import get_domain_extra, get_logger
from hostingde.exceptions import SerializationError
from hostingde.models import RecordMutation, UpdateEnvelope, UpdateOutcome, ZoneSelector
from hostingde.transport import ZONE_UPDATE_PATH, TransportClient

logger = get_logger(__name__)


class RecordRetractor:
    """Removes previously published challenge TXT records.

    Deleting a record that does not exist is not special-cased: whatever
    non-success status hosting.de reports is raised as an APIError.

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
    ) -> UpdateEnvelope:
        """Build the zoneUpdate request for a single TXT deletion.

        Raises:
            SerializationError: If the record name or value is invalid.
        """
        try:
            return UpdateEnvelope(
                auth_token=auth_token,
                zone_config=zone_selector,
                records_to_add=(),
                records_to_delete=(RecordMutation.delete(record_name, record_value),),
            )
        except ValidationError as exc:
            raise SerializationError(f"Invalid TXT record deletion: {exc}") from exc

    def retract(
        self,
        zone_selector: ZoneSelector,
        auth_token: str,
        record_name: str,
        record_value: str,
    ) -> UpdateOutcome:
        """Delete a TXT record via the zoneUpdate endpoint.

        Raises:
            SerializationError: If the request is invalid or cannot be encoded.
            TransportError: On network failure or timeout.
            DecodeError: If the reply cannot be decoded.
            APIError: If hosting.de did not report success.
        """
        envelope = self.build_envelope(zone_selector, auth_token, record_name, record_value)
        body = envelope.to_json()

        logger.debug(
            "Retracting TXT record",
            extra={"request": envelope.to_payload(redact_token=True), **get_domain_extra()},
        )

        outcome = self.transport.execute("POST", ZONE_UPDATE_PATH, body)
        logger.info(
            "TXT record retracted",
            extra={"zone": zone_selector.name, "record_name": envelope.records_to_delete[0].name},
        )
        return outcome
