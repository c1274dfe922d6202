"""DNS-01 challenge record derivation."""

import base64
import hashlib
from typing import NamedTuple

CHALLENGE_LABEL = "_acme-challenge"
DEFAULT_TTL = 120


class DnsRecord(NamedTuple):
    """Name, value and TTL of a DNS-01 challenge TXT record."""

    fqdn: str
    value: str
    ttl: int


def compute_dns_txt_value(key_authorization: str) -> str:
    """Compute the DNS TXT record value for DNS-01 challenge.

    The TXT record value is the base64url-encoded SHA-256 digest
    of the key authorization string.

    Args:
        key_authorization: The key authorization string.

    Returns:
        The base64url-encoded SHA-256 digest (without padding).
    """
    digest = hashlib.sha256(key_authorization.encode()).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


def to_fqdn(name: str) -> str:
    """Return the name with a trailing dot."""
    if name.endswith("."):
        return name
    return f"{name}."


def un_fqdn(name: str) -> str:
    """Return the name without its trailing dot."""
    if name.endswith("."):
        return name[:-1]
    return name


def dns01_record(domain: str, key_authorization: str, ttl: int = DEFAULT_TTL) -> DnsRecord:
    """Derive the TXT record that satisfies a DNS-01 challenge.

    Wildcard domains validate at the same name as their base domain,
    so a leading ``*.`` label is dropped.

    Args:
        domain: The domain being validated (e.g. "example.com" or "*.example.com").
        key_authorization: The key authorization for the challenge.
        ttl: TTL in seconds for the record.

    Returns:
        DnsRecord with the fully qualified name (trailing dot), value and TTL.

    Raises:
        ValueError: If no domain name is left once the trailing dot and
            wildcard label are removed.
    """
    domain = un_fqdn(domain.removeprefix("*."))
    if not domain:
        raise ValueError("Domain name is empty")
    fqdn = to_fqdn(f"{CHALLENGE_LABEL}.{domain}")
    return DnsRecord(fqdn=fqdn, value=compute_dns_txt_value(key_authorization), ttl=ttl)
