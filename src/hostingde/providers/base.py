"""Abstract base class for DNS-01 challenge providers."""

from abc import ABC, abstractmethod
from typing import Self


class ChallengeProvider(ABC):
    """Abstract interface for DNS-01 challenge providers.

    Providers publish the TXT record that proves control of a domain and
    remove it once validation is over. Waiting for propagation is the
    caller's job; providers only report how long to wait and how often
    to poll.
    """

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @abstractmethod
    def present(self, domain: str, token: str, key_authorization: str) -> None:
        """Create the TXT record for a DNS-01 challenge.

        Args:
            domain: The domain being validated.
            token: The challenge token (unused by most providers).
            key_authorization: The key authorization for the challenge.

        Raises:
            HostingdeError: If record creation fails.
        """
        ...

    @abstractmethod
    def cleanup(self, domain: str, token: str, key_authorization: str) -> None:
        """Remove the TXT record created by present().

        Args:
            domain: The domain being validated.
            token: The challenge token (unused by most providers).
            key_authorization: The key authorization for the challenge.

        Raises:
            HostingdeError: If record removal fails.
        """
        ...

    @abstractmethod
    def timeout(self) -> tuple[float, float]:
        """Return (timeout, poll interval) in seconds for propagation checks."""
        ...
