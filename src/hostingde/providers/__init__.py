"""DNS providers for ACME challenge validation."""

from hostingde.providers.base import ChallengeProvider
from hostingde.providers.hostingde import HostingdeProvider

__all__ = ["ChallengeProvider", "HostingdeProvider"]
