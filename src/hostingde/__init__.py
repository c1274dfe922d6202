"""hostingde - DNS-01 challenge records for zones hosted at hosting.de."""

from hostingde.providers.hostingde import HostingdeProvider

__all__ = ["HostingdeProvider"]
__version__ = "0.1.0"
