"""DNS-01 challenge helpers."""

from hostingde.challenges.dns01 import DnsRecord, compute_dns_txt_value, dns01_record

__all__ = ["DnsRecord", "compute_dns_txt_value", "dns01_record"]
