"""
DNS Resolution Providers.

Optional collaborators used by the email and URL validators when a
validation context opts in with check_dns. Validators depend only on the
DnsResolver interface; any object with a matching has_record() can be
injected through the context key "dns_resolver" or the validator
parameter of the same name.

Providers:
- DnsPythonResolver: live lookups through dnspython
- StaticDnsResolver: in-memory record table (offline use, tests)
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, Iterable, List, Optional
import threading

import dns.exception
import dns.resolver

from shared.utils.config import settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class DnsLookupError(Exception):
    """Raised when a DNS lookup could not be completed"""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DnsResolver(ABC):
    """
    Abstract DNS capability.

    has_record() answers whether `domain` has at least one record of
    `record_type`. A definite "no such record" is False; a lookup that
    could not be completed (timeout, no nameservers) raises
    DnsLookupError.
    """

    @abstractmethod
    def has_record(self, domain: str, record_type: str) -> bool:
        pass


class DnsPythonResolver(DnsResolver):
    """
    DNS resolver backed by dnspython.

    Attributes:
        timeout: Lifetime of a single lookup in seconds
        nameservers: Explicit nameservers; system configuration when empty
    """

    def __init__(self, timeout: Optional[float] = None, nameservers: Optional[List[str]] = None):
        self.timeout = timeout if timeout is not None else settings.DNS_TIMEOUT
        self.nameservers = list(nameservers) if nameservers is not None else settings.dns_nameservers_list
        self._resolver: Optional[dns.resolver.Resolver] = None
        self._lock = threading.Lock()

    def _get_resolver(self) -> dns.resolver.Resolver:
        # Built lazily: reading the system configuration can fail on hosts without one
        with self._lock:
            if self._resolver is None:
                if self.nameservers:
                    resolver = dns.resolver.Resolver(configure=False)
                    resolver.nameservers = self.nameservers
                else:
                    resolver = dns.resolver.Resolver()
                resolver.lifetime = self.timeout
                self._resolver = resolver
            return self._resolver

    def has_record(self, domain: str, record_type: str) -> bool:
        """
        Check whether a domain has a record of the given type.

        Args:
            domain: Domain name, e.g. "example.com"
            record_type: Record type, e.g. "MX", "A", "AAAA", "CNAME"

        Returns:
            True if at least one record exists, False otherwise

        Raises:
            DnsLookupError: If the lookup could not be completed
        """
        try:
            answer = self._get_resolver().resolve(domain, record_type, lifetime=self.timeout)
            return len(answer) > 0
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return False
        except dns.exception.DNSException as e:
            logger.warning(f"DNS lookup failed for {domain} ({record_type}): {type(e).__name__}: {e}")
            raise DnsLookupError(
                f"DNS lookup failed for {domain} ({record_type})",
                details={"domain": domain, "record_type": record_type, "error": str(e)}
            ) from e


class StaticDnsResolver(DnsResolver):
    """
    In-memory DNS table.

    Example:
        resolver = StaticDnsResolver({"example.com": ["MX", "A"]})
        resolver.has_record("example.com", "MX")  # True
    """

    def __init__(self, records: Optional[Dict[str, Iterable[str]]] = None):
        self.records: Dict[str, set] = {
            domain.lower().rstrip("."): {record_type.upper() for record_type in types}
            for domain, types in (records or {}).items()
        }

    def has_record(self, domain: str, record_type: str) -> bool:
        return record_type.upper() in self.records.get(domain.lower().rstrip("."), set())


@lru_cache()
def get_default_resolver() -> DnsResolver:
    """
    Get the shared dnspython-backed resolver.
    Uses lru_cache to ensure it is built only once.
    """
    return DnsPythonResolver()
