"""
Shared Provider Infrastructure.

Collaborators consumed by validators, kept outside the validation
module so they can be swapped or stubbed independently.

Key Providers:
- DnsResolver: Abstract record-lookup capability
- DnsPythonResolver: Live lookups through dnspython
- StaticDnsResolver: Fixed record table for offline use and tests
"""

from shared.providers.dns_provider import (
    DnsLookupError,
    DnsPythonResolver,
    DnsResolver,
    StaticDnsResolver,
    get_default_resolver,
)

__all__ = [
    "DnsResolver",
    "DnsPythonResolver",
    "StaticDnsResolver",
    "DnsLookupError",
    "get_default_resolver",
]
