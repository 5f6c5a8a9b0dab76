"""
Shared fixtures for validation tests.
"""

import pytest

from modules.validation import ValidationEngine, ValidatorRegistry, reset_default_registry
from shared.providers import DnsLookupError, DnsResolver, StaticDnsResolver


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Every test starts with a new process-wide registry"""
    reset_default_registry()
    yield
    reset_default_registry()


@pytest.fixture
def registry():
    return ValidatorRegistry()


@pytest.fixture
def engine(registry):
    """Engine with built-ins registered in an isolated registry"""
    return ValidationEngine(registry=registry, auto_register=True, config_path="")


@pytest.fixture
def dns_resolver():
    return StaticDnsResolver({
        "example.com": ["MX", "A"],
        "web-only.org": ["A"],
        "www.example.com": ["CNAME"],
    })


class FailingDnsResolver(DnsResolver):
    """Resolver whose lookups never complete"""

    def __init__(self):
        self.calls = []

    def has_record(self, domain: str, record_type: str) -> bool:
        self.calls.append((domain, record_type))
        raise DnsLookupError(f"Timed out resolving {domain}")


@pytest.fixture
def failing_dns_resolver():
    return FailingDnsResolver()
