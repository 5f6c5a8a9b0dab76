"""
Network validators module.

Contains validators for contact and addressing formats:
- EmailValidator: Email address syntax, length limits, optional DNS/disposable checks
- UrlValidator: URL syntax, allowed schemes, host, optional DNS check
- PhoneValidator: Phone number digit count (E.164 bounds) and layout

DNS checks run only when the context (or a construction parameter) sets
check_dns. The resolver is taken from the "dns_resolver" key, falling
back to the shared dnspython resolver. Lookup errors never escape
validate(); they are reported as failed results.
"""

import ipaddress
import re
from collections import abc
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import unquote, urlsplit

from email_validator import EmailNotValidError, validate_email

from modules.validation.core.base import (
    BaseValidator,
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationResult,
)
from modules.validation.core.registry import register_validator
from shared.providers.dns_provider import DnsResolver, get_default_resolver
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_ALLOWED_PROTOCOLS = ("http", "https", "ftp", "ftps")

_HOSTNAME = re.compile(
    r"(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)*[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?",
    re.IGNORECASE
)
_PERCENT_ENCODED = re.compile(r"%[0-9a-f]{2}", re.IGNORECASE)


class _DnsCheckMixin:
    """Runs has_record() lookups through the configured resolver"""

    def _get_resolver(self, context: Optional[ValidationContext]) -> DnsResolver:
        return self.resolve("dns_resolver", context) or get_default_resolver()

    def _dns_lookup(
        self,
        domain: str,
        record_types: Sequence[str],
        context: Optional[ValidationContext],
        subject: str
    ) -> Optional[ValidationResult]:
        """
        Check that a domain has at least one of the given record types.

        Returns:
            None when a record was found, otherwise a failed result
        """
        try:
            resolver = self._get_resolver(context)
            for record_type in record_types:
                if resolver.has_record(domain, record_type):
                    return None
        except Exception as e:
            logger.warning(f"DNS check for '{domain}' unavailable: {type(e).__name__}: {e}")
            return self._failure(
                f"DNS lookup for {subject.lower()} '{domain}' could not be completed",
                constraint="dns",
                category=ErrorCategory.COLLABORATOR_UNAVAILABLE,
                domain=domain,
                dns_check="error",
                error=str(e)
            )

        return self._failure(
            f"{subject} has no valid {' or '.join(record_types)} records",
            constraint="dns",
            category=ErrorCategory.FORMAT_MISMATCH,
            domain=domain,
            dns_check="failed"
        )


@register_validator("email")
class EmailValidator(_DnsCheckMixin, ParameterizedValidator):
    """
    Validate an email address.

    Syntax is checked by email-validator (without its deliverability
    lookups), after the RFC length limits: 320 characters overall, 64 for
    the local part and 255 for the domain.

    Parameters (construction or context):
        check_dns: Require an MX, A or AAAA record for the domain (default False)
        dns_resolver: DnsResolver used for check_dns
        check_disposable: Warn when the domain is listed in disposable_domains (default False)
        disposable_domains: Iterable of known disposable domains

    Success results carry: normalized, local_part, domain.
    """

    MAX_EMAIL_LENGTH = 320
    MAX_LOCAL_LENGTH = 64
    MAX_DOMAIN_LENGTH = 255
    DNS_RECORD_TYPES = ("MX", "A", "AAAA")

    error_message = "Invalid email address"
    success_message = "Valid email address"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value, subject="Email")

        email = value.strip()

        if not email:
            return self._failure("Email cannot be empty", constraint="empty", category=ErrorCategory.FORMAT_MISMATCH)

        if len(email) > self.MAX_EMAIL_LENGTH:
            return self._failure(
                self._format_message("Email too long (max {max} characters)", max=self.MAX_EMAIL_LENGTH),
                constraint="max_length",
                category=ErrorCategory.RANGE_VIOLATION,
                length=len(email),
                max=self.MAX_EMAIL_LENGTH
            )

        if email.count("@") != 1:
            return self._failure(
                "Email must contain exactly one @ symbol",
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                email=email
            )

        local_part, domain = email.split("@")

        if len(local_part) > self.MAX_LOCAL_LENGTH:
            return self._failure(
                self._format_message("Local part too long (max {max} characters)", max=self.MAX_LOCAL_LENGTH),
                constraint="local_length",
                category=ErrorCategory.RANGE_VIOLATION,
                local_length=len(local_part),
                max=self.MAX_LOCAL_LENGTH
            )

        if len(domain) > self.MAX_DOMAIN_LENGTH:
            return self._failure(
                self._format_message("Domain too long (max {max} characters)", max=self.MAX_DOMAIN_LENGTH),
                constraint="domain_length",
                category=ErrorCategory.RANGE_VIOLATION,
                domain_length=len(domain),
                max=self.MAX_DOMAIN_LENGTH
            )

        try:
            email_info = validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            return self._failure(
                f"Invalid email format: {e}",
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                email=email,
                reason=str(e)
            )

        if self.resolve("check_dns", context, False):
            dns_failure = self._dns_lookup(email_info.ascii_domain, self.DNS_RECORD_TYPES, context, "Domain")
            if dns_failure is not None:
                return dns_failure

        if self.resolve("check_disposable", context, False):
            disposable_domains = self.resolve("disposable_domains", context) or ()
            if isinstance(disposable_domains, str):
                disposable_domains = [disposable_domains]
            elif not isinstance(disposable_domains, abc.Iterable):
                return self._parameter_failure("disposable_domains", disposable_domains, "an iterable of domains")
            if self._is_disposable(domain, disposable_domains):
                return self._warning(
                    "Email appears to be from a disposable email provider",
                    constraint="disposable",
                    domain=domain,
                    disposable=True
                )

        return self._success(
            normalized=email_info.normalized,
            local_part=email_info.local_part,
            domain=email_info.domain
        )

    @staticmethod
    def _is_disposable(domain: str, disposable_domains: Iterable[str]) -> bool:
        domain = domain.lower()
        return any(str(disposable).lower() == domain for disposable in disposable_domains)


@register_validator("url")
class UrlValidator(_DnsCheckMixin, ParameterizedValidator):
    """
    Validate a URL.

    Parameters (construction or context):
        allowed_protocols: Accepted schemes (default http, https, ftp, ftps)
        require_https: Only accept https (default False)
        require_path: Require a non-empty path (default False)
        check_dns: Require an A, AAAA or CNAME record for the host (default False)
        dns_resolver: DnsResolver used for check_dns

    URLs that pass but look obfuscated (several "@", "..", double
    percent-encoding) produce a warning result.

    Success results carry: scheme, host, port, path.
    """

    MAX_URL_LENGTH = 2048
    MAX_HOST_LENGTH = 253
    DNS_RECORD_TYPES = ("A", "AAAA", "CNAME")

    error_message = "Invalid URL"
    success_message = "Valid URL"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value, subject="URL")

        url = value.strip()

        if not url:
            return self._failure("URL cannot be empty", constraint="empty", category=ErrorCategory.FORMAT_MISMATCH)

        if len(url) > self.MAX_URL_LENGTH:
            return self._failure(
                self._format_message("URL too long (max {max} characters)", max=self.MAX_URL_LENGTH),
                constraint="max_length",
                category=ErrorCategory.RANGE_VIOLATION,
                length=len(url),
                max=self.MAX_URL_LENGTH
            )

        if any(char.isspace() for char in url):
            return self._failure(
                "Invalid URL format",
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                url=url
            )

        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            return self._failure(
                f"Invalid URL format: {e}",
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                url=url
            )

        if not parts.scheme or not parts.hostname:
            return self._failure(
                "URL must contain scheme and host",
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                url=url
            )

        scheme = parts.scheme.lower()
        allowed_protocols = self.resolve("allowed_protocols", context, DEFAULT_ALLOWED_PROTOCOLS)
        allowed = [str(protocol).lower() for protocol in (allowed_protocols or ())]
        if scheme not in allowed:
            return self._failure(
                self._format_message('Protocol "{scheme}" is not allowed', scheme=scheme),
                constraint="scheme",
                category=ErrorCategory.UNSUPPORTED_VARIANT,
                scheme=scheme,
                allowed=allowed
            )

        host = parts.hostname
        if not self._is_valid_host(host):
            return self._failure(
                "Invalid host format",
                constraint="host",
                category=ErrorCategory.FORMAT_MISMATCH,
                host=host
            )

        if self.resolve("check_dns", context, False) and not self._is_ip_address(host):
            dns_failure = self._dns_lookup(host, self.DNS_RECORD_TYPES, context, "Host")
            if dns_failure is not None:
                return dns_failure

        if self.resolve("require_https", context, False) and scheme != "https":
            return self._failure(
                "HTTPS protocol is required",
                constraint="https",
                category=ErrorCategory.UNSUPPORTED_VARIANT,
                scheme=scheme
            )

        if self.resolve("require_path", context, False) and not parts.path:
            return self._failure(
                "URL must contain a path",
                constraint="path",
                category=ErrorCategory.FORMAT_MISMATCH,
                url=url
            )

        if self._has_suspicious_pattern(url):
            return self._warning(
                "URL contains potentially suspicious patterns",
                constraint="suspicious",
                url=url,
                suspicious=True
            )

        return self._success(scheme=scheme, host=host, port=port, path=parts.path)

    @staticmethod
    def _is_ip_address(host: str) -> bool:
        try:
            ipaddress.ip_address(host)
            return True
        except ValueError:
            return False

    def _is_valid_host(self, host: str) -> bool:
        if self._is_ip_address(host):
            return True

        try:
            ascii_host = host.encode("idna").decode("ascii")
        except UnicodeError:
            return False

        return len(ascii_host) <= self.MAX_HOST_LENGTH and _HOSTNAME.fullmatch(ascii_host) is not None

    @staticmethod
    def _has_suspicious_pattern(url: str) -> bool:
        # Several @ hide the real host behind fake credentials
        if url.count("@") > 1:
            return True

        if ".." in url:
            return True

        if _PERCENT_ENCODED.search(url):
            decoded = unquote(url)
            if decoded != url and _PERCENT_ENCODED.search(decoded):
                return True

        return False


@register_validator("phone")
class PhoneValidator(BaseValidator):
    """
    Validate a phone number.

    The number is reduced to digits and a leading "+"; it must have 7 to
    15 digits (E.164 bounds) and at most one "+", in first position. The
    original text must then match one of the accepted layouts: E.164,
    international with spaces or dashes, or local with parentheses.

    Success results carry: normalized, length, has_country_code.
    """

    MIN_LENGTH = 7
    MAX_LENGTH = 15

    VALID_PATTERNS = (
        re.compile(r"\+[1-9]\d{1,14}", re.ASCII),  # E.164: +37061234567
        re.compile(r"\+[1-9][\d\s]{1,18}", re.ASCII),  # +44 20 7123 4567
        re.compile(r"\+[1-9][\d\-\s]{1,18}", re.ASCII),  # +1-555-123-4567
        re.compile(r"\+?[1-9]?[\d\s()\-]{6,20}", re.ASCII),  # +1 (555) 123-4567
        re.compile(r"[\d\s()\-]{7,20}", re.ASCII),  # (555) 123-4567
    )

    error_message = "Invalid phone number format"
    success_message = "Valid phone number"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value, subject="Phone number")

        value = value.strip()
        if not value:
            return self._failure(
                "Phone number cannot be empty",
                constraint="empty",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value
            )

        digits_only = re.sub(r"[^0-9+]", "", value)

        if not re.search(r"[0-9]", digits_only):
            return self._failure(
                f'Phone number "{value}" contains no digits',
                constraint="digits",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                extracted=digits_only
            )

        plus_count = digits_only.count("+")
        if plus_count > 1 or (plus_count == 1 and not digits_only.startswith("+")):
            return self._failure(
                f'Phone number "{value}" has invalid plus sign placement',
                constraint="plus_sign",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                extracted=digits_only
            )

        length = len(digits_only.replace("+", ""))

        if length < self.MIN_LENGTH:
            return self._failure(
                f'Phone number "{value}" is too short (minimum {self.MIN_LENGTH} digits, got {length})',
                constraint="min_length",
                category=ErrorCategory.RANGE_VIOLATION,
                value=value,
                length=length,
                min_length=self.MIN_LENGTH
            )

        if length > self.MAX_LENGTH:
            return self._failure(
                f'Phone number "{value}" is too long (maximum {self.MAX_LENGTH} digits, got {length})',
                constraint="max_length",
                category=ErrorCategory.RANGE_VIOLATION,
                value=value,
                length=length,
                max_length=self.MAX_LENGTH
            )

        if not any(pattern.fullmatch(value) for pattern in self.VALID_PATTERNS):
            return self._failure(
                f'Phone number "{value}" does not match valid format patterns',
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                digits=digits_only
            )

        return self._success(
            f'Phone number "{value}" is valid',
            value=value,
            normalized=digits_only,
            length=length,
            has_country_code=digits_only.startswith("+")
        )
