"""
Identifier validators module.

Contains validators for structured identifiers:
- IbanValidator: International Bank Account Number (ISO 13616, MOD-97 checksum)
- UuidValidator: RFC 4122 textual UUID with optional required version
"""

import re
from typing import Any, Dict, Optional

from modules.validation.core.base import (
    BaseValidator,
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationResult,
)
from modules.validation.core.registry import register_validator


# ISO 13616 country code -> IBAN length
IBAN_LENGTHS: Dict[str, int] = {
    "AD": 24, "AE": 23, "AL": 28, "AT": 20, "AZ": 28,
    "BA": 20, "BE": 16, "BG": 22, "BH": 22, "BI": 27,
    "BR": 29, "BY": 28, "CH": 21, "CR": 22, "CY": 28,
    "CZ": 24, "DE": 22, "DJ": 27, "DK": 18, "DO": 28,
    "EE": 20, "EG": 29, "ES": 24, "FI": 18, "FO": 18,
    "FR": 27, "GB": 22, "GE": 22, "GI": 23, "GL": 18,
    "GR": 27, "GT": 28, "HR": 21, "HU": 28, "IE": 22,
    "IL": 23, "IQ": 23, "IS": 26, "IT": 27, "JO": 30,
    "KW": 30, "KZ": 20, "LB": 28, "LC": 32, "LI": 21,
    "LT": 20, "LU": 20, "LV": 21, "LY": 25, "MC": 27,
    "MD": 24, "ME": 22, "MK": 19, "MR": 27, "MT": 31,
    "MU": 30, "NL": 18, "NO": 15, "PK": 24, "PL": 28,
    "PS": 29, "PT": 25, "QA": 29, "RO": 24, "RS": 22,
    "RU": 33, "SA": 24, "SC": 31, "SD": 18, "SE": 24,
    "SI": 19, "SK": 24, "SM": 27, "ST": 25, "SV": 28,
    "TL": 23, "TN": 24, "TR": 26, "UA": 29, "VA": 22,
    "VG": 24, "XK": 20,
}

IBAN_MIN_LENGTH = 15  # Norway, the shortest IBAN

UUID_VERSIONS = (1, 3, 4, 5)
UUID_VARIANTS = ("8", "9", "a", "b")

_IBAN_CHARS = re.compile(r"[A-Z0-9]+")
_UUID_FORMAT = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def iban_mod97(iban: str) -> int:
    """
    Compute the ISO 7064 MOD-97 remainder of a normalized IBAN.

    The first four characters (country code + check digits) are moved to
    the end, letters are replaced by two-digit numbers (A=10 ... Z=35) and
    the resulting numeral is reduced digit by digit modulo 97.

    Args:
        iban: Normalized IBAN (uppercase, no whitespace, alphanumeric)

    Returns:
        Remainder; 1 for a valid IBAN

    Example:
        iban_mod97("DE89370400440532013000")  # 1
    """
    rearranged = iban[4:] + iban[:4]

    remainder = 0
    for char in rearranged:
        digits = str(ord(char) - ord("A") + 10) if char.isalpha() else char
        for digit in digits:
            remainder = (remainder * 10 + int(digit)) % 97
    return remainder


@register_validator("iban")
class IbanValidator(BaseValidator):
    """
    Validate an International Bank Account Number.

    Checks, in order: characters, minimum length, country code, check
    digits, country support and country-specific length (ISO 13616), and
    finally the MOD-97 checksum (ISO 7064). Whitespace anywhere in the
    input is ignored and letters are case-insensitive.

    Success results carry: normalized, country_code, check_digits, length.

    Example:
        IbanValidator().validate("DE89 3704 0044 0532 0130 00").is_valid  # True
    """

    error_message = "Invalid IBAN format"
    success_message = "Valid IBAN"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value, subject="IBAN")

        iban = "".join(value.split()).upper()

        if not iban:
            return self._failure(
                "IBAN cannot be empty",
                constraint="empty",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value
            )

        if not _IBAN_CHARS.fullmatch(iban):
            return self._failure(
                f'IBAN "{value}" contains invalid characters',
                constraint="characters",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                normalized=iban
            )

        if len(iban) < IBAN_MIN_LENGTH:
            return self._failure(
                f'IBAN "{value}" is too short (minimum {IBAN_MIN_LENGTH} characters)',
                constraint="min_length",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                length=len(iban)
            )

        country_code = iban[:2]
        if not country_code.isalpha():
            return self._failure(
                f'IBAN "{value}" has invalid country code "{country_code}"',
                constraint="country_code",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                country_code=country_code
            )

        check_digits = iban[2:4]
        if not check_digits.isdigit():
            return self._failure(
                f'IBAN "{value}" has invalid check digits "{check_digits}"',
                constraint="check_digits",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                check_digits=check_digits
            )

        expected_length = IBAN_LENGTHS.get(country_code)
        if expected_length is None:
            return self._failure(
                f'IBAN country code "{country_code}" is not supported',
                constraint="unsupported_country",
                category=ErrorCategory.UNSUPPORTED_VARIANT,
                value=value,
                country_code=country_code
            )

        if len(iban) != expected_length:
            return self._failure(
                f'IBAN "{value}" has invalid length for country {country_code} '
                f'(expected {expected_length}, got {len(iban)})',
                constraint="length",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                country_code=country_code,
                expected_length=expected_length,
                actual_length=len(iban)
            )

        if iban_mod97(iban) != 1:
            return self._failure(
                f'IBAN "{value}" has invalid checksum',
                constraint="checksum",
                category=ErrorCategory.CHECKSUM_FAILURE,
                value=value,
                country_code=country_code,
                check_digits=check_digits
            )

        return self._success(
            f'IBAN "{value}" is valid',
            value=value,
            normalized=iban,
            country_code=country_code,
            check_digits=check_digits,
            length=len(iban)
        )


@register_validator("uuid")
class UuidValidator(ParameterizedValidator):
    """
    Validate an RFC 4122 UUID in its textual 8-4-4-4-12 form.

    Parameters (construction or context):
        version: Required UUID version (1, 3, 4 or 5); any version when absent

    Success results carry: normalized, version, variant.

    Example:
        UuidValidator(version=4).validate("550e8400-e29b-41d4-a716-446655440000")
    """

    error_message = "Invalid UUID format"
    success_message = "Valid UUID"

    VERSION_OFFSET = 14
    VARIANT_OFFSET = 19

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value, subject="UUID")

        uuid = value.strip().lower()

        if not uuid:
            return self._failure(
                "UUID cannot be empty",
                constraint="empty",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value
            )

        if not _UUID_FORMAT.fullmatch(uuid):
            return self._failure(
                f'UUID "{value}" does not match the standard format',
                constraint="format",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                expected_format="xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
            )

        version = int(uuid[self.VERSION_OFFSET], 16)
        if version not in UUID_VERSIONS:
            return self._failure(
                f'UUID "{value}" has invalid version {version} (must be 1, 3, 4, or 5)',
                constraint="version",
                category=ErrorCategory.UNSUPPORTED_VARIANT,
                value=value,
                version=version
            )

        variant = uuid[self.VARIANT_OFFSET]
        if variant not in UUID_VARIANTS:
            return self._failure(
                f'UUID "{value}" has invalid variant "{variant}" (must be 8, 9, A, or B)',
                constraint="variant",
                category=ErrorCategory.UNSUPPORTED_VARIANT,
                value=value,
                variant=variant
            )

        required_version = self.resolve("version", context)
        if required_version is not None:
            if (
                isinstance(required_version, bool)
                or not isinstance(required_version, int)
                or required_version not in UUID_VERSIONS
            ):
                return self._parameter_failure(
                    "version",
                    required_version,
                    "1, 3, 4, or 5",
                    category=ErrorCategory.UNSUPPORTED_VARIANT
                )

            if version != required_version:
                return self._failure(
                    f'UUID "{value}" is version {version}, but version {required_version} is required',
                    constraint="version_mismatch",
                    category=ErrorCategory.UNSUPPORTED_VARIANT,
                    value=value,
                    actual_version=version,
                    required_version=required_version
                )

        return self._success(
            f'UUID "{value}" is valid (version {version})',
            value=value,
            normalized=uuid,
            version=version,
            variant=variant
        )
