"""
Text validators module.

Contains validators that operate on the characters of a string:
- AlphaValidator: Letters only
- AlphanumericValidator: Letters and digits
- LengthValidator: Character (or byte) count within min/max/exact bounds
"""

import re
import unicodedata
from typing import Any, List, Optional

from modules.validation.core.base import (
    ErrorCategory,
    ParameterizedValidator,
    ValidationContext,
    ValidationResult,
)
from modules.validation.core.registry import register_validator


def _is_letter(char: str) -> bool:
    return unicodedata.category(char).startswith("L")


def _is_mark(char: str) -> bool:
    return unicodedata.category(char).startswith("M")


def _is_number(char: str) -> bool:
    return unicodedata.category(char).startswith("N")


@register_validator("alpha")
class AlphaValidator(ParameterizedValidator):
    """
    Validate that a string contains only alphabetic characters.

    Parameters (construction or context):
        allow_spaces: Accept whitespace between letters (default False)
        allow_unicode: Accept any Unicode letter instead of ASCII a-z/A-Z (default False)
        allow_diacritics: In Unicode mode, accept combining marks (default True)

    Example:
        AlphaValidator().validate("hello").is_valid                      # True
        AlphaValidator(allow_spaces=True).validate("hello world").is_valid  # True
    """

    error_message = "Value must contain only alphabetic characters"
    success_message = "Valid alphabetic string"

    _ASCII_LETTERS = re.compile(r"[A-Za-z]+")

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value)

        if value == "":
            return self._failure(
                "Value cannot be empty",
                constraint="empty",
                category=ErrorCategory.FORMAT_MISMATCH
            )

        allow_spaces = bool(self.resolve("allow_spaces", context, False))
        allow_unicode = bool(self.resolve("allow_unicode", context, False))
        allow_diacritics = bool(self.resolve("allow_diacritics", context, True))

        if allow_unicode:
            is_valid = self._check_unicode(value, allow_spaces, allow_diacritics)
        else:
            is_valid = self._check_ascii(value, allow_spaces)

        if not is_valid:
            message = "Value must contain only "
            message += "alphabetic characters" if allow_unicode else "ASCII letters (a-z, A-Z)"
            if allow_spaces:
                message += " and spaces"

            return self._failure(
                message,
                constraint="characters",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                allow_spaces=allow_spaces,
                allow_unicode=allow_unicode
            )

        return self._success()

    def _check_ascii(self, value: str, allow_spaces: bool) -> bool:
        if allow_spaces:
            value = value.replace(" ", "")
        return bool(self._ASCII_LETTERS.fullmatch(value))

    @staticmethod
    def _check_unicode(value: str, allow_spaces: bool, allow_diacritics: bool) -> bool:
        for char in value:
            if _is_letter(char):
                continue
            if allow_diacritics and _is_mark(char):
                continue
            if allow_spaces and char.isspace():
                continue
            return False
        return True


@register_validator("alphanumeric")
class AlphanumericValidator(ParameterizedValidator):
    """
    Validate that a string contains only letters and digits.

    Parameters (construction or context):
        allow_spaces: Accept whitespace (default False)
        allow_unicode: Accept any Unicode letter/number instead of ASCII (default False)
        allow_underscores: Accept "_" (default False)
        allow_hyphens: Accept "-" (default False)
    """

    error_message = "Value must contain only alphanumeric characters"
    success_message = "Valid alphanumeric string"

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value)

        if value == "":
            return self._failure(
                "Value cannot be empty",
                constraint="empty",
                category=ErrorCategory.FORMAT_MISMATCH
            )

        allow_spaces = bool(self.resolve("allow_spaces", context, False))
        allow_unicode = bool(self.resolve("allow_unicode", context, False))
        allow_underscores = bool(self.resolve("allow_underscores", context, False))
        allow_hyphens = bool(self.resolve("allow_hyphens", context, False))

        extra = ""
        if allow_underscores:
            extra += "_"
        if allow_hyphens:
            extra += "-"

        if allow_unicode:
            is_valid = all(
                _is_letter(char) or _is_number(char) or char in extra
                or (allow_spaces and char.isspace())
                for char in value
            )
        else:
            if allow_spaces:
                extra += " "
            pattern = "[a-zA-Z0-9" + re.escape(extra) + "]+"
            is_valid = re.fullmatch(pattern, value) is not None

        if not is_valid:
            return self._failure(
                self._build_error_message(allow_spaces, allow_unicode, allow_underscores, allow_hyphens),
                constraint="characters",
                category=ErrorCategory.FORMAT_MISMATCH,
                value=value,
                allow_spaces=allow_spaces,
                allow_unicode=allow_unicode,
                allow_underscores=allow_underscores,
                allow_hyphens=allow_hyphens
            )

        return self._success()

    @staticmethod
    def _build_error_message(
        allow_spaces: bool,
        allow_unicode: bool,
        allow_underscores: bool,
        allow_hyphens: bool
    ) -> str:
        message = "Value must contain only "
        if allow_unicode:
            message += "alphanumeric characters"
        else:
            message += "ASCII letters and numbers (a-z, A-Z, 0-9)"

        extras: List[str] = []
        if allow_spaces:
            extras.append("spaces")
        if allow_underscores:
            extras.append("underscores")
        if allow_hyphens:
            extras.append("hyphens")

        if extras:
            message += ", " + ", ".join(extras)
        return message


@register_validator("length")
class LengthValidator(ParameterizedValidator):
    """
    Validate string length.

    Length counts Unicode code points, or UTF-8 bytes when use_bytes is
    set. `exact` takes precedence over `min`/`max`. A configuration with
    min > max rejects every value.

    Parameters (construction or context):
        min: Minimum length, inclusive
        max: Maximum length, inclusive
        exact: Exact length
        use_bytes: Count UTF-8 bytes instead of characters (default False)

    Example:
        LengthValidator.between(3, 5).validate("abcd").is_valid  # True
        LengthValidator(min=3).validate("ab", ValidationContext({"min": 1})).is_valid  # True
    """

    error_message = "String length is invalid"
    success_message = "String length is valid"

    @classmethod
    def min_length(cls, min: int, use_bytes: bool = False) -> "LengthValidator":
        return cls(min=min, use_bytes=use_bytes)

    @classmethod
    def max_length(cls, max: int, use_bytes: bool = False) -> "LengthValidator":
        return cls(max=max, use_bytes=use_bytes)

    @classmethod
    def exact_length(cls, exact: int, use_bytes: bool = False) -> "LengthValidator":
        return cls(exact=exact, use_bytes=use_bytes)

    @classmethod
    def between(cls, min: int, max: int, use_bytes: bool = False) -> "LengthValidator":
        return cls(min=min, max=max, use_bytes=use_bytes)

    def _validate(self, value: Any, context: Optional[ValidationContext]) -> ValidationResult:
        if not isinstance(value, str):
            return self._type_failure(value)

        min_length = self.resolve("min", context)
        max_length = self.resolve("max", context)
        exact = self.resolve("exact", context)
        use_bytes = bool(self.resolve("use_bytes", context, False))

        for key, bound in (("min", min_length), ("max", max_length), ("exact", exact)):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
                return self._parameter_failure(key, bound, "an integer")

        length = len(value.encode("utf-8")) if use_bytes else len(value)
        unit = "bytes" if use_bytes else "characters"

        if exact is not None:
            if length != exact:
                return self._failure(
                    self._format_message("String must be exactly {exact} {unit} long", exact=exact, unit=unit),
                    constraint="exact",
                    category=ErrorCategory.RANGE_VIOLATION,
                    length=length,
                    exact=exact,
                    use_bytes=use_bytes
                )
            return self._success(length=length)

        if min_length is not None and length < min_length:
            return self._failure(
                self._format_message("String must be at least {min} {unit} long", min=min_length, unit=unit),
                constraint="min",
                category=ErrorCategory.RANGE_VIOLATION,
                length=length,
                min=min_length,
                use_bytes=use_bytes
            )

        if max_length is not None and length > max_length:
            return self._failure(
                self._format_message("String must be at most {max} {unit} long", max=max_length, unit=unit),
                constraint="max",
                category=ErrorCategory.RANGE_VIOLATION,
                length=length,
                max=max_length,
                use_bytes=use_bytes
            )

        if min_length is not None and max_length is not None:
            return self._success(
                self._format_message("String length is within range ({min}-{max})", min=min_length, max=max_length),
                length=length
            )

        return self._success(length=length)
