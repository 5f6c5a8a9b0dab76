"""
Validators module.

Contains all built-in validators organized by category:
- text_validators: alpha, alphanumeric, length
- numeric_validators: number, integer, float
- network_validators: email, url, phone
- identifier_validators: iban, uuid

All validators are automatically cataloged via decorators.
"""

# Import all validators to trigger registration
from modules.validation.validators.text_validators import AlphaValidator, AlphanumericValidator, LengthValidator
from modules.validation.validators.numeric_validators import NumberValidator, IntegerValidator, FloatValidator
from modules.validation.validators.network_validators import EmailValidator, UrlValidator, PhoneValidator
from modules.validation.validators.identifier_validators import IbanValidator, UuidValidator

__all__ = [
    'AlphaValidator',
    'AlphanumericValidator',
    'LengthValidator',
    'NumberValidator',
    'IntegerValidator',
    'FloatValidator',
    'EmailValidator',
    'UrlValidator',
    'PhoneValidator',
    'IbanValidator',
    'UuidValidator',
]
