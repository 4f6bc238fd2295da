"""
Phone number helpers for E.164 normalization.

Numbers without a country code are assumed to be Malian (+223) unless a
different default is passed in.
"""
import re
from typing import List, Optional

from app.config import settings

_SEPARATORS = re.compile(r"[\s\-]")
_DIGITS = re.compile(r"^\d+$")
_LOCAL_NUMBER = re.compile(r"^\d{8}$")
_INTERNATIONAL_DIGITS = re.compile(r"^\d{9,15}$")

INVALID_PHONE_MESSAGE = "Invalid phone format. Use +223XXXXXXXX"


class InvalidPhoneFormat(ValueError):
    """Raised when a phone number cannot be turned into an E.164 string."""


def normalize_phone(raw: str, country_code: Optional[str] = None) -> str:
    """Normalize a phone number to E.164.

    Accepts full E.164 strings (returned as-is), numbers prefixed with the
    country calling code but no plus, local 8-digit numbers, and bare
    international numbers of 9 to 15 digits.
    """
    code = country_code or settings.default_country_code
    if not raw:
        raise InvalidPhoneFormat("Phone number is empty")
    phone = _SEPARATORS.sub("", raw)
    if phone.startswith("+"):
        return phone
    # 8 digits is always local, even when it starts with the country code
    if _LOCAL_NUMBER.match(phone):
        return f"+{code}{phone}"
    if phone.startswith(code) and _DIGITS.match(phone):
        return f"+{phone}"
    if _INTERNATIONAL_DIGITS.match(phone):
        return f"+{phone}"
    raise InvalidPhoneFormat(f"Cannot normalize phone number: {raw!r}")


def phone_variants(normalized: str, country_code: Optional[str] = None) -> List[str]:
    """Formats a stored phone column might use for the same number."""
    code = country_code or settings.default_country_code
    no_plus = normalized[1:] if normalized.startswith("+") else normalized
    variants = [normalized, no_plus]
    if no_plus.startswith(code):
        variants.append(no_plus[len(code):])
    # dict.fromkeys keeps first-seen order
    return list(dict.fromkeys(variants))
