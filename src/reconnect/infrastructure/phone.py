"""Contact phone numbers: accept anything phonenumbers can validate, store it as E.164."""

from functools import partial

import phonenumbers


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """E.164 string for raw, or None when it is blank, unparseable or not a real number.

    Local numbers (no leading +) resolve only if default_region is given.
    """
    text = str(raw or "").strip()
    if not text:
        return None
    try:
        number = phonenumbers.parse(text, default_region)
    except phonenumbers.NumberParseException:
        return None
    if phonenumbers.is_valid_number(number):
        return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)
    return None


def phone_normalizer(default_region: str | None = None):
    """normalize_phone with the region fixed; blank or lowercase regions are tidied first."""
    region = (default_region or "").strip().upper() or None
    return partial(normalize_phone, default_region=region)
