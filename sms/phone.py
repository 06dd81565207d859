import re
from typing import Any

_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")
IRAN_MOBILE_RE = re.compile(r"^09[0-9]{9}$")


def to_english_digits(text: str) -> str:
    """Translate Persian and Arabic-Indic digits to ASCII."""
    return text.translate(_DIGITS)


def normalize_phone(value: Any) -> str:
    """Canonicalize a local-format mobile number to ``09xxxxxxxxx`` where possible."""
    raw = to_english_digits(str(value if value is not None else "").strip())
    digits = re.sub(r"\D", "", raw)
    if not digits:
        return ""
    if digits.startswith("0098"):
        return "0" + digits[4:]
    if digits.startswith("98"):
        return "0" + digits[2:]
    if len(digits) == 10 and digits.startswith("9"):
        return "0" + digits
    return digits


def is_valid_iran_mobile(phone: str) -> bool:
    return bool(IRAN_MOBILE_RE.match(str(phone or "")))
