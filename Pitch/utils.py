# Pitch/utils.py
import re
from datetime import date, datetime

from rest_framework.exceptions import ValidationError

# Vietnamese mobile numbers: 10 digits, 03x / 05x / 07x / 08x / 09x
PHONE_PATTERN = re.compile(r"^0[35789]\d{8}$")

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def normalize_phone(value):
    return re.sub(r"[\s.\-]", "", str(value or ""))


def is_valid_phone(value):
    return bool(PHONE_PATTERN.match(normalize_phone(value)))


def parse_price(value):
    """
    "300.000đ" -> 300000, 300000 -> 300000.
    Anything without digits is 0.
    """
    if isinstance(value, int):
        return value
    digits = re.sub(r"[^\d]", "", str(value or ""))
    return int(digits) if digits else 0


def format_price(value):
    # vi-VN grouping: dot as the thousands separator
    return f"{int(value or 0):,}".replace(",", ".") + "đ"


def parse_day(value):
    """
    Accepts a date, "YYYY-MM-DD", an ISO instant ("2025-06-01T00:00:00.000Z")
    or the display form "dd/mm/YYYY".
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw = str(value or "").strip()
    if not raw:
        raise ValidationError({"date": ["Date is required"]})

    try:
        if "/" in raw:
            return datetime.strptime(raw, DISPLAY_DATE_FORMAT).date()
        if raw[10:11] == "T":
            raw = raw[:10]
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError({"date": [f"Invalid date: {raw}"]})


def format_day(day):
    return day.strftime(DISPLAY_DATE_FORMAT)


def day_as_iso_instant(day):
    return f"{day.isoformat()}T00:00:00.000Z"


def coerce_id(value):
    """Public ids are strings; anything that is not a positive integer matches nothing."""
    raw = str(value).strip() if value is not None else ""
    return int(raw) if raw.isascii() and raw.isdigit() else None
