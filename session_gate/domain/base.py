import re
from datetime import UTC, datetime

_UNSAFE_CHARS = re.compile(r"[<>]")


def utc_now() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns"""
    return datetime.now(UTC).replace(tzinfo=None)


def sanitize_input(value: str) -> str:
    """Strip characters that could open markup in rendered contexts"""
    return _UNSAFE_CHARS.sub("", value)


def normalize_email(email: str) -> str:
    return sanitize_input(email).strip().lower()
