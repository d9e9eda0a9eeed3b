import secrets
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns round-trip through the DB"""
    return datetime.now(UTC).replace(tzinfo=None)


def generate_session_token() -> str:
    return secrets.token_hex(32)
