from __future__ import annotations

import base64
import binascii
import re

from .errors import ValidationError

_SELECT_RE = re.compile(r"^select\b", re.IGNORECASE)


def detect_statement_type(sql: str) -> str:
    stripped = sql.strip().split()
    if not stripped:
        raise ValidationError("SQL statement is empty")
    return stripped[0].upper()


def validate_sql(sql: str) -> str:
    """Return the trimmed statement, or raise unless it starts with SELECT.

    Only the leading keyword is inspected; the rest of the statement is sent
    to the report server untouched.
    """
    normalized = sql.strip()
    if not normalized:
        raise ValidationError("SQL statement is empty")
    if not _SELECT_RE.match(normalized):
        raise ValidationError(
            f"Only SELECT statements are allowed, got {detect_statement_type(normalized)}"
        )
    return normalized


def encode_sql(sql: str) -> str:
    return base64.b64encode(sql.encode("utf-8")).decode("ascii")


def decode_sql(payload: str) -> str:
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValidationError(f"Invalid SQL payload: {exc}") from exc
