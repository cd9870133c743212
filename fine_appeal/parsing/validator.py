"""Validates parsed extraction JSON against the fine record invariants."""

from typing import Any

from fine_appeal.appeal.models import FineRecord
from fine_appeal.exceptions import ParseError

REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("referenceNumber", "reference_number"),
    ("date", "date"),
    ("amount", "amount"),
    ("location", "location"),
    ("reason", "reason"),
    ("vehicle", "vehicle"),
)

_MAX_FIELD_LENGTH = 300
_MAX_ADDITIONAL_INFO_LENGTH = 2000


def validate_and_build(data: dict[str, Any]) -> FineRecord:
    """Validate raw parsed JSON and build a FineRecord.

    Every required key must be present. Values must be strings; null is
    read as an empty string. Oversized values are treated as model prose
    rather than extracted data.

    Raises:
        ParseError: on any validation failure.
    """
    values: dict[str, str] = {}
    for key, attr in REQUIRED_FIELDS:
        if key not in data:
            raise ParseError(f"Missing required field: {key}")
        values[attr] = _build_field(key, data[key], _MAX_FIELD_LENGTH)
    values["additional_info"] = _build_field(
        "additionalInfo", data.get("additionalInfo"), _MAX_ADDITIONAL_INFO_LENGTH
    )
    return FineRecord(**values)


def _build_field(key: str, raw: Any, max_length: int) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ParseError(f"'{key}' must be a string, got {type(raw).__name__}")
    value = raw.strip()
    if len(value) > max_length:
        raise ParseError(f"'{key}' exceeds {max_length} characters")
    return value
