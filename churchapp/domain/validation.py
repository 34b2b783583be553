"""Field rules shared by FormController (client) and RecordService (server)."""

import re
from datetime import date, datetime, time
from typing import Any

from churchapp.domain.entities.entity_config import EntityConfig, FieldKind, FieldSpec

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# YYYY-MM-DD with an optional ISO time part.
_DATE_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2})(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:\d{2})?)?$"
)
_TIME_FORMATS = ("%H:%M", "%H:%M:%S")
_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(
    config: EntityConfig,
    values: dict[str, Any],
    *,
    creating: bool,
    partial: bool = False,
) -> dict[str, str]:
    """Return a mapping of field name → error message; empty when valid.

    ``partial`` checks only the fields present in ``values`` (update bodies
    that carry changed fields only).
    """
    errors: dict[str, str] = {}
    for spec in config.fields:
        if partial and spec.name not in values:
            continue
        value = values.get(spec.name)

        if is_blank(value):
            if spec.required:
                errors[spec.name] = f"{spec.label} is required"
            elif spec.create_only and creating:
                errors[spec.name] = f"{spec.label} is required for new {config.plural}"
            continue

        message = _check_format(spec, value)
        if message:
            errors[spec.name] = message
    return errors


def coerce_fields(
    config: EntityConfig, values: dict[str, Any]
) -> dict[str, Any]:
    """Normalise already-validated values into a request/storage payload.

    Strings are trimmed, ints and bools converted, blank optional values of
    non-text kinds become None, and ``omit_blank`` fields are dropped when
    blank. Keys that are not catalog fields are discarded.
    """
    payload: dict[str, Any] = {}
    for spec in config.fields:
        if spec.name not in values:
            continue
        value = values[spec.name]
        if is_blank(value):
            if spec.omit_blank:
                continue
            payload[spec.name] = "" if spec.kind in (FieldKind.TEXT, FieldKind.EMAIL) else None
            continue
        payload[spec.name] = _coerce(spec, value)
    return payload


def _check_format(spec: FieldSpec, value: Any) -> str | None:
    if spec.kind is FieldKind.EMAIL:
        if not EMAIL_PATTERN.match(str(value).strip()):
            return "Invalid email format"
    elif spec.kind is FieldKind.INT:
        if _to_int(value) is None:
            return f"{spec.label} must be a whole number"
    elif spec.kind is FieldKind.DATE:
        if parse_date(value) is None:
            return f"{spec.label} must be a date (YYYY-MM-DD)"
    elif spec.kind is FieldKind.TIME:
        if _to_time(value) is None:
            return f"{spec.label} must be a time (HH:MM)"
    elif spec.kind is FieldKind.BOOL:
        if _to_bool(value) is None:
            return f"{spec.label} must be true or false"
    elif spec.kind is FieldKind.CHOICE:
        if str(value).strip() not in spec.choices:
            return f"{spec.label} must be one of: {', '.join(spec.choices)}"
    return None


def _coerce(spec: FieldSpec, value: Any) -> Any:
    if spec.kind is FieldKind.INT:
        return _to_int(value)
    if spec.kind is FieldKind.BOOL:
        return _to_bool(value)
    if spec.kind is FieldKind.DATE:
        return parse_date(value).isoformat()
    if spec.kind is FieldKind.TIME:
        return _to_time(value).strftime("%H:%M")
    if isinstance(value, str):
        return value.strip()
    return value


def parse_date(value: Any) -> date | None:
    """Parse a YYYY-MM-DD string (or date/datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        match = _DATE_PATTERN.match(str(value).strip())
        return date.fromisoformat(match.group(1)) if match else None
    except ValueError:
        return None


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _to_time(value: Any) -> time | None:
    if isinstance(value, time):
        return value
    text = str(value).strip()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None
