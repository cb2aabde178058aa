from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load

DATE_INVALID = "Date is not valid"


def strip_value(value):
    """Trim strings (and lists of strings); blank input becomes None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (list, tuple)):
        items = [strip_value(v) for v in value]
        items = [v for v in items if v is not None]
        return items or None
    return value


def required_date(required_message: str) -> fields.Date:
    return fields.Date(
        required=True,
        error_messages={"required": required_message, "invalid": DATE_INVALID},
    )


class FormSchema(Schema):
    """
    Base for HTML form schemas.
    - Unknown keys (csrf tokens, the delete password, ...) are ignored
    - Whitespace is trimmed before any check; blank fields count as missing
    """

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def _strip_blank_values(self, data, **kwargs):
        cleaned = {}
        for key, value in data.items():
            value = strip_value(value)
            if value is not None:
                cleaned[key] = value
        return cleaned


def _flatten(messages) -> List[str]:
    if isinstance(messages, dict):
        out = []
        for value in messages.values():
            out.extend(_flatten(value))
        return out
    if isinstance(messages, (list, tuple)):
        out = []
        for value in messages:
            out.extend(_flatten(value))
        return out
    return [str(messages)]


def error_list(schema: Schema, messages: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Turn marshmallow's error dict into [{"field", "msg"}, ...] ordered by the
    schema's field declaration order; schema-level errors come last.
    """
    errors = []
    for name in schema.fields:
        if name in messages:
            errors.extend({"field": name, "msg": m} for m in _flatten(messages[name]))
    for name, value in messages.items():
        if name not in schema.fields:
            errors.extend({"field": name, "msg": m} for m in _flatten(value))
    return errors


def load_form(schema: Schema, payload: Dict[str, Any]) -> Tuple[Optional[dict], List[Dict[str, str]]]:
    """
    Validate a submitted form. Never raises and never touches the store:
    returns (data, []) on success or (None, errors) on failure.
    """
    try:
        return schema.load(payload), []
    except ValidationError as err:
        return None, error_list(schema, err.messages)
