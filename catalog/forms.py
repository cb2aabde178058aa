"""Glue between request bodies, schemas and the form templates."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from flask import request
from werkzeug.datastructures import MultiDict


def form_payload(list_fields: Iterable[str] = ()) -> dict:
    """Submitted form as a plain dict; `list_fields` keep every selected value."""
    payload = request.form.to_dict(flat=True)
    for name in list_fields:
        payload[name] = request.form.getlist(name)
    return payload


def prefill(values: Mapping) -> MultiDict:
    """
    Stored values in the shape the templates read submitted input in
    (form.get / form.getlist), so one template serves first render and re-render.
    """
    items = []
    for key, value in values.items():
        if isinstance(value, (list, tuple)):
            items.extend((key, str(v)) for v in value)
        elif isinstance(value, date):
            items.append((key, value.isoformat()))
        elif value is not None:
            items.append((key, str(value)))
    return MultiDict(items)
