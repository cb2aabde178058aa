#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixins for the Book Catalog.

- UUID primary key (String(36)) with defaults
- created_at / updated_at timestamps
- to_dict() that formats dates and removes SA internals
- SoftDeleteMixin adding the `active` flag used by every listing query

Notes:
- Server-side defaults (func.now()) keep timestamps consistent across backends.
  For SQLite, func.now() maps to CURRENT_TIMESTAMP.
- Put SoftDeleteMixin FIRST in the model's base list:
    class Author(SoftDeleteMixin, BaseModel, Base): ...
"""

from __future__ import annotations

from datetime import date, datetime, timezone
import uuid

from sqlalchemy import Boolean, Column, DateTime, String, true
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

TIME_FMT = "%Y-%m-%dT%H:%M:%S.%f"

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel:
    """
    Base mixin for all persistent models: id, created_at, updated_at, to_dict().
    """

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        created_at/updated_at are left to the DB defaults unless passed explicitly.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        # Ensure an id exists if caller passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}: {getattr(self, 'name', '')}>"

    def to_dict(self) -> dict:
        """
        Plain dict of the loaded columns:
        - datetimes formatted with TIME_FMT, dates as ISO strings
        - SQLAlchemy internal state removed
        """
        d = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        for key, value in d.items():
            if isinstance(value, datetime):
                d[key] = value.strftime(TIME_FMT)
            elif isinstance(value, date):
                d[key] = value.isoformat()
        return d


class SoftDeleteMixin:
    """
    Adds `active` and `deleted_at`. Rows are never removed; a soft delete flips
    `active` to false and stamps `deleted_at`. Listing queries filter on
    `active_clause()`, by-id lookups do not.

    Deactivation is issued as bulk UPDATE statements in models.queries so that
    dependent books can be switched off in the same transaction as the parent.
    """

    active = Column(Boolean, nullable=False, default=True, server_default=true())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @classmethod
    def active_clause(cls):
        return cls.active.is_(True)

    @classmethod
    def deactivation_values(cls) -> dict:
        """Column values written by a soft delete."""
        return {"active": False, "deleted_at": utcnow()}
