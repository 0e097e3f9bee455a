"""Utilities for assigning and validating opaque entity identifiers."""
from __future__ import annotations

import uuid
from typing import Any, Type

from sqlalchemy import event
from sqlalchemy.orm import Mapper

IDENTIFIER_LENGTH = 32


def new_identifier() -> str:
    """Return a fresh globally unique identifier as 32 lowercase hex characters."""
    return uuid.uuid4().hex


def is_valid_identifier(value: Any) -> bool:
    """Return ``True`` when ``value`` is a well-formed identifier.

    Identifiers are the hex form produced by :func:`new_identifier`. Anything
    else (``None``, numbers, dashed UUIDs, arbitrary strings) is treated as a
    malformed reference by the callers, which answer with an empty result
    instead of querying the store.
    """
    if not isinstance(value, str) or len(value) != IDENTIFIER_LENGTH:
        return False
    try:
        return uuid.UUID(hex=value).hex == value
    except ValueError:
        return False


def register_identifier_listener(model: Type[object], pk_name: str = "id") -> None:
    """Ensure ``model`` receives an identifier before insert.

    The listener only assigns a value when the instance does not already carry
    one, so callers that need the identifier ahead of the flush can still set
    it themselves.
    """

    table = getattr(model, "__table__", None)
    if table is None or pk_name not in table.c:
        raise ValueError(f"Model {model!r} does not expose a '{pk_name}' column")

    @event.listens_for(model, "before_insert", propagate=True)
    def _assign_identifier(_: Mapper, connection, target) -> None:  # pragma: no cover - SQLAlchemy callback
        if getattr(target, pk_name) is not None:
            return
        setattr(target, pk_name, new_identifier())
