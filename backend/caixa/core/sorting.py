"""``order_by`` query-string handling for list endpoints."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from caixa.core.database import Base

DIRECTIONS = ("asc", "desc")


def parse_order_by(
    model: type[Base], order_by: str | None, default: tuple[str, str]
) -> tuple[str, str]:
    """Turn ``"column:direction"`` into a (column, direction) pair.

    Only real table columns are accepted; anything else yields ``default``.
    A column given without a direction sorts ascending.
    """
    if not order_by:
        return default
    column, _, direction = order_by.partition(":")
    if column not in model.__table__.columns:
        return default
    return column, direction if direction in DIRECTIONS else "asc"


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Order ``query`` by ``order_by``, then by primary key for stable pages."""
    column, direction = parse_order_by(model, order_by, (default_field, default_direction))
    sort = asc if direction == "asc" else desc
    return query.order_by(sort(getattr(model, column)), asc(model.id))
