"""
loader.populator - Default (non-specialised) assignment of a cell.

Attributes are coerced to the column's Python type and set directly.
Associations are looked up, never created:

    to-one  : 'Default'  or  'name:Default'
    to-many : 'code:us,eu'  or  'us,eu'  (several lookups may be joined
              with the association delimiter:  'code:us|name:Outlet')
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect

from loader.context import RowContext
from loader.delimiters import split_associations, split_name_value, split_values
from loader.errors import (
    ASSOCIATION_LOOKUP_PARTIAL,
    AssociationLookupFailed,
    UnresolvedOperator,
)
from loader.operators import OperatorDescriptor, OperatorKind

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "y", "t", "on"}
_FALSE = {"0", "false", "no", "n", "f", "off"}


def coerce(descriptor: OperatorDescriptor, raw: str) -> Any:
    """Convert cell text to the attribute's Python type; ValueError if impossible."""
    ptype = descriptor.python_type or str
    text = raw.strip()
    try:
        if ptype is bool:
            lowered = text.lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError(text)
        if ptype is int:
            return int(Decimal(text))
        if ptype is float:
            return float(text)
        if ptype is Decimal:
            return Decimal(text)
        if ptype is datetime:
            return datetime.fromisoformat(text)
        if ptype is date:
            return date.fromisoformat(text)
    except (ValueError, InvalidOperation):
        raise ValueError(
            f"Invalid {ptype.__name__} value {raw!r} for {descriptor.name}"
        ) from None
    return text


def assign(ctx: RowContext, descriptor: OperatorDescriptor, value: str) -> None:
    """Assign *value* to ctx.product through *descriptor*."""
    kind = descriptor.kind
    if kind is OperatorKind.ATTRIBUTE:
        setattr(ctx.product, descriptor.name, coerce(descriptor, value))
    elif kind is OperatorKind.TO_ONE:
        _assign_to_one(ctx, descriptor, value)
    elif kind is OperatorKind.TO_MANY:
        _assign_to_many(ctx, descriptor, value)
    elif descriptor.forced:
        ctx.product.set_extra(descriptor.name, value.strip())
    else:
        raise UnresolvedOperator(f"No assignment available for operator {descriptor.name}")


# ── Private helpers ────────────────────────────────────────────────────

def _lookup_column(model: type, name: str) -> Optional[str]:
    return name if name and name in sa_inspect(model).columns else None


def _parse_lookup(descriptor: OperatorDescriptor, instance: str) -> tuple[str, str]:
    """'code:us,eu' → ('code', 'us,eu');  'us,eu' → (find_by_default, 'us,eu')"""
    operator, rest = split_name_value(instance)
    column = _lookup_column(descriptor.target_type, operator) if rest is not None else None
    if column:
        return column, rest
    if not descriptor.find_by_default:
        raise AssociationLookupFailed(
            f"Cannot look up {descriptor.name} from {instance!r}: no lookup field"
        )
    return descriptor.find_by_default, instance.strip()


def _assign_to_one(ctx: RowContext, descriptor: OperatorDescriptor, value: str) -> None:
    column, key = _parse_lookup(descriptor, value)
    record = ctx.store.find_first(descriptor.target_type, **{column: key})
    if record is None:
        raise AssociationLookupFailed(
            f"No {descriptor.target_type.__name__} with {column}={key!r} for {descriptor.name}"
        )
    setattr(ctx.product, descriptor.name, record)


def _assign_to_many(ctx: RowContext, descriptor: OperatorDescriptor, value: str) -> None:
    # Join rows need the product's id
    ctx.ensure_persisted(descriptor.name)
    collection = getattr(ctx.product, descriptor.name)
    target = descriptor.target_type

    found, missing = [], []
    for instance in split_associations(value):
        column, rest = _parse_lookup(descriptor, instance)
        for key in split_values(rest):
            record = ctx.store.find_first(target, **{column: key})
            if record is None:
                missing.append(f"{column}={key}")
            elif record not in found:
                found.append(record)

    # Only a cell that matches nothing at all fails the row
    if not found:
        raise AssociationLookupFailed(
            f"No {target.__name__} found for {descriptor.name}: {', '.join(missing)}"
        )
    for record in found:
        if record not in collection:
            collection.append(record)
    if missing:
        message = f"{target.__name__} not found for {', '.join(missing)}"
        ctx.product.add_error(descriptor.name, message)
        ctx.warn(ASSOCIATION_LOOKUP_PARTIAL, f"{descriptor.name}: {message}")
    logger.debug("Attached %d %s to product", len(found), descriptor.name)
