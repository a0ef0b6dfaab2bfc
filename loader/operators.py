"""
loader.operators - Operator catalog: header text → what to assign.

An operator is the attribute or association a column feeds.  The catalog
introspects the SQLAlchemy mapper of a model once, classifies every
field as ATTRIBUTE / TO_ONE / TO_MANY, adds the PSEUDO operators that
have no schema field, and caches the result per model.  Build one
catalog and hand it to every loader that needs it; call
descriptors_for(model, reload=True) after a schema change.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import inspect as sa_inspect

from db.models import Product
from loader.field_map import HEADER_ALIASES, PSEUDO_OPERATORS

logger = logging.getLogger(__name__)


class OperatorKind(enum.Enum):
    ATTRIBUTE = "attribute"
    TO_ONE = "to_one"
    TO_MANY = "to_many"
    PSEUDO = "pseudo"


@dataclass(frozen=True)
class OperatorDescriptor:
    name: str
    kind: OperatorKind
    target_type: Optional[type] = None
    find_by_default: Optional[str] = None
    python_type: Optional[type] = None
    forced: bool = False


def normalize(header: str) -> str:
    """'Variant Price' / 'variant-price' / ' VARIANT_PRICE ' → 'variant_price'"""
    return re.sub(r"[^0-9a-z]+", "_", (header or "").strip().lower()).strip("_")


def _candidates(name: str) -> Iterable[str]:
    yield name
    if name.endswith("ies"):
        yield name[:-3] + "y"
    elif name.endswith("s"):
        yield name[:-1]
    if name.endswith("y"):
        yield name[:-1] + "ies"
    yield name + "s"
    alias = HEADER_ALIASES.get(name)
    if alias:
        yield alias


def _python_type(column) -> type:
    try:
        return column.type.python_type
    except NotImplementedError:
        return str


def _find_by_default(model) -> Optional[str]:
    return "name" if "name" in sa_inspect(model).columns else None


class OperatorCatalog:

    def __init__(self, pseudo_operators: Optional[dict[type, frozenset]] = None):
        self._pseudo = pseudo_operators if pseudo_operators is not None else {
            Product: PSEUDO_OPERATORS,
        }
        self._cache: dict[type, dict[str, OperatorDescriptor]] = {}

    # ── Public API ─────────────────────────────────────────────────────

    def descriptors_for(self, model: type, reload: bool = False) -> dict[str, OperatorDescriptor]:
        """Operator table for *model*, built on first use."""
        if reload or model not in self._cache:
            self._cache[model] = self._build(model)
            logger.debug("Operator catalog for %s: %s",
                         model.__name__, sorted(self._cache[model]))
        return self._cache[model]

    def find(self, model: type, header: str) -> Optional[OperatorDescriptor]:
        """Resolve a header to its operator, or None."""
        table = self.descriptors_for(model)
        for candidate in _candidates(normalize(header)):
            if candidate in table:
                return table[candidate]
        return None

    @staticmethod
    def force(header: str) -> OperatorDescriptor:
        """Descriptor for a column kept on request despite having no operator."""
        return OperatorDescriptor(
            name=normalize(header) or header.strip(),
            kind=OperatorKind.PSEUDO,
            forced=True,
        )

    # ── Private helpers ────────────────────────────────────────────────

    def _build(self, model: type) -> dict[str, OperatorDescriptor]:
        mapper = sa_inspect(model)
        exclude = getattr(model, "__operator_exclude__", frozenset())
        table: dict[str, OperatorDescriptor] = {}

        for attr in mapper.column_attrs:
            column = attr.columns[0]
            if attr.key in exclude or column.primary_key:
                continue
            table[attr.key] = OperatorDescriptor(
                name=attr.key,
                kind=OperatorKind.ATTRIBUTE,
                python_type=_python_type(column),
            )

        for rel in mapper.relationships:
            if rel.key in exclude:
                continue
            target = rel.mapper.class_
            table[rel.key] = OperatorDescriptor(
                name=rel.key,
                kind=OperatorKind.TO_MANY if rel.uselist else OperatorKind.TO_ONE,
                target_type=target,
                find_by_default=_find_by_default(target),
            )

        for name in self._pseudo.get(model, ()):
            table.setdefault(name, OperatorDescriptor(name=name, kind=OperatorKind.PSEUDO))

        return table
