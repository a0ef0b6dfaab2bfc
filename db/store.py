"""
db.store - Persistence collaborator used by the loader.

Thin wrapper around one Session.  The loader never touches the Session
directly; everything it needs (lookup, find-or-create, save with
validation, transaction boundaries) goes through Store so the import
pipeline stays testable against any SQLAlchemy backend.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session, SessionTransaction

logger = logging.getLogger(__name__)


class Rollback(Exception):
    """Raise inside Store.transaction() to discard all work silently."""


class Store:

    def __init__(self, session: Session):
        self.session = session

    # ── Lookup ─────────────────────────────────────────────────────────

    def find_first(self, model, **conditions):
        """First row matching *conditions* in primary-key order, or None."""
        return (
            self.session.query(model)
            .filter_by(**conditions)
            .order_by(*model.__mapper__.primary_key)
            .first()
        )

    def find_all(self, model, **conditions) -> list:
        return (
            self.session.query(model)
            .filter_by(**conditions)
            .order_by(*model.__mapper__.primary_key)
            .all()
        )

    def find_or_create(self, model, defaults: Optional[dict] = None, **conditions):
        """
        Return the first row matching *conditions*, creating (and flushing)
        one when none exists.  *defaults* only apply to a created row.
        """
        obj = self.find_first(model, **conditions)
        if obj is not None:
            return obj
        obj = model(**conditions, **(defaults or {}))
        self.session.add(obj)
        self.session.flush()
        logger.info("Created %s %r", model.__name__, conditions)
        return obj

    # ── Save ───────────────────────────────────────────────────────────

    def save(self, obj) -> bool:
        """
        Validate and flush *obj*.  Returns False (with obj.errors
        populated) when validation fails; nothing is written then.
        """
        problems = obj.validate() if hasattr(obj, "validate") else {}
        if problems:
            for field, messages in problems.items():
                for msg in messages:
                    obj.add_error(field, msg)
            return False
        self.session.add(obj)
        self.session.flush()
        return True

    def save_if_new(self, obj) -> bool:
        if self.is_persisted(obj):
            return True
        return self.save(obj)

    @staticmethod
    def is_persisted(obj) -> bool:
        return getattr(obj, "id", None) is not None

    def reload(self, obj) -> None:
        self.session.refresh(obj)

    def flush(self) -> None:
        self.session.flush()

    # ── Transactions ───────────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """
        All-or-nothing block.  Commits on success; rolls back and
        re-raises on error; rolls back quietly on Rollback.
        """
        try:
            yield self
        except Rollback:
            self.session.rollback()
            logger.info("Transaction rolled back on request")
        except Exception:
            self.session.rollback()
            raise
        else:
            self.session.commit()

    def savepoint(self) -> SessionTransaction:
        """Open a SAVEPOINT; caller must commit() or rollback() it."""
        return self.session.begin_nested()
