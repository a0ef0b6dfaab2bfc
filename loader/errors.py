"""
loader.errors - Exception hierarchy for the product loader.

File-scoped errors (LoadError subclasses other than RowError) abort the
whole load and reach the caller.  RowError subclasses are caught at the
row boundary and recorded in the LoadReport.
"""

from db.store import Rollback  # noqa: F401  (re-exported: dry-run signal)


class LoadError(Exception):
    """Base class for everything the loader raises on purpose."""


# ── File-scoped ───────────────────────────────────────────────────────

class EmptyFileError(LoadError):
    """The input has no header row."""


class MissingMandatoryColumn(LoadError):
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Mandatory column(s) missing from file: {', '.join(self.missing)}")


class UnmappableColumn(LoadError):
    def __init__(self, headers: list[str]):
        self.headers = list(headers)
        super().__init__(f"No operator found for column(s): {', '.join(self.headers)}")


class UnresolvedOperator(LoadError):
    """A value was presented for processing with no operator to assign it to."""


# ── Row-scoped ────────────────────────────────────────────────────────

class RowError(LoadError):
    """Raised when a row cannot be loaded."""


class AssociationLookupFailed(RowError):
    pass


class SaveValidationFailed(RowError):
    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(f"Save failed: {'; '.join(self.messages) or 'unknown reason'}")


class ParentSaveRequiredButFailed(RowError):
    pass


# ── Warning kinds (recorded, never raised) ────────────────────────────

ASSOCIATION_LOOKUP_PARTIAL = "AssociationLookupPartial"
VARIANT_FIELD_COUNT_MISMATCH = "VariantFieldCountMismatch"
