"""
loader.row_processor - Apply one CSV row to a Product.

Per row:  START → RESOLVED → DEFAULTS_APPLIED → FIELDS_APPLIED
          → SAVED | FAILED → RESET

Each row runs inside its own SAVEPOINT.  Any exception while fields
are applied, or a failed save, rolls that savepoint back and records
the row as failed; the next row starts from a clean handle.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional, Sequence

from db.models import Product
from db.store import Store
from loader import images, populator, properties, taxons, variant_fields, variants
from loader.context import RowContext
from loader.errors import RowError, SaveValidationFailed, UnresolvedOperator
from loader.header_mapper import ColumnBinding
from loader.operators import OperatorCatalog, OperatorDescriptor, OperatorKind, normalize
from loader.options import LoadOptions
from loader.report import LoadReport
from services.asset_service import AssetService

logger = logging.getLogger(__name__)


class RowState(enum.Enum):
    START = "start"
    RESOLVED = "resolved"
    DEFAULTS_APPLIED = "defaults_applied"
    FIELDS_APPLIED = "fields_applied"
    SAVED = "saved"
    FAILED = "failed"
    RESET = "reset"


def _broadcast(operator: str) -> Callable[[RowContext, str], None]:
    return lambda ctx, value: variant_fields.broadcast_variant_field(ctx, operator, value)


# Operator name → specialised handler; everything else goes to the populator
SPECIAL_HANDLERS: dict[str, Callable[[RowContext, str], None]] = {
    "variants":           variants.build_option_variants,
    "option_types":       variants.build_option_variants,
    "taxons":             taxons.build_taxons,
    "product_properties": properties.build_properties,
    "images":             images.attach_images,
    "variant_price":      _broadcast("variant_price"),
    "variant_sku":        _broadcast("variant_sku"),
    "count_on_hand":      _broadcast("count_on_hand"),
    "on_hand":            _broadcast("on_hand"),
}


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) and row[index] is not None else ""


class RowProcessor:

    def __init__(
        self,
        store: Store,
        catalog: OperatorCatalog,
        bindings: list[ColumnBinding],
        options: LoadOptions,
        report: LoadReport,
        assets: Optional[AssetService] = None,
    ):
        self.store = store
        self.catalog = catalog
        self.bindings = bindings
        self.options = options
        self.report = report
        self.assets = assets or AssetService()

        self.load_object: Optional[Product] = None
        self.state = RowState.START

        self._match_index, self._match_operator = self._resolve_match_by(options.match_by)
        self._defaults = self._resolve_defaults(options.defaults)
        self._trace = logger.info if options.verbose else logger.debug

    # ── Public API ─────────────────────────────────────────────────────

    def process(self, row_number: int, row: Sequence[str]) -> bool:
        """Load one row.  Returns True when the product was saved."""
        self.report.processed += 1
        self.state = RowState.START
        savepoint = self.store.savepoint()
        try:
            return self._process(row_number, row, savepoint)
        finally:
            # Keep going with this handle and the next create becomes an update
            self.load_object = None
            self.state = RowState.RESET

    def process_value(self, ctx: RowContext, operator: Optional[OperatorDescriptor], value: str) -> None:
        """Dispatch one non-blank value to its handler."""
        if operator is None:
            raise UnresolvedOperator(f"Cannot process {value!r}: no operator to assign it to")
        self._trace("Row %d processing %s: [%s]", ctx.row_number, operator.name, value)
        handler = None if operator.forced else SPECIAL_HANDLERS.get(operator.name)
        if handler is not None:
            handler(ctx, value)
        else:
            populator.assign(ctx, operator, value)

    # ── Private helpers ────────────────────────────────────────────────

    def _process(self, row_number: int, row: Sequence[str], savepoint) -> bool:
        try:
            product = self._resolve(row)
            self.load_object = product
            self.state = RowState.RESOLVED
            action = "Updating" if self.store.is_persisted(product) else "Creating"
            logger.info("%s row %d", action, row_number)

            ctx = RowContext(self.store, product, row_number, self.report, self.assets)
            self._apply_defaults(ctx, row)
            self.state = RowState.DEFAULTS_APPLIED

            for binding in self.bindings:
                value = _cell(row, binding.column_index).strip()
                if value:
                    self.process_value(ctx, binding.operator, value)
            self.state = RowState.FIELDS_APPLIED
        except RowError as exc:
            return self._fail(savepoint, row_number, row, str(exc))
        except Exception as exc:
            return self._fail(savepoint, row_number, row, f"Unexpected: {exc}")

        try:
            saved = self.store.save(product)
        except Exception as exc:
            return self._fail(savepoint, row_number, row, f"Unexpected: {exc}")
        if not saved:
            return self._fail(savepoint, row_number, row,
                              str(SaveValidationFailed(product.full_messages())))

        savepoint.commit()
        self.state = RowState.SAVED
        self.report.add_loaded(product.id)
        logger.info("Row %d successfully saved: id %s", row_number, product.id)
        return True

    def _fail(self, savepoint, row_number: int, row: Sequence[str], error: str) -> bool:
        savepoint.rollback()
        self.state = RowState.FAILED
        self.report.add_failure(row_number, list(row), error)
        logger.error("Failed to process row %d (%s): %s", row_number, list(row), error)
        return False

    def _resolve(self, row: Sequence[str]) -> Product:
        """Existing product by the match_by column, else a fresh one."""
        if self._match_index is None:
            return Product()
        key = _cell(row, self._match_index).strip()
        if not key:
            return Product()
        existing = self.store.find_first(Product, **{self._match_operator.name: key})
        return existing if existing is not None else Product()

    def _apply_defaults(self, ctx: RowContext, row: Sequence[str]) -> None:
        """Default values for columns missing from the file or blank in this row."""
        for operator, value in self._defaults:
            indexes = [b.column_index for b in self.bindings if b.operator == operator]
            if any(_cell(row, i).strip() for i in indexes):
                continue
            self.process_value(ctx, operator, value)

    def _resolve_match_by(self, header: Optional[str]):
        """Column index and attribute operator of the match_by column."""
        if not header:
            return None, None
        operator = self.catalog.find(Product, header)
        index = self._find_index(header)
        if operator is None or operator.kind is not OperatorKind.ATTRIBUTE or index is None:
            raise UnresolvedOperator(f"match_by column {header!r} is not a product attribute")
        return index, operator

    def _find_index(self, header: str) -> Optional[int]:
        key = normalize(header)
        for binding in self.bindings:
            if normalize(binding.header) == key:
                return binding.column_index
        return None

    def _resolve_defaults(self, defaults: dict[str, str]) -> list[tuple[OperatorDescriptor, str]]:
        resolved = []
        for header, value in defaults.items():
            operator = self.catalog.find(Product, header)
            if operator is None:
                raise UnresolvedOperator(f"Default value given for unknown column {header!r}")
            resolved.append((operator, value))
        return resolved

