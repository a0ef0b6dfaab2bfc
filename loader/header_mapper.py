"""
loader.header_mapper - Header row → ordered column bindings.

The binding order is the file's column order, and it is also the order
in which cells are applied to the product.  Columns the product needs
for its own save (Name, SKU, Price …) must therefore come before
association columns in the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from db.models import Product
from loader.errors import MissingMandatoryColumn, UnmappableColumn
from loader.operators import OperatorCatalog, OperatorDescriptor, normalize
from loader.options import LoadOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnBinding:
    column_index: int
    header: str
    operator: OperatorDescriptor


class HeaderMapper:

    def __init__(self, catalog: OperatorCatalog, model: type = Product):
        self.catalog = catalog
        self.model = model

    def map(self, header_row: Sequence[str], options: LoadOptions) -> list[ColumnBinding]:
        """
        Bind every usable header to its operator.

        Raises MissingMandatoryColumn when a mandatory (or the match_by)
        header is absent, UnmappableColumn in strict mode when a
        non-mandatory header has no operator.
        """
        if options.reload:
            self.catalog.descriptors_for(self.model, reload=True)

        present = {normalize(h) for h in header_row}
        mandatory = list(options.mandatory)
        if options.match_by:
            mandatory.append(options.match_by)
        missing = [m for m in mandatory if normalize(m) not in present]
        if missing:
            raise MissingMandatoryColumn(missing)

        mandatory_keys = {normalize(m) for m in mandatory}
        forced = {normalize(h) for h in options.force_inclusion}

        bindings: list[ColumnBinding] = []
        unmapped: list[str] = []
        for idx, header in enumerate(header_row):
            if not (header or "").strip():
                continue
            operator = self.catalog.find(self.model, header)
            if operator is None:
                key = normalize(header)
                if options.include_all or key in forced:
                    operator = self.catalog.force(header)
                else:
                    if key not in mandatory_keys:
                        unmapped.append(header)
                    continue
            bindings.append(ColumnBinding(idx, header, operator))

        if unmapped:
            if options.strict:
                raise UnmappableColumn(unmapped)
            logger.warning("Ignoring column(s) with no operator: %s", ", ".join(unmapped))

        logger.info("Mapped %d of %d column(s): %s", len(bindings), len(header_row),
                    ", ".join(f"{b.header}→{b.operator.name}" for b in bindings))
        return bindings
