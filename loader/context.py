"""
loader.context - Everything a builder needs while one row is processed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from db.models import Product
from db.store import Store
from loader.errors import ParentSaveRequiredButFailed
from loader.report import LoadReport

if TYPE_CHECKING:
    from services.asset_service import AssetService

logger = logging.getLogger(__name__)


@dataclass
class RowContext:
    store: Store
    product: Product
    row_number: int
    report: LoadReport
    assets: "AssetService"

    def warn(self, kind: str, message: str) -> None:
        text = f"{kind}: {message}"
        logger.warning("Row %d %s", self.row_number, text)
        self.report.add_warning(self.row_number, text)

    def ensure_persisted(self, purpose: str) -> None:
        """Save the product if it has never been saved; children need its id."""
        if not self.store.save_if_new(self.product):
            raise ParentSaveRequiredButFailed(
                f"Cannot add {purpose} - save failed on parent product: "
                f"{'; '.join(self.product.full_messages())}"
            )
