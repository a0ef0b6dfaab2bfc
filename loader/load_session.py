"""
loader.load_session - Top-level orchestrator.

Coordinates csv_parser → header_mapper → row_processor inside one
transaction and produces a LoadReport.  Header problems abort before
any row is touched; row problems are recorded and the load carries on.
"""

from __future__ import annotations

import logging
from typing import Optional

from db.engine import get_session
from db.models import Product
from db.store import Rollback, Store
from loader.csv_parser import Table, read_table
from loader.header_mapper import HeaderMapper
from loader.operators import OperatorCatalog
from loader.options import LoadOptions
from loader.report import LoadReport
from loader.row_processor import RowProcessor
from services.asset_service import AssetService

logger = logging.getLogger(__name__)


class LoadSession:

    def __init__(
        self,
        store: Store,
        catalog: Optional[OperatorCatalog] = None,
        options: Optional[LoadOptions] = None,
        assets: Optional[AssetService] = None,
    ):
        self.store = store
        self.catalog = catalog or OperatorCatalog()
        self.options = options or LoadOptions()
        self.assets = assets or AssetService()

    def perform(self, table: Table) -> LoadReport:
        """
        Load every row of *table*.

        With options.dummy every row is processed and saved, then the
        whole transaction is rolled back.
        """
        options = self.options
        bindings = HeaderMapper(self.catalog, Product).map(table.headers, options)

        report = LoadReport(dry_run=options.dummy)
        processor = RowProcessor(self.store, self.catalog, bindings, options,
                                 report, self.assets)

        logger.info("Processing %d rows", len(table.rows))
        with self.store.transaction():
            for row_number, row in enumerate(table.rows, start=2):   # row 1 = header
                processor.process(row_number, row)
            if options.dummy:
                logger.info("Loading stage complete - dummy run so rolling back")
                raise Rollback()

        logger.info("Load finished: %d processed, %d loaded, %d failed",
                    report.processed, report.loaded, report.failed)
        return report


def run_load(
    file_content: str | bytes,
    options: Optional[LoadOptions] = None,
    *,
    catalog: Optional[OperatorCatalog] = None,
    assets: Optional[AssetService] = None,
) -> LoadReport:
    """
    Load a CSV blob of products into the database.

    Parameters
    ----------
    file_content : raw CSV (bytes or str), first row = headers
    options      : LoadOptions (defaults to a plain create-only load)

    Returns
    -------
    LoadReport with per-row failure details

    Raises
    ------
    LoadError subclasses for file-level problems (empty file, missing
    mandatory column, unmappable column in strict mode …)
    """
    table = read_table(file_content)
    session = get_session()
    try:
        return LoadSession(Store(session), catalog, options, assets).perform(table)
    finally:
        session.close()
