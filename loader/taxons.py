"""
loader.taxons - Category chains.

    Clothing>Shirts>Casual|Brands>Acme

Each chain starts with a taxonomy name; the remaining names are walked
(and created where missing) below its root.  Only the deepest taxon of
each chain is attached to the product.
"""

from __future__ import annotations

import logging

from loader.context import RowContext
from loader.delimiters import split_associations, split_chain
from loader.errors import AssociationLookupFailed
from services import reference_service

logger = logging.getLogger(__name__)


def build_taxons(ctx: RowContext, value: str) -> None:
    ctx.ensure_persisted("taxons")
    product, store = ctx.product, ctx.store

    for chain in split_associations(value):
        names = split_chain(chain)
        if not names:
            raise AssociationLookupFailed(f"Empty taxon chain in {value!r}")

        taxonomy = reference_service.taxonomy(store, names[0])
        node = reference_service.taxonomy_root(store, taxonomy)
        for name in names[1:]:
            node = reference_service.taxon(store, name, node, taxonomy)

        if node not in product.taxons:
            product.taxons.append(node)
            logger.debug("Product assigned to taxon %s", node.pretty_name())

    store.flush()
