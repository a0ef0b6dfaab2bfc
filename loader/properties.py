"""
loader.properties - Product properties with an optional free value.

    material:cotton|washable|care:Wash at 30:40 degrees

Property names are shared reference data; each entry adds a new
ProductProperty on the product.
"""

from __future__ import annotations

import logging

from db.models import ProductProperty
from loader.context import RowContext
from loader.delimiters import split_associations, split_name_value
from loader.errors import AssociationLookupFailed
from services import reference_service

logger = logging.getLogger(__name__)


def build_properties(ctx: RowContext, value: str) -> None:
    ctx.ensure_persisted("properties")
    product, store = ctx.product, ctx.store

    for entry in split_associations(value):
        name, prop_value = split_name_value(entry)
        if not name:
            raise AssociationLookupFailed(f"Cannot find property via {entry!r}")

        prop = reference_service.property_named(store, name)
        product.product_properties.append(ProductProperty(property=prop, value=prop_value))
        logger.debug("Added property %s=%r", name, prop_value)

    store.flush()
