"""
loader.images - Resolve where images go and hand the cell to the asset service.
"""

from __future__ import annotations

from typing import Union

import config
from db.models import Product, Variant
from loader.context import RowContext


def image_target(ctx: RowContext, on_master: bool) -> Union[Product, Variant]:
    """The product itself, or its master variant (created on demand)."""
    product = ctx.product
    if not on_master:
        return product
    master = product.master
    if master is None:
        ctx.ensure_persisted("master variant")
        master = product.add_variant(Variant(
            is_master=True,
            sku=product.sku or "",
            price=product.price,
            weight=product.weight,
            height=product.height,
            width=product.width,
            depth=product.depth,
        ))
    return master


def attach_images(ctx: RowContext, value: str) -> None:
    ctx.assets.attach_images(image_target(ctx, config.IMAGES_ON_MASTER), value)
