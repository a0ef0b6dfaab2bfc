"""
loader.variant_fields - Spread one column across existing variants.

    variant_price  : 9.99|12.99|15.99
    variant_sku    : TEE-S|TEE-M|TEE-L
    count_on_hand  : 10|4|0        (also 'on_hand')

Values are matched to the product's variants by position, so the column
must follow the one that created the variants and carry exactly one
value per variant.  On a count mismatch nothing is assigned.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from loader.context import RowContext
from loader.delimiters import split_associations
from loader.errors import VARIANT_FIELD_COUNT_MISMATCH

logger = logging.getLogger(__name__)


def _to_price(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid price {text!r}") from None


def _to_stock(text: str) -> int:
    try:
        return int(Decimal(text))
    except InvalidOperation:
        raise ValueError(f"Invalid stock level {text!r}") from None


# operator → (Variant attribute, converter)
VARIANT_FIELDS = {
    "variant_price": ("price", _to_price),
    "variant_sku":   ("sku", str),
    "count_on_hand": ("count_on_hand", _to_stock),
    "on_hand":       ("count_on_hand", _to_stock),
}

STOCK_OPERATORS = frozenset({"count_on_hand", "on_hand"})


def broadcast_variant_field(ctx: RowContext, operator: str, value: str) -> None:
    attr, convert = VARIANT_FIELDS[operator]
    values = split_associations(value)
    if not values:
        return

    if operator in STOCK_OPERATORS:
        ctx.ensure_persisted("stock levels")

    variants = ctx.product.variants
    if variants:
        if len(values) != len(variants):
            ctx.warn(VARIANT_FIELD_COUNT_MISMATCH,
                     f"{len(values)} {operator} entries {value!r} did not match "
                     f"{len(variants)} variants - none set")
            return
        for variant, raw in zip(variants, values):
            setattr(variant, attr, convert(raw))
        ctx.store.flush()
        return

    if operator in STOCK_OPERATORS:
        if len(values) > 1:
            ctx.warn(VARIANT_FIELD_COUNT_MISMATCH,
                     f"multiple {operator} values {value!r} but no variants - "
                     f"using the first for the product")
        ctx.product.count_on_hand = convert(values[0])
        return

    logger.info("Row %d: product has no variants, %s ignored", ctx.row_number, operator)
