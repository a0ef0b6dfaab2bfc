"""
loader.variants - Option types and variants from compact cell notation.

Defining variants is a two stage affair: option types are attached to
the product first, then one variant is created per combination of
option values.  Supported syntax:

    '|'  separates variant specs
    ';'  separates the option types within one spec
    ':'  separates an option type from its values
    ','  separates the values of one option type

    mime_type:jpeg;print_type:black_white|mime_type:jpeg|mime_type:png,PDF;print_type:colour

A spec naming option types without values (e.g. 'size;colour') only
attaches the types.
"""

from __future__ import annotations

import logging

from db.models import OptionType, Variant
from loader.context import RowContext
from loader.delimiters import split_associations, split_facets, split_name_value, split_values
from services import reference_service

logger = logging.getLogger(__name__)


def expand_combinations(
    axes: dict[OptionType, list[str]],
) -> list[list[tuple[OptionType, str]]]:
    """
    One combination per value of the lead axis (the option type with the
    most values; ties keep facet order).  Every other axis contributes
    its value at the same position when it is as long as the lead axis,
    otherwise its first value only.
    """
    if not axes:
        return []
    ordered = sorted(axes.items(), key=lambda item: len(item[1]), reverse=True)
    (lead_type, lead_values), others = ordered[0], ordered[1:]

    combinations = []
    for pos, lead_value in enumerate(lead_values):
        combo = [(lead_type, lead_value)]
        for otype, values in others:
            # Shorter axes collapse to their first value
            combo.append((otype, values[pos] if len(values) == len(lead_values) else values[0]))
        combinations.append(combo)
    return combinations


def build_option_variants(ctx: RowContext, value: str) -> None:
    ctx.ensure_persisted("option types/variants")
    product, store = ctx.product, ctx.store

    for spec in split_associations(value):
        axes: dict[OptionType, list[str]] = {}

        for facet in split_facets(spec):
            oname, value_str = split_name_value(facet)
            if not oname:
                continue
            otype = reference_service.option_type(store, oname)

            # Option types must be on the product before variants use them
            if otype not in product.option_types:
                product.option_types.append(otype)

            values = split_values(value_str)
            if values:
                axes[otype] = values

        for combo in expand_combinations(axes):
            option_values = [reference_service.option_value(store, otype, name)
                             for otype, name in combo]
            seq = len(product.variants) + 1
            variant = product.add_variant(Variant(
                sku=f"{product.sku or ''}_{seq}",
                price=product.price,
                weight=product.weight,
                height=product.height,
                width=product.width,
                depth=product.depth,
            ))
            variant.option_values.extend(option_values)
            logger.info("Created variant %s from option values %s",
                        variant.sku, [ov.name for ov in option_values])

        store.flush()
