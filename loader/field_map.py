"""
loader.field_map - Static header vocabulary.

Normalised header → canonical operator name, for headers that differ
from the model's own attribute names.  Everything not listed here is
resolved by introspecting the model (see loader.operators).
"""

HEADER_ALIASES: dict[str, str] = {
    "title":            "name",
    "product_name":     "name",
    "master_price":     "price",
    "cost":             "cost_price",
    "stock":            "count_on_hand",
    "quantity":         "count_on_hand",
    "qty":              "count_on_hand",
    "properties":       "product_properties",
    "categories":       "taxons",
    "category":         "taxons",
    "options":          "variants",
    "image":            "images",
    "variant_skus":     "variant_sku",
    "variant_prices":   "variant_price",
    "variant_stock":    "on_hand",
}

# Operators with no direct schema field on Product; handled by the
# specialised builders.  Prices, SKUs and stock of individual variants
# live on the Variant rows.
PSEUDO_OPERATORS = frozenset({
    "variants",
    "variant_price",
    "variant_sku",
    "on_hand",
})
