from datetime import datetime
from decimal import Decimal

import pytest

from db.models import Product, ShippingCategory, Storefront, Taxon
from loader.operators import OperatorCatalog, OperatorKind, normalize


@pytest.mark.parametrize("header, expected", [
    ("Variant Price", "variant_price"),
    ("variant-price", "variant_price"),
    ("  VARIANT_PRICE ", "variant_price"),
    ("Count On Hand", "count_on_hand"),
    ("", ""),
])
def test_normalize(header, expected):
    assert normalize(header) == expected


class TestFind:

    def test_attribute_carries_python_type(self, catalog):
        name = catalog.find(Product, "Name")
        assert name.kind is OperatorKind.ATTRIBUTE
        assert name.python_type is str
        assert catalog.find(Product, "Price").python_type is Decimal
        assert catalog.find(Product, "Count On Hand").python_type is int
        assert catalog.find(Product, "Available On").python_type is datetime

    def test_to_one(self, catalog):
        op = catalog.find(Product, "Shipping Category")
        assert op.kind is OperatorKind.TO_ONE
        assert op.target_type is ShippingCategory
        assert op.find_by_default == "name"

    def test_to_many(self, catalog):
        op = catalog.find(Product, "Taxons")
        assert op.kind is OperatorKind.TO_MANY
        assert op.target_type is Taxon
        assert catalog.find(Product, "Stores").target_type is Storefront

    def test_singular_and_plural_forms(self, catalog):
        assert catalog.find(Product, "Taxon").name == "taxons"
        assert catalog.find(Product, "Option Type").name == "option_types"
        assert catalog.find(Product, "Variant").name == "variants"

    def test_aliases(self, catalog):
        assert catalog.find(Product, "Properties").name == "product_properties"
        assert catalog.find(Product, "Categories").name == "taxons"
        assert catalog.find(Product, "Title").name == "name"
        assert catalog.find(Product, "Stock").name == "count_on_hand"

    def test_pseudo_operators(self, catalog):
        for header in ("Variant Price", "Variant SKU", "On Hand", "Variants"):
            assert catalog.find(Product, header).kind is OperatorKind.PSEUDO

    def test_excluded_and_unknown_return_none(self, catalog):
        assert catalog.find(Product, "id") is None
        assert catalog.find(Product, "Extra JSON") is None
        assert catalog.find(Product, "Variants Including Master") is None
        assert catalog.find(Product, "Brand") is None


def test_descriptors_are_cached_until_reload(catalog):
    first = catalog.descriptors_for(Product)
    assert catalog.descriptors_for(Product) is first
    rebuilt = catalog.descriptors_for(Product, reload=True)
    assert rebuilt is not first
    assert rebuilt == first


def test_force_builds_forced_pseudo_descriptor():
    op = OperatorCatalog.force("Brand Name")
    assert op.name == "brand_name"
    assert op.kind is OperatorKind.PSEUDO
    assert op.forced


def test_custom_pseudo_operators():
    catalog = OperatorCatalog(pseudo_operators={})
    assert catalog.find(Product, "Variant Price") is None
