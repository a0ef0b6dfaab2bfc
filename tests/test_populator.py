from datetime import datetime
from decimal import Decimal

import pytest

from db.models import Product, ShippingCategory, Storefront
from loader.errors import AssociationLookupFailed, UnresolvedOperator
from loader.operators import OperatorCatalog, OperatorDescriptor, OperatorKind
from loader.populator import assign, coerce


def _op(catalog, header):
    return catalog.find(Product, header)


class TestCoerce:

    def test_types(self, catalog):
        assert coerce(_op(catalog, "Price"), " 19.99 ") == Decimal("19.99")
        assert coerce(_op(catalog, "Count On Hand"), "7") == 7
        assert coerce(_op(catalog, "Count On Hand"), "7.0") == 7
        assert coerce(_op(catalog, "Weight"), "0.25") == 0.25
        assert coerce(_op(catalog, "Available On"), "2024-03-01") == datetime(2024, 3, 1)
        assert coerce(_op(catalog, "Name"), " Tee ") == "Tee"

    def test_bool(self):
        op = OperatorDescriptor("active", OperatorKind.ATTRIBUTE, python_type=bool)
        assert coerce(op, "Yes") is True
        assert coerce(op, "0") is False
        with pytest.raises(ValueError):
            coerce(op, "maybe")

    def test_invalid_value(self, catalog):
        with pytest.raises(ValueError, match="Invalid Decimal value 'abc' for price"):
            coerce(_op(catalog, "Price"), "abc")


def test_attribute_assignment(catalog, make_ctx):
    product = Product()
    assign(make_ctx(product), _op(catalog, "Name"), "Tee")
    assign(make_ctx(product), _op(catalog, "Price"), "10.50")
    assert product.name == "Tee"
    assert product.price == Decimal("10.50")


class TestToOne:

    @pytest.fixture(autouse=True)
    def categories(self, store):
        store.find_or_create(ShippingCategory, name="Default")
        store.find_or_create(ShippingCategory, name="Oversize")

    def test_bare_value_uses_name(self, catalog, make_ctx):
        product = Product(name="Tee")
        assign(make_ctx(product), _op(catalog, "Shipping Category"), "Oversize")
        assert product.shipping_category.name == "Oversize"

    def test_explicit_lookup_column(self, catalog, make_ctx):
        product = Product(name="Tee")
        assign(make_ctx(product), _op(catalog, "Shipping Category"), "name:Default")
        assert product.shipping_category.name == "Default"

    def test_not_found(self, catalog, make_ctx):
        with pytest.raises(AssociationLookupFailed):
            assign(make_ctx(Product(name="Tee")), _op(catalog, "Shipping Category"), "Freight")


class TestToMany:

    @pytest.fixture(autouse=True)
    def storefronts(self, store):
        store.find_or_create(Storefront, name="US Shop", code="us")
        store.find_or_create(Storefront, name="EU Shop", code="eu")

    def test_all_found(self, catalog, make_ctx, product):
        ctx = make_ctx(product)
        assign(ctx, _op(catalog, "Stores"), "code:us,eu")
        assert [s.code for s in product.stores] == ["us", "eu"]
        assert ctx.report.warnings == []

    def test_several_lookups_and_no_duplicates(self, catalog, make_ctx, product):
        assign(make_ctx(product), _op(catalog, "Stores"), "code:us|name:US Shop,EU Shop")
        assert [s.code for s in product.stores] == ["us", "eu"]

    def test_partial_lookup_warns(self, catalog, make_ctx, product):
        ctx = make_ctx(product)
        assign(ctx, _op(catalog, "Stores"), "code:us,xx")

        assert [s.code for s in product.stores] == ["us"]
        assert "xx" in product.errors["stores"][0]
        assert len(ctx.report.warnings) == 1
        assert ctx.report.warnings[0]["message"].startswith("AssociationLookupPartial")

    def test_partial_lookup_across_instances(self, catalog, make_ctx, product):
        ctx = make_ctx(product)
        assign(ctx, _op(catalog, "Stores"), "code:us|code:zz")

        assert [s.code for s in product.stores] == ["us"]
        assert product.errors["stores"] == ["Storefront not found for code=zz"]
        assert ctx.report.warnings[0]["message"].startswith("AssociationLookupPartial")

    def test_nothing_found_across_instances_fails(self, catalog, make_ctx, product):
        with pytest.raises(AssociationLookupFailed, match="code=zz, name=Nowhere"):
            assign(make_ctx(product), _op(catalog, "Stores"), "code:zz|name:Nowhere")

    def test_nothing_found_fails(self, catalog, make_ctx, product):
        with pytest.raises(AssociationLookupFailed):
            assign(make_ctx(product), _op(catalog, "Stores"), "code:xx,yy")

    def test_unknown_lookup_column_falls_back_to_name(self, catalog, make_ctx, product):
        with pytest.raises(AssociationLookupFailed, match="name"):
            assign(make_ctx(product), _op(catalog, "Stores"), "colour:us")


def test_forced_column_goes_to_extra(make_ctx):
    product = Product(name="Tee")
    assign(make_ctx(product), OperatorCatalog.force("Brand"), " Acme ")
    assert product.get_extra() == {"brand": "Acme"}


def test_unforced_pseudo_has_no_default_assignment(catalog, make_ctx):
    with pytest.raises(UnresolvedOperator):
        assign(make_ctx(Product(name="Tee")), _op(catalog, "Variant Price"), "1")
