import pytest

from db.models import Taxon, Taxonomy
from loader.errors import AssociationLookupFailed
from loader.taxons import build_taxons


def test_chain_attaches_deepest_taxon(store, make_ctx, product):
    build_taxons(make_ctx(product), "Clothing>Shirts>Casual")

    assert [t.pretty_name() for t in product.taxons] == ["Clothing > Shirts > Casual"]
    tax = store.find_first(Taxonomy, name="Clothing")
    assert [t.name for t in store.find_all(Taxon, taxonomy_id=tax.id)] == [
        "Clothing", "Shirts", "Casual",
    ]


def test_repeat_is_idempotent(store, make_ctx, product):
    ctx = make_ctx(product)
    build_taxons(ctx, "Clothing>Shirts>Casual")
    build_taxons(ctx, "Clothing > Shirts > Casual")

    assert len(product.taxons) == 1
    assert len(store.find_all(Taxon)) == 3


def test_several_chains(store, make_ctx, product):
    build_taxons(make_ctx(product), "Clothing>Shirts|Brands")
    assert [t.pretty_name() for t in product.taxons] == ["Clothing > Shirts", "Brands"]


def test_chains_share_nodes_across_products(store, make_ctx, product):
    from db.models import Product
    other = Product(name="Polo", sku="POLO")
    store.save(other)

    build_taxons(make_ctx(product), "Clothing>Shirts")
    build_taxons(make_ctx(other), "Clothing>Shirts>Polo")

    assert other.taxons[0].parent_id == product.taxons[0].id


def test_empty_chain_fails(make_ctx, product):
    with pytest.raises(AssociationLookupFailed):
        build_taxons(make_ctx(product), ">|Brands")
