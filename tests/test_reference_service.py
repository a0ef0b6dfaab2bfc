from db.models import OptionValue, Taxon
from services import reference_service


def test_option_type_is_shared(store):
    first = reference_service.option_type(store, "print_type")
    assert first.presentation == "Print type"
    assert reference_service.option_type(store, "print_type").id == first.id


def test_option_value_keyed_by_type(store):
    mime = reference_service.option_type(store, "mime_type")
    other = reference_service.option_type(store, "format")

    jpeg = reference_service.option_value(store, mime, "jpeg")
    assert reference_service.option_value(store, mime, "jpeg").id == jpeg.id
    assert reference_service.option_value(store, other, "jpeg").id != jpeg.id
    assert len(store.find_all(OptionValue, name="jpeg")) == 2


def test_taxonomy_root_created_once(store):
    tax = reference_service.taxonomy(store, "Clothing")
    assert reference_service.taxonomy(store, "Clothing").id == tax.id
    assert store.find_all(Taxon, taxonomy_id=tax.id) == []

    root = reference_service.taxonomy_root(store, tax)
    assert root.name == "Clothing"
    assert root.parent_id is None
    assert reference_service.taxonomy_root(store, tax).id == root.id
    assert len(store.find_all(Taxon, taxonomy_id=tax.id)) == 1


def test_taxon_keyed_by_parent(store):
    tax = reference_service.taxonomy(store, "Clothing")
    root = reference_service.taxonomy_root(store, tax)
    shirts = reference_service.taxon(store, "Shirts", root, tax)
    sale = reference_service.taxon(store, "Sale", root, tax)
    sale_shirts = reference_service.taxon(store, "Shirts", sale, tax)

    assert reference_service.taxon(store, "Shirts", root, tax).id == shirts.id
    assert sale_shirts.id != shirts.id


def test_property_named(store):
    prop = reference_service.property_named(store, "material")
    assert reference_service.property_named(store, "material").id == prop.id
