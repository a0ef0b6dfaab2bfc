"""
services.reference_service - Find-or-create for shared reference data.

Option types, option values, properties, taxonomies and taxons are
shared across products.  Every lookup goes through Store.find_or_create,
so repeating a lookup returns the same row instead of a duplicate.
Safe only under a single writer; the unique constraints in db.models
are the backstop if that ever changes.
"""

from __future__ import annotations

from db.models import OptionType, OptionValue, Property, Taxon, Taxonomy
from db.store import Store
from loader.delimiters import humanize


def option_type(store: Store, name: str) -> OptionType:
    return store.find_or_create(OptionType, name=name,
                                defaults={"presentation": humanize(name)})


def option_value(store: Store, otype: OptionType, name: str) -> OptionValue:
    """OptionValue keyed by (name, option type)."""
    return store.find_or_create(OptionValue, name=name, option_type_id=otype.id,
                                defaults={"presentation": humanize(name)})


def property_named(store: Store, name: str) -> Property:
    return store.find_or_create(Property, name=name,
                                defaults={"presentation": humanize(name)})


def taxonomy(store: Store, name: str) -> Taxonomy:
    return store.find_or_create(Taxonomy, name=name)


def taxonomy_root(store: Store, tax: Taxonomy) -> Taxon:
    """Top taxon of *tax*, named after it; created on first use."""
    return store.find_or_create(Taxon, name=tax.name, parent_id=None, taxonomy_id=tax.id)


def taxon(store: Store, name: str, parent: Taxon, tax: Taxonomy) -> Taxon:
    """Taxon keyed by (name, parent, taxonomy)."""
    return store.find_or_create(Taxon, name=name, parent_id=parent.id, taxonomy_id=tax.id)
