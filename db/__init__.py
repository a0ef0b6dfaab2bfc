"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Store           → persistence collaborator used by the loader
    Product, …      → ORM models
"""

from db.engine import init_db, get_session          # noqa: F401
from db.store import Store, Rollback                # noqa: F401
from db.models import (                             # noqa: F401
    Base,
    Image,
    OptionType,
    OptionValue,
    Product,
    ProductProperty,
    Property,
    ShippingCategory,
    Storefront,
    Taxon,
    Taxonomy,
    Variant,
)
