"""
db.models - SQLAlchemy ORM declarations.

Tables
------
products            - the root record built by each import row.
variants            - per-product variants; one optional master variant
                      carries product-level images when configured.
option_types /
option_values       - shared reference data used to compose variants.
taxonomies / taxons - category forest; products reference leaf taxons.
properties /
product_properties  - free key/value pairs owned by a product.
images              - attachments on a product or a variant.
stores /
shipping_categories - reference data looked up (never created) by import.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Integer, Numeric, String,
    Table, Text, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _now():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ValidationMixin:
    """
    Transient error bag + validate() hook.

    ``errors`` is never persisted; it collects validation messages and
    field-level import warnings for the lifetime of the Python object.
    """

    @property
    def errors(self) -> dict[str, list[str]]:
        bag = self.__dict__.get("_errors")
        if bag is None:
            bag = {}
            self.__dict__["_errors"] = bag
        return bag

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def validate(self) -> dict[str, list[str]]:
        """Return blocking problems keyed by field (empty = valid)."""
        return {}

    def full_messages(self) -> list[str]:
        return [f"{field} {msg}" for field, msgs in self.errors.items() for msg in msgs]


# ── Association tables ────────────────────────────────────────────────

product_option_types = Table(
    "product_option_types", Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("option_type_id", ForeignKey("option_types.id", ondelete="CASCADE"), primary_key=True),
)

variant_option_values = Table(
    "variant_option_values", Base.metadata,
    Column("variant_id", ForeignKey("variants.id", ondelete="CASCADE"), primary_key=True),
    Column("option_value_id", ForeignKey("option_values.id", ondelete="CASCADE"), primary_key=True),
)

products_taxons = Table(
    "products_taxons", Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("taxon_id", ForeignKey("taxons.id", ondelete="CASCADE"), primary_key=True),
)

products_stores = Table(
    "products_stores", Base.metadata,
    Column("product_id", ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("store_id", ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True),
)


# ── Root object ───────────────────────────────────────────────────────

class Product(ValidationMixin, Base):
    __tablename__ = "products"

    # Never mapped from a file column
    __operator_exclude__ = frozenset({
        "id", "created_at", "updated_at", "extra_json", "variants_including_master",
    })

    id = Column(Integer, primary_key=True, autoincrement=True)

    # ── Direct columns ─────────────────────────────────────────────────
    name          = Column(String(255), nullable=False, index=True)
    description   = Column(Text, default="")
    sku           = Column(String(100), index=True, default="")
    price         = Column(Numeric(10, 2))
    cost_price    = Column(Numeric(10, 2))
    weight        = Column(Float)
    height        = Column(Float)
    width         = Column(Float)
    depth         = Column(Float)
    count_on_hand = Column(Integer, default=0)
    available_on  = Column(DateTime)
    meta_keywords = Column(String(255), default="")

    # ── Force-included columns with no schema field ────────────────────
    extra_json = Column(Text, default="{}")

    shipping_category_id = Column(Integer, ForeignKey("shipping_categories.id"))

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    # ── Associations ───────────────────────────────────────────────────
    option_types = relationship("OptionType", secondary=product_option_types,
                                order_by="OptionType.id")
    variants_including_master = relationship(
        "Variant", back_populates="product",
        cascade="all, delete-orphan", order_by="Variant.id",
    )
    taxons = relationship("Taxon", secondary=products_taxons, order_by="Taxon.id")
    product_properties = relationship(
        "ProductProperty", back_populates="product",
        cascade="all, delete-orphan", order_by="ProductProperty.id",
    )
    images = relationship("Image", back_populates="product",
                          cascade="all, delete-orphan", order_by="Image.id")
    stores = relationship("Storefront", secondary=products_stores, order_by="Storefront.id")
    shipping_category = relationship("ShippingCategory")

    # ── Variant views ──────────────────────────────────────────────────
    @property
    def variants(self) -> list["Variant"]:
        return [v for v in self.variants_including_master if not v.is_master]

    @property
    def master(self) -> "Variant | None":
        for v in self.variants_including_master:
            if v.is_master:
                return v
        return None

    def add_variant(self, variant: "Variant") -> "Variant":
        self.variants_including_master.append(variant)
        return variant

    # ── Extra (unmapped) values ────────────────────────────────────────
    def get_extra(self) -> dict:
        try:
            return json.loads(self.extra_json or "{}")
        except ValueError:
            return {}

    def set_extra(self, key: str, value: str) -> None:
        extra = self.get_extra()
        extra[key] = value
        self.extra_json = json.dumps(extra, ensure_ascii=False)

    # ── Validation ─────────────────────────────────────────────────────
    def validate(self) -> dict[str, list[str]]:
        problems: dict[str, list[str]] = {}
        if not (self.name or "").strip():
            problems.setdefault("name", []).append("can't be blank")
        for attr in ("price", "cost_price"):
            val = getattr(self, attr)
            if val is not None and Decimal(str(val)) < 0:
                problems.setdefault(attr, []).append("must be greater than or equal to 0")
        for idx, variant in enumerate(self.variants_including_master):
            for attr, messages in variant.validate().items():
                problems.setdefault(f"variants[{idx}].{attr}", []).extend(messages)
        return problems

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name or "",
            "description": self.description or "",
            "sku": self.sku or "",
            "price": str(self.price) if self.price is not None else None,
            "cost_price": str(self.cost_price) if self.cost_price is not None else None,
            "weight": self.weight,
            "height": self.height,
            "width": self.width,
            "depth": self.depth,
            "count_on_hand": self.count_on_hand,
            "available_on": self.available_on.isoformat() if self.available_on else None,
            "meta_keywords": self.meta_keywords or "",
            "shipping_category": self.shipping_category.name if self.shipping_category else None,
            "option_types": [ot.name for ot in self.option_types],
            "variants": [v.to_dict() for v in self.variants],
            "taxons": [t.pretty_name() for t in self.taxons],
            "properties": {pp.property.name: pp.value for pp in self.product_properties},
            "images": [i.attachment for i in self.images],
            "stores": [s.code for s in self.stores],
            "extra": self.get_extra(),
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }


class Variant(ValidationMixin, Base):
    __tablename__ = "variants"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    product_id    = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"),
                           nullable=False, index=True)
    sku           = Column(String(100), index=True, default="")
    price         = Column(Numeric(10, 2))
    weight        = Column(Float)
    height        = Column(Float)
    width         = Column(Float)
    depth         = Column(Float)
    count_on_hand = Column(Integer, default=0)
    is_master     = Column(Boolean, nullable=False, default=False)

    product = relationship("Product", back_populates="variants_including_master")
    option_values = relationship("OptionValue", secondary=variant_option_values,
                                 order_by="OptionValue.id")
    images = relationship("Image", back_populates="variant",
                          cascade="all, delete-orphan", order_by="Image.id")

    def validate(self) -> dict[str, list[str]]:
        if self.price is not None and Decimal(str(self.price)) < 0:
            return {"price": ["must be greater than or equal to 0"]}
        return {}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku or "",
            "price": str(self.price) if self.price is not None else None,
            "count_on_hand": self.count_on_hand,
            "option_values": [
                f"{ov.option_type.name}:{ov.name}" for ov in self.option_values
            ],
        }


# ── Option reference data ─────────────────────────────────────────────

class OptionType(Base):
    __tablename__ = "option_types"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    name         = Column(String(100), unique=True, nullable=False)
    presentation = Column(String(100), default="")

    option_values = relationship("OptionValue", back_populates="option_type",
                                 order_by="OptionValue.id")


class OptionValue(Base):
    __tablename__ = "option_values"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    name           = Column(String(100), nullable=False)
    presentation   = Column(String(100), default="")
    option_type_id = Column(Integer, ForeignKey("option_types.id"), nullable=False)

    option_type = relationship("OptionType", back_populates="option_values")

    __table_args__ = (
        UniqueConstraint("name", "option_type_id", name="uq_option_value_name_type"),
    )


# ── Taxonomy forest ───────────────────────────────────────────────────

class Taxonomy(Base):
    __tablename__ = "taxonomies"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    taxons = relationship("Taxon", back_populates="taxonomy", order_by="Taxon.id")


class Taxon(Base):
    __tablename__ = "taxons"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    name        = Column(String(255), nullable=False)
    parent_id   = Column(Integer, ForeignKey("taxons.id"))
    taxonomy_id = Column(Integer, ForeignKey("taxonomies.id"), nullable=False)

    taxonomy = relationship("Taxonomy", back_populates="taxons")
    parent   = relationship("Taxon", remote_side=[id], back_populates="children")
    children = relationship("Taxon", back_populates="parent", order_by="Taxon.id")

    __table_args__ = (
        UniqueConstraint("name", "parent_id", "taxonomy_id", name="uq_taxon_name_parent"),
    )

    def pretty_name(self) -> str:
        """'Clothing > Shirts > Casual' style path."""
        names = []
        node = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return " > ".join(reversed(names))


# ── Properties ────────────────────────────────────────────────────────

class Property(Base):
    __tablename__ = "properties"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    name         = Column(String(255), unique=True, nullable=False)
    presentation = Column(String(255), default="")


class ProductProperty(Base):
    __tablename__ = "product_properties"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    product_id  = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"),
                         nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    value       = Column(Text)

    product  = relationship("Product", back_populates="product_properties")
    property = relationship("Property")


# ── Images ────────────────────────────────────────────────────────────

class Image(Base):
    __tablename__ = "images"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    attachment = Column(String(500), nullable=False)
    alt        = Column(String(255), default="")
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True)
    variant_id = Column(Integer, ForeignKey("variants.id", ondelete="CASCADE"), index=True)

    product = relationship("Product", back_populates="images")
    variant = relationship("Variant", back_populates="images")


# ── Lookup-only reference data ────────────────────────────────────────

class Storefront(Base):
    __tablename__ = "stores"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    code = Column(String(50), unique=True, nullable=False)


class ShippingCategory(Base):
    __tablename__ = "shipping_categories"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
