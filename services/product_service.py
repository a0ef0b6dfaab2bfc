"""
services.product_service - Read access to loaded products.

All session management is the caller's responsibility (open before,
close after).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from db.models import Product


class ProductService:

    SORTABLE_COLUMNS = {"id", "name", "sku", "price", "created_at"}

    @staticmethod
    def get(session: Session, product_id: int) -> Optional[Product]:
        return session.get(Product, product_id)

    @staticmethod
    def search(
        session: Session,
        *,
        q: str = "",
        sort_by: str = "id",
        sort_order: str = "asc",
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """Case-insensitive match on name / SKU; returns (page, total)."""
        query = session.query(Product)
        if q:
            like = f"%{q}%"
            query = query.filter(or_(Product.name.ilike(like), Product.sku.ilike(like)))

        total = query.count()

        column = getattr(Product, sort_by if sort_by in ProductService.SORTABLE_COLUMNS else "id")
        query = query.order_by(column.desc() if sort_order == "desc" else column.asc())
        return query.offset(offset).limit(limit).all(), total
