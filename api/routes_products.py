"""
api.routes_products - /api/v1/products read endpoints.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.product_service import ProductService
import config


@api_bp.route("/products")
def list_products():
    """
    GET /api/v1/products?q=&sort=id&order=asc&limit=100&offset=0

    Search / list products by name or SKU.
    """
    q          = request.args.get("q", "").strip()
    sort_by    = request.args.get("sort", "id").strip()
    sort_order = request.args.get("order", "asc").strip()
    limit  = min(request.args.get("limit", config.API_DEFAULT_LIMIT, type=int),
                 config.API_MAX_LIMIT)
    offset = request.args.get("offset", 0, type=int)

    session = get_session()
    try:
        products, total = ProductService.search(
            session, q=q, sort_by=sort_by, sort_order=sort_order,
            limit=limit, offset=offset,
        )
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "products": [p.to_dict() for p in products],
        })
    finally:
        session.close()


@api_bp.route("/products/<int:product_id>")
def get_product(product_id: int):
    """GET /api/v1/products/{id}"""
    session = get_session()
    try:
        product = ProductService.get(session, product_id)
        if not product:
            return jsonify({"error": "not found"}), 404
        return jsonify(product.to_dict())
    finally:
        session.close()
