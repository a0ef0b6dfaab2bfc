"""
api - JSON API for the catalog loader.

Endpoints (all under /api/v1):
    POST /import              load a product CSV, returns the LoadReport
    GET  /products            search / page loaded products
    GET  /products/<id>       one product with its variants, taxons, …
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

# Route modules attach themselves to api_bp on import
from api import routes_import     # noqa: F401, E402
from api import routes_products   # noqa: F401, E402
from api import errors            # noqa: F401, E402
