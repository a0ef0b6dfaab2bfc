"""
services - Business-logic layer sitting between API/loader and DB.
"""

from services.product_service import ProductService   # noqa: F401
from services.asset_service import AssetService       # noqa: F401
from services import reference_service                # noqa: F401
