"""
CATLOAD - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR      = Path(__file__).resolve().parent
CSV_SEED_PATH = Path(os.environ.get("CATLOAD_CSV_SEED", BASE_DIR / "products_seed.csv"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("CATLOAD_DB", f"sqlite:///{BASE_DIR / 'catload.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("CATLOAD_HOST", "0.0.0.0")
PORT   = int(os.environ.get("CATLOAD_PORT", "5000"))
DEBUG  = os.environ.get("CATLOAD_DEBUG", "0") == "1"
SECRET = os.environ.get("CATLOAD_SECRET", "catload-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL  = os.environ.get("CATLOAD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# ── Cell grammar delimiters ────────────────────────────────────────────
# value list      : sku_1,sku_2
# association list: size:S|size:M
# facet list      : size:S;colour:red
# name / value    : size:S
# taxon chain     : Clothing>Shirts>Casual
MULTI_VALUE_DELIM  = os.environ.get("CATLOAD_MULTI_VALUE_DELIM", ",")
MULTI_ASSOC_DELIM  = os.environ.get("CATLOAD_MULTI_ASSOC_DELIM", "|")
MULTI_FACET_DELIM  = os.environ.get("CATLOAD_MULTI_FACET_DELIM", ";")
NAME_VALUE_DELIM   = os.environ.get("CATLOAD_NAME_VALUE_DELIM", ":")
TAXON_CHAIN_DELIM  = os.environ.get("CATLOAD_TAXON_CHAIN_DELIM", ">")

# ── Loader behaviour ───────────────────────────────────────────────────
# Attach images to the product's master variant instead of the product
IMAGES_ON_MASTER = os.environ.get("CATLOAD_IMAGES_ON_MASTER", "0") == "1"

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
