from decimal import Decimal

import pytest

from db import init_db, get_session
from db.models import Product
from db.store import Store
from loader.context import RowContext
from loader.operators import OperatorCatalog
from loader.report import LoadReport
from services.asset_service import AssetService


@pytest.fixture
def db_url(tmp_path):
    """Fresh SQLite database file per test."""
    url = f"sqlite:///{tmp_path / 'catload_test.sqlite'}"
    init_db(url)
    return url


@pytest.fixture
def session(db_url):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def store(session):
    return Store(session)


@pytest.fixture
def catalog():
    return OperatorCatalog()


@pytest.fixture
def product(store):
    """A saved product the builders can hang children on."""
    p = Product(name="Tee", sku="TEE", price=Decimal("10.00"), weight=0.2)
    assert store.save(p)
    return p


@pytest.fixture
def make_ctx(store):
    def _make(product, row_number=2):
        return RowContext(store, product, row_number, LoadReport(), AssetService())
    return _make


@pytest.fixture
def app(db_url):
    from main import create_app
    app = create_app(db_url)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
