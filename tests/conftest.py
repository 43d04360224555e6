import json

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings, get_settings
from catalog.main import app

SAMPLE_PRODUCTS = [
    {"id": "p1", "title": "Python Book", "description": "learn python", "code": "B-1", "price": 30,
     "status": True, "stock": 4, "category": "Books", "thumbnails": ["py.png"]},
    {"id": "p2", "title": "Java Book", "description": "learn java", "code": "B-2", "price": 10,
     "status": False, "stock": 1, "category": "books", "thumbnails": []},
    {"id": "p3", "title": "Robot", "description": "toy robot", "code": "T-1", "price": 20,
     "status": True, "stock": 7, "category": "Toys", "thumbnails": []},
    {"id": "p4", "title": "Python Cookbook", "description": "recipes", "code": "B-3", "price": 5,
     "status": True, "stock": 2, "category": "Books", "thumbnails": []},
]


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path)
    app.dependency_overrides[get_settings] = lambda: s
    yield s
    app.dependency_overrides.clear()


@pytest.fixture
def client(settings):
    return TestClient(app)


@pytest.fixture
def seed(settings):
    def _seed(products=None, carts=None):
        if products is not None:
            settings.products_path.write_text(json.dumps(products, indent=2))
        if carts is not None:
            settings.carts_path.write_text(json.dumps(carts, indent=2))
    return _seed
