# tests/conftest.py
import json

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app

SEED = {
    "products": [],
    "categories": [{"id": 1, "name": "Books"}, {"id": 2, "name": "Office"}],
}

@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")
    return path

@pytest.fixture
def client(data_file):
    app.dependency_overrides[get_settings] = lambda: Settings(data_file=str(data_file))
    yield TestClient(app)
    app.dependency_overrides.clear()

def read_doc(path):
    return json.loads(path.read_text(encoding="utf-8"))
