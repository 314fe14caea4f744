# tests/test_products.py
import json

from conftest import read_doc

def _create_pen(client, categories=None):
    return client.post("/products", json={
        "name": "Pen", "price": 1.5, "description": "x", "categories": categories or [1]
    })

def test_create_product_success(client, data_file):
    r = _create_pen(client, [2, 1, 2])
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 1
    assert body["categories"] == [2, 1, 2]
    assert read_doc(data_file)["products"] == [body]

def test_create_product_unknown_category(client):
    r = _create_pen(client, [1, 999])
    assert r.status_code == 404
    assert r.json() == {"message": "Categories not found: 999"}
    # nothing was stored
    assert client.get("/products").json() == []

def test_create_product_lists_every_missing_id(client):
    r = _create_pen(client, [7, 1, 8])
    assert r.status_code == 404
    assert r.json()["message"] == "Categories not found: 7, 8"

def test_create_product_missing_fields(client):
    r = client.post("/products", json={"name": "Pen"})
    assert r.status_code == 422
    assert r.json()["message"] == "Invalid request"

def test_partial_update_only_price(client):
    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"price": 3})
    assert r.status_code == 200
    body = r.json()
    assert body["price"] == 3
    assert body["name"] == "Pen"
    assert body["description"] == "x"
    assert body["categories"] == [1]
    assert client.get("/products").json() == [body]

def test_update_null_field_is_ignored(client):
    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"name": None, "description": "y"})
    assert r.status_code == 200
    assert r.json()["name"] == "Pen"
    assert r.json()["description"] == "y"

def test_update_product_categories(client):
    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"categories": [2]})
    assert r.status_code == 200
    assert r.json()["categories"] == [2]

def test_update_product_unknown_category(client):
    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"name": "Pencil", "categories": [5]})
    assert r.status_code == 404
    assert r.json()["message"] == "Categories not found: 5"
    # the name change was not applied either
    assert client.get("/products").json()[0]["name"] == "Pen"

def test_update_missing_product(client):
    r = client.put("/products/42", json={"price": 1})
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found"}

def test_delete_product(client):
    pid = _create_pen(client).json()["id"]
    r = client.delete(f"/products/{pid}")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/products").json() == []

def test_delete_missing_product_is_noop(client):
    _create_pen(client)
    before = client.get("/products").json()
    r = client.delete("/products/99")
    assert r.status_code == 204
    assert client.get("/products").json() == before

def test_ids_stay_unique_after_delete(client):
    first = _create_pen(client).json()["id"]
    second = _create_pen(client).json()["id"]
    client.delete(f"/products/{first}")
    third = _create_pen(client).json()["id"]
    ids = [p["id"] for p in client.get("/products").json()]
    assert third not in (first, second)
    assert sorted(ids) == sorted({second, third})

def test_integer_prices_survive_rewrite(client, data_file):
    doc = read_doc(data_file)
    doc["products"].append({"id": 1, "name": "Old", "price": 10, "description": "", "categories": [1]})
    data_file.write_text(json.dumps(doc), encoding="utf-8")

    r = client.post("/products", json={"name": "New", "price": 3, "description": "", "categories": []})
    assert r.status_code == 201
    assert r.json()["price"] == 3 and isinstance(r.json()["price"], int)

    raw = data_file.read_text(encoding="utf-8")
    assert '"price": 10,' in raw
    assert '"price": 3,' in raw
    assert '"price": 10.0' not in raw
    assert [p["price"] for p in read_doc(data_file)["products"]] == [10, 3]

def test_large_integer_price_is_exact(client, data_file):
    big = 2 ** 53 + 1
    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"price": big})
    assert r.json()["price"] == big
    assert read_doc(data_file)["products"][0]["price"] == big

def test_boolean_category_ids_rejected(client):
    r = client.post("/products", json={"name": "Pen", "price": 1, "description": "", "categories": [True]})
    assert r.status_code == 422
    assert client.get("/products").json() == []

    pid = _create_pen(client).json()["id"]
    r = client.put(f"/products/{pid}", json={"categories": [True]})
    assert r.status_code == 422
    assert client.get("/products").json()[0]["categories"] == [1]

def test_non_numeric_id_is_422(client):
    _create_pen(client)
    r = client.delete("/products/abc")
    assert r.status_code == 422
    assert r.json()["message"] == "Invalid request"
    assert len(client.get("/products").json()) == 1
