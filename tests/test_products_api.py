"""
HTTP tests for /productos.
"""

PRODUCT = {
    "reference": "REF-100",
    "category": "Beverages",
    "name": "Orange juice 1L",
    "price": "3.75",
    "quantity": 40,
}


def test_requires_token(client):
    assert client.get("/productos").status_code == 401


def test_create_and_get(client, headers_a):
    resp = client.post("/productos", json=PRODUCT, headers=headers_a)

    assert resp.status_code == 201
    body = resp.json()
    assert body["reference"] == "REF-100"
    assert body["price"] == 3.75
    assert body["quantity"] == 40

    fetched = client.get(f"/productos/{body['id']}", headers=headers_a)
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_text_fields_are_trimmed(client, headers_a):
    resp = client.post("/productos", json={**PRODUCT, "name": "  Orange juice 1L  "}, headers=headers_a)

    assert resp.json()["name"] == "Orange juice 1L"


def test_duplicate_reference_is_conflict(client, headers_a, product_1):
    resp = client.post("/productos", json={**PRODUCT, "reference": product_1.reference}, headers=headers_a)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Product reference already exists"


def test_invalid_product_is_rejected(client, headers_a):
    assert client.post("/productos", json={**PRODUCT, "price": "-1"}, headers=headers_a).status_code == 422
    assert client.post("/productos", json={**PRODUCT, "quantity": -5}, headers=headers_a).status_code == 422
    assert client.post("/productos", json={**PRODUCT, "reference": "   "}, headers=headers_a).status_code == 422


def test_catalog_is_shared_between_users(client, headers_a, headers_b):
    client.post("/productos", json=PRODUCT, headers=headers_a)

    names = [p["name"] for p in client.get("/productos", headers=headers_b).json()]

    assert names == ["Orange juice 1L"]


def test_list_is_sorted_by_name(client, headers_a, product_1, product_2):
    names = [p["name"] for p in client.get("/productos", headers=headers_a).json()]

    assert names == ["Coffee 500g", "Tea 100g"]


def test_update_product(client, headers_a, product_1):
    resp = client.put(f"/productos/{product_1.id}", json={"price": "13.10", "quantity": 2}, headers=headers_a)

    assert resp.status_code == 200
    assert resp.json()["price"] == 13.1
    assert resp.json()["quantity"] == 2
    assert resp.json()["reference"] == "REF-001"


def test_update_rejects_empty_and_null_changes(client, headers_a, product_1):
    assert client.put(f"/productos/{product_1.id}", json={}, headers=headers_a).status_code == 400
    assert client.put(f"/productos/{product_1.id}", json={"name": None}, headers=headers_a).status_code == 400


def test_update_to_taken_reference_is_conflict(client, headers_a, product_1, product_2):
    resp = client.put(f"/productos/{product_2.id}", json={"reference": product_1.reference}, headers=headers_a)

    assert resp.status_code == 409


def test_missing_product(client, headers_a):
    assert client.get("/productos/999", headers=headers_a).status_code == 404
    assert client.put("/productos/999", json={"name": "x"}, headers=headers_a).status_code == 404
    assert client.delete("/productos/999", headers=headers_a).status_code == 404


def test_delete_product(client, headers_a, product_1):
    assert client.delete(f"/productos/{product_1.id}", headers=headers_a).status_code == 204
    assert client.get(f"/productos/{product_1.id}", headers=headers_a).status_code == 404


def test_product_in_use_cannot_be_deleted(client, headers_a, product_1):
    client.post(
        "/compras",
        json={"items": [{"productId": product_1.id, "quantity": 1, "unitPrice": "1"}]},
        headers=headers_a,
    )

    resp = client.delete(f"/productos/{product_1.id}", headers=headers_a)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Product is referenced by existing orders"
    assert client.get(f"/productos/{product_1.id}", headers=headers_a).status_code == 200
