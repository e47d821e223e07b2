"""
HTTP tests for /compras.
"""


def _purchase_body(*lines, **fields):
    body = {"items": [{"productId": p, "quantity": q, "unitPrice": price} for p, q, price in lines]}
    body.update(fields)
    return body


def test_create_purchase(client, headers_a, user_a, product_1, product_2, stock_of):
    resp = client.post(
        "/compras",
        json=_purchase_body(
            (product_1.id, 3, "19.999"),
            (product_2.id, 7, "0.333"),
            supplierId=12,
            notes="Invoice 2024-118",
            date="2024-06-01T10:30:00",
        ),
        headers=headers_a,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["total"] == "62.33"
    assert body["supplierId"] == 12
    assert body["notes"] == "Invoice 2024-118"
    assert body["userId"] == user_a.id
    assert body["date"].startswith("2024-06-01T10:30:00")
    assert [i["lineTotal"] for i in body["items"]] == ["60.00", "2.33"]
    # Purchases never move stock
    assert stock_of(product_1.id) == 10
    assert stock_of(product_2.id) == 3


def test_quantity_above_stock_is_fine(client, headers_a, product_2):
    resp = client.post("/compras", json=_purchase_body((product_2.id, 500, "1")), headers=headers_a)

    assert resp.status_code == 201


def test_unknown_product_is_conflict(client, headers_a):
    resp = client.post("/compras", json=_purchase_body((31337, 1, "1")), headers=headers_a)

    assert resp.status_code == 409
    assert client.get("/compras", headers=headers_a).json() == []


def test_invalid_items_are_rejected(client, headers_a, product_1):
    assert client.post("/compras", json={"items": []}, headers=headers_a).status_code == 422
    assert client.post("/compras", json=_purchase_body((product_1.id, 100001, "1")), headers=headers_a).status_code == 422
    assert client.get("/compras", headers=headers_a).json() == []


def test_list_is_newest_first(client, headers_a, product_1):
    for day in ("2024-01-05", "2024-03-05", "2024-02-05"):
        client.post("/compras", json=_purchase_body((product_1.id, 1, "1"), date=f"{day}T09:00:00"), headers=headers_a)

    dates = [p["date"][:10] for p in client.get("/compras", headers=headers_a).json()]

    assert dates == ["2024-03-05", "2024-02-05", "2024-01-05"]


def test_update_and_read_back(client, headers_a, product_1, product_2):
    created = client.post(
        "/compras",
        json=_purchase_body((product_1.id, 1, "5"), notes="first"),
        headers=headers_a,
    ).json()

    resp = client.put(
        f"/compras/{created['id']}",
        json=_purchase_body((product_1.id, 2, "5"), (product_2.id, 1, "1.10"), notes="second"),
        headers=headers_a,
    )

    assert resp.status_code == 200
    assert resp.json()["total"] == "11.10"
    assert resp.json()["notes"] == "second"
    assert client.get(f"/compras/{created['id']}", headers=headers_a).json() == resp.json()


def test_foreign_purchase_looks_missing(client, headers_a, headers_b, product_1):
    purchase_id = client.post("/compras", json=_purchase_body((product_1.id, 1, "1")), headers=headers_a).json()["id"]

    for resp in (
        client.get(f"/compras/{purchase_id}", headers=headers_b),
        client.put(f"/compras/{purchase_id}", json={"notes": "mine"}, headers=headers_b),
        client.delete(f"/compras/{purchase_id}", headers=headers_b),
    ):
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Purchase not found"}


def test_delete_purchase(client, headers_a, product_1):
    purchase_id = client.post("/compras", json=_purchase_body((product_1.id, 1, "1")), headers=headers_a).json()["id"]

    assert client.delete(f"/compras/{purchase_id}", headers=headers_a).status_code == 204
    assert client.get(f"/compras/{purchase_id}", headers=headers_a).status_code == 404
