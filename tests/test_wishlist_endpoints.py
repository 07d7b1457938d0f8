def test_wishlist_requires_token(client):
    assert client.get("/saved-products").status_code == 401


def test_list_saved_products(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [
        {"product_id": 3, "saved_category_id": None},
        {"product_id": 8, "saved_category_id": 2},
    ]

    response = client.get("/saved-products", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"savedProducts": [
        {"product_id": 3, "saved_category_id": None},
        {"product_id": 8, "saved_category_id": 2},
    ]}
    assert fake_db.calls[0][2] == {"user_id": 7}


def test_check_saved_product(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [{"id": 1}]
    assert client.get("/saved-products/3", headers=auth_headers).json() == {"isSaved": True}

    fake_db.handler = lambda q, p: []
    assert client.get("/saved-products/3", headers=auth_headers).json() == {"isSaved": False}


def test_saving_twice_is_rejected(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: []
    response = client.post("/saved-products", json={"productId": 3}, headers=auth_headers)
    assert response.status_code == 400


def test_save_product(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [{"id": 11}]
    response = client.post("/saved-products", json={"productId": 3}, headers=auth_headers)
    assert response.status_code == 200
    assert fake_db.statements("write")[0][2] == {"user_id": 7, "product_id": 3}


def test_bulk_check_with_no_ids_skips_store(client, fake_db, auth_headers):
    response = client.post("/saved-products/bulk", json={"productIds": []}, headers=auth_headers)
    assert response.json() == {"savedProductIds": []}
    assert fake_db.calls == []


def test_bulk_check(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [{"product_id": 4}]
    response = client.post("/saved-products/bulk", json={"productIds": [4, 5]}, headers=auth_headers)
    assert response.json() == {"savedProductIds": [4]}
    assert fake_db.calls[0][2] == {"user_id": 7, "product_ids": [4, 5]}


def test_move_into_foreign_category_is_forbidden(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: []
    response = client.patch("/saved-products/3", json={"saved_category_id": 99}, headers=auth_headers)
    assert response.status_code == 403
    assert fake_db.statements("write") == []


def test_move_into_own_category(client, fake_db, auth_headers):
    def handler(query, params):
        if query.lstrip().startswith("SELECT id FROM saved_categories"):
            return [{"id": 2}]
        return [{"product_id": 3, "saved_category_id": 2}]
    fake_db.handler = handler

    response = client.patch("/saved-products/3", json={"saved_category_id": 2}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["saved_category_id"] == 2


def test_remove_missing_saved_product_is_404(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: []
    assert client.delete("/saved-products/3", headers=auth_headers).status_code == 404


def test_blank_category_name_rejected(client, fake_db, auth_headers):
    response = client.post("/saved-products/categories", json={"name": "   "}, headers=auth_headers)
    assert response.status_code == 400
    assert fake_db.calls == []


def test_create_category_trims_name(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [{"id": 5, "name": "Summer", "created_at": None}]
    response = client.post("/saved-products/categories", json={"name": " Summer "}, headers=auth_headers)
    assert response.status_code == 200
    assert fake_db.statements("write")[0][2] == {"user_id": 7, "name": "Summer"}


def test_rename_other_users_category_is_404(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: []
    response = client.put("/saved-products/categories/5", json={"name": "New"}, headers=auth_headers)
    assert response.status_code == 404


def test_list_categories(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: [{"id": 5, "name": "Summer", "created_at": None}]
    response = client.get("/saved-products/categories/list", headers=auth_headers)
    assert response.json() == [{"id": 5, "name": "Summer", "created_at": None}]
