def test_list_brands(client, fake_db):
    fake_db.handler = lambda q, p: [{"id": 1, "name": "Garnier"}, {"id": 2, "name": "Nivea"}]
    response = client.get("/brands")
    assert response.status_code == 200
    assert [b["name"] for b in response.json()] == ["Garnier", "Nivea"]


def test_single_brand_requires_token(client):
    assert client.get("/brands/1").status_code == 401


def test_unknown_store_is_404(client, fake_db, auth_headers):
    fake_db.handler = lambda q, p: []
    assert client.get("/stores/5", headers=auth_headers).status_code == 404


def test_store_locations_for_product(client, fake_db):
    fake_db.handler = lambda q, p: [{"id": 1, "store_id": 2, "store_name": "Eva", "city_name": "Київ"}]

    response = client.get("/store-locations", params={"productId": 12})

    assert response.status_code == 200
    _, query, params = fake_db.calls[0]
    assert "store_prices WHERE product_id = :product_id" in query
    assert params == {"product_id": 12}


def test_unknown_store_location_is_404(client, fake_db):
    fake_db.handler = lambda q, p: []
    assert client.get("/store-locations/77").status_code == 404


def test_filter_options_defaults_and_blank_values(client, fake_db):
    def handler(query, params):
        if "MIN(sp.price)" in query:
            return [{"min_price": None, "max_price": None}]
        if "DISTINCT b.name" in query:
            return [{"name": "Nivea"}, {"name": None}]
        if "DISTINCT p.volume" in query:
            return [{"volume": "50 ml"}, {"volume": ""}]
        return [{"type": "cream"}]
    fake_db.handler = handler

    body = client.get("/filter-options").json()

    assert body == {
        "brands": ["Nivea"],
        "volumes": ["50 ml"],
        "types": ["cream"],
        "priceRange": {"min": 0, "max": 10000},
    }


def test_filter_options_bind_categories(client, fake_db):
    client.get("/filter-options", params={"category": "face,body"})

    assert len(fake_db.calls) == 4
    for _, query, params in fake_db.calls:
        assert "c.name_en = ANY(:p1)" in query
        assert params == {"p1": ["face", "body"]}


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("+00:00")
