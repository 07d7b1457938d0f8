"""
Endpoint tests for GET /products and GET /products/{id}.

The fake store answers the count query with a total and the data query with
canned rows, so these tests cover request validation, mode selection,
response shaping and error mapping without a live Postgres.
"""

from core.exceptions import DataStoreError

from conftest import make_product_row


def is_count(query):
    return "COUNT(DISTINCT p.id)" in query


def paginating_handler(ids):
    """Serve id-ordered rows, honouring LIMIT/OFFSET binds like Postgres would."""
    def handler(query, params):
        if is_count(query):
            return [{"total": len(ids)}]
        selected = list(ids)
        if "limit" in params:
            selected = selected[params["offset"]:params["offset"] + params["limit"]]
        return [make_product_row(i) for i in selected]
    return handler


def test_browse_lists_products_with_total(client, fake_db):
    fake_db.handler = paginating_handler([1, 2, 3])

    response = client.get("/products")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert [p["id"] for p in body["products"]] == [1, 2, 3]
    assert body["groupedResults"] == []
    assert body["page"] == 1
    assert body["limit"] == 24
    assert body["products"][0]["features"]["country"] == "Germany"


def test_pages_are_contiguous_and_disjoint(client, fake_db):
    fake_db.handler = paginating_handler([1, 2, 3, 4, 5])

    first = client.get("/products", params={"limit": "2", "page": "1"}).json()
    second = client.get("/products", params={"limit": "2", "page": "2"}).json()

    assert [p["id"] for p in first["products"]] == [1, 2]
    assert [p["id"] for p in second["products"]] == [3, 4]
    assert first["total"] == second["total"] == 5


def test_count_query_gets_predicate_binds_only(client, fake_db):
    fake_db.handler = paginating_handler([1])

    client.get("/products", params={"brands": "Nivea", "limit": "10", "page": "2"})

    count_params = [params for _, query, params in fake_db.statements("fetch") if is_count(query)]
    data_params = [params for _, query, params in fake_db.statements("fetch") if not is_count(query)]
    assert count_params == [{"p1": ["Nivea"]}]
    assert data_params == [{"p1": ["Nivea"], "limit": 10, "offset": 10}]


def test_search_returns_grouped_results(client, fake_db):
    rows = [
        make_product_row(1, category_id="hair"),
        make_product_row(2, category_id="face"),
        make_product_row(3, category_id="face"),
    ]
    fake_db.handler = lambda q, p: [{"total": 3}] if is_count(q) else rows

    body = client.get("/products", params={"search": "cream"}).json()

    assert body["total"] == 3
    assert [g["category"] for g in body["groupedResults"]] == ["face", "hair"]
    assert [g["count"] for g in body["groupedResults"]] == [2, 1]


def test_placeholder_image_never_returned(client, fake_db):
    row = make_product_row(1, images=["https://cdn.example.com/placeholder.webp", "https://cdn.example.com/1.jpg"])
    fake_db.handler = lambda q, p: [{"total": 1}] if is_count(q) else [row]

    body = client.get("/products").json()

    assert body["products"][0]["images"] == ["https://cdn.example.com/1.jpg"]


def test_unencoded_plus_in_price_ranges(client, fake_db):
    fake_db.handler = paginating_handler([1])

    response = client.get("/products?priceRanges=0-500,1000+")

    assert response.status_code == 200
    count_params = [params for _, query, params in fake_db.statements("fetch") if is_count(query)]
    assert count_params == [{"p1": 0.0, "p2": 500.0, "p3": 1000}]


def test_non_numeric_price_is_rejected_before_querying(client, fake_db):
    response = client.get("/products", params={"priceFrom": "cheap", "priceTo": "100"})

    assert response.status_code == 400
    assert "priceFrom" in response.json()["error"]
    assert fake_db.calls == []


def test_store_failure_is_generic_500(client, fake_db):
    def failing(query, params):
        raise DataStoreError(cause=RuntimeError("relation \"products\" does not exist"))
    fake_db.handler = failing

    response = client.get("/products", params={"brands": "Nivea"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "relation" not in response.text


def test_product_detail_increments_views(client, fake_db):
    fake_db.handler = lambda q, p: [make_product_row(5, images=None)]

    response = client.get("/products/5")

    assert response.status_code == 200
    assert response.json()["id"] == 5
    assert response.json()["images"] == []
    updates = fake_db.statements("execute")
    assert len(updates) == 1
    assert "views" in updates[0][1]
    assert updates[0][2] == {"product_id": 5}


def test_missing_product_is_404_without_view_bump(client, fake_db):
    fake_db.handler = lambda q, p: []

    response = client.get("/products/999")

    assert response.status_code == 404
    assert fake_db.statements("execute") == []
