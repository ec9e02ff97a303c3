import uuid

from sqlmodel import select

from app.db.schema import Product

PRODUCTS_URL = "/api/v1/products/"


def create(client, **payload):
    payload.setdefault("name", "Bamboo Toothbrush")
    response = client.post(PRODUCTS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_index_and_readiness(client):
    assert client.get("/api/v1/").json() == {"status": "API is running"}

    response = client.get("/api/v1/readiness")
    assert response.status_code == 200
    assert response.json()["database"] == "online"


def test_preview_eco_score(client):
    response = client.post("/api/v1/eco-score/", json={
        "carbonFootprintKg": 40,
        "waterConsumptionLiters": 300,
        "energyUsageKwh": 3,
        "recyclabilityLevel": "high",
        "wastePollutionLevel": "low",
        "chemicalUsageLevel": "minimal",
        "environmentalImpactLevel": "low",
        "sustainabilityLevel": "high",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 95
    assert body["letter"] == "A"
    assert body["raw_score"] == 100
    assert len(body["sub_scores"]) == 8


def test_preview_eco_score_ignores_garbage(client):
    response = client.post("/api/v1/eco-score/", json={
        "carbonFootprintKg": "heavy",
        "recyclabilityLevel": 3,
        "energyUsageKwh": -2,
    })

    assert response.status_code == 200
    assert response.json()["score"] is None
    assert response.json()["letter"] is None


def test_preview_eco_score_survives_out_of_range_numbers(client):
    huge = "1" + "0" * 400
    response = client.post(
        "/api/v1/eco-score/",
        content=f'{{"carbonFootprintKg": {huge}, "recyclabilityLevel": "high"}}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 95
    assert body["letter"] == "A"


def test_create_product_stores_score(client, session):
    body = create(
        client,
        category="Personal Care",
        ingredients="bamboo, nylon-4 ,",
        uploaded_by="user-1",
        environmental={"carbonFootprintKg": "40 kg", "recyclabilityLevel": "High"},
    )

    assert body["eco_score"] == 95
    assert body["eco_letter"] == "A"
    assert body["eco_display"] == "95/100"
    assert body["eco_color"] == "green"
    assert body["ingredients"] == ["bamboo", "nylon-4"]
    assert body["environmental"]["carbonFootprintKg"] == 40.0
    assert body["environmental"]["recyclabilityLevel"] == "high"

    stored = session.get(Product, uuid.UUID(body["id"]))
    assert stored.eco_score == 95
    assert stored.carbon_footprint_kg == 40.0


def test_create_product_without_attributes_has_no_score(client):
    body = create(client, name="Mystery Box")

    assert body["eco_score"] is None
    assert body["eco_letter"] is None
    assert body["eco_display"] == "N/A"
    assert body["eco_color"] is None


def test_create_product_requires_name(client):
    response = client.post(PRODUCTS_URL, json={"category": "Kitchen"})

    assert response.status_code == 422


def test_update_recomputes_from_merged_attributes(client):
    product = create(client, environmental={
        "carbonFootprintKg": 40, "recyclabilityLevel": "high"})

    response = client.patch(f"{PRODUCTS_URL}{product['id']}", json={
        "environmental": {"carbonFootprintKg": 300}})

    assert response.status_code == 200
    body = response.json()
    # carbon 300 -> 15, recyclability kept -> 100: (15*30 + 100*10) / 40
    assert body["eco_score"] == 36.25
    assert body["eco_letter"] == "D"
    assert body["environmental"]["recyclabilityLevel"] == "high"


def test_update_clearing_all_attributes_clears_score(client):
    product = create(client, environmental={"carbonFootprintKg": 40})

    response = client.patch(f"{PRODUCTS_URL}{product['id']}", json={
        "environmental": {"carbonFootprintKg": None}})

    body = response.json()
    assert body["eco_score"] is None
    assert body["eco_letter"] is None


def test_update_without_environmental_keeps_score(client):
    product = create(client, environmental={"energyUsageKwh": 20})

    response = client.patch(f"{PRODUCTS_URL}{product['id']}", json={"name": "Renamed"})

    body = response.json()
    assert body["name"] == "Renamed"
    assert body["eco_score"] == 50
    assert body["eco_letter"] == "D"


def test_update_rejects_null_name(client):
    product = create(client, name="Soap")
    url = f"{PRODUCTS_URL}{product['id']}"

    response = client.patch(url, json={"name": None})

    assert response.status_code == 422
    assert client.get(url).json()["name"] == "Soap"


def test_get_and_delete_product(client):
    product = create(client)
    url = f"{PRODUCTS_URL}{product['id']}"

    assert client.get(url).json()["name"] == "Bamboo Toothbrush"

    response = client.delete(url)
    assert response.status_code == 200
    assert response.json()["status"] == "deleted"

    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404


def test_unknown_product_is_404(client):
    response = client.get(f"{PRODUCTS_URL}{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found."


def test_list_is_cached_until_a_write(client, make_product):
    create(client, name="First")
    assert len(client.get(PRODUCTS_URL).json()) == 1

    # Bypasses the service, so the cached list does not see it
    make_product("Inserted Directly")
    assert len(client.get(PRODUCTS_URL).json()) == 1

    create(client, name="Second")
    names = [p["name"] for p in client.get(PRODUCTS_URL).json()]
    assert len(names) == 3
    assert names[0] == "Second"


def test_categorized_products(client):
    create(client, name="Cloth Bag", environmental={"environmentalImpactLevel": "Low"})
    create(client, name="Water Bottle", environmental={"environmentalImpactLevel": "moderate"})
    create(client, name="Jet Ski", environmental={"environmentalImpactLevel": "HIGH impact"})
    create(client, name="Unknown")

    response = client.get(f"{PRODUCTS_URL}categorized")

    assert response.status_code == 200
    groups = {key: [p["name"] for p in items] for key, items in response.json().items()}
    assert groups == {
        "low": ["Cloth Bag"],
        "medium": ["Water Bottle"],
        "high": ["Jet Ski"],
        "unrated": ["Unknown"],
    }


def test_recompute_scores_fills_stale_cache(client, session, make_product):
    stale = make_product("Stale", score=False, carbon_footprint_kg=75)
    make_product("Fresh", carbon_footprint_kg=40)
    assert stale.eco_score is None

    response = client.post(f"{PRODUCTS_URL}recompute-scores")
    assert response.json() == {"scanned": 2, "changed": 1}

    refreshed = session.exec(select(Product).where(Product.name == "Stale")).one()
    assert refreshed.eco_score == 80
    assert refreshed.eco_letter == "B"

    assert client.post(f"{PRODUCTS_URL}recompute-scores").json() == {"scanned": 2, "changed": 0}
