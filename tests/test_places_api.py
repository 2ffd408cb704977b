import re

BASE = "/api/v1/places"


def test_list_envelope_uses_camel_case(client, make_place, category, tags):
    make_place(
        "Bantayan sa Hari",
        latitude=10.25,
        longitude=123.945,
        category_id=category.id,
        tags=tags,
        short_description="Watchtower",
    )

    r = client.get(BASE)
    assert r.status_code == 200
    body = r.json()
    assert body["meta"] == {"page": 1, "limit": 20, "total": 1, "totalPages": 1}
    item = body["data"][0]
    assert item["shortDescription"] == "Watchtower"
    assert item["visitCount"] == 0
    assert item["category"]["slug"] == "attractions"
    assert [t["slug"] for t in item["tags"]] == ["nature", "budget"]
    assert "short_description" not in item


def test_radius_search_meta_and_distance(client, make_place):
    make_place("A", latitude=10.25, longitude=123.945)
    make_place("B", latitude=10.30, longitude=123.95)

    r = client.get(BASE, params={"latitude": 10.25, "longitude": 123.945, "radiusKm": 5})
    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body["data"]] == ["A"]
    assert body["data"][0]["distanceKm"] == 0.0
    assert body["meta"]["radiusKm"] == 5.0
    assert body["meta"]["centerPoint"] == {"latitude": 10.25, "longitude": 123.945}


def test_nearby_defaults_radius_and_explains_missing_centre(client, make_place):
    make_place("A", latitude=10.25, longitude=123.945)
    make_place("B", latitude=10.30, longitude=123.95)

    r = client.get(f"{BASE}/nearby", params={"latitude": 10.25, "longitude": 123.945})
    assert [p["name"] for p in r.json()["data"]] == ["A", "B"]
    assert r.json()["meta"]["radiusKm"] == 10.0

    r = client.get(f"{BASE}/nearby", params={"latitude": 10.25})
    assert r.status_code == 200
    assert r.json()["data"] == []
    assert r.json()["meta"]["total"] == 0
    assert "required" in r.json()["meta"]["message"]


def test_in_bounds(client, make_place):
    make_place("Inside", latitude=10.25, longitude=123.945, rating=4.0)
    make_place("Outside", latitude=10.30, longitude=123.95, rating=5.0)
    viewport = {"swLat": 10.22, "swLng": 123.915, "neLat": 10.28, "neLng": 123.975}

    r = client.get(f"{BASE}/in-bounds", params=viewport)
    assert [p["name"] for p in r.json()["data"]] == ["Inside"]
    assert r.json()["meta"]["bounds"]["northeast"] == {"lat": 10.28, "lng": 123.975}

    r = client.get(f"{BASE}/in-bounds", params={"swLat": 10.22, "swLng": 123.915})
    assert r.json()["data"] == []
    assert r.json()["meta"]["message"] == "All bounding box coordinates are required"


def test_invalid_radius_is_bad_request(client):
    for radius in (0, 0.1, 1500):
        r = client.get(BASE, params={"latitude": 10.25, "longitude": 123.945, "radiusKm": radius})
        assert r.status_code == 400


def test_out_of_range_latitude_is_bad_request(client):
    r = client.get(f"{BASE}/nearby", params={"latitude": 91, "longitude": 123.945})
    assert r.status_code == 400


def test_limit_and_page_are_clamped(client, make_place):
    make_place("Only")
    r = client.get(BASE, params={"limit": 500, "page": 0})
    assert r.json()["meta"]["limit"] == 100
    assert r.json()["meta"]["page"] == 1

    r = client.get(BASE, params={"limit": 0})
    assert r.json()["meta"]["limit"] == 1


def test_tag_filter_accepts_comma_list_and_repeats(client, make_place, tags):
    nature, budget = tags
    make_place("Green", tags=[nature])
    make_place("Cheap", tags=[budget])
    make_place("Plain")

    r = client.get(BASE, params={"tagIds": f"{nature.id},{budget.id}", "sortBy": "name", "sortOrder": "asc"})
    assert [p["name"] for p in r.json()["data"]] == ["Cheap", "Green"]

    r = client.get(f"{BASE}?tagIds={nature.id}&tagIds={budget.id}")
    assert r.json()["meta"]["total"] == 2


def test_detail_increments_visit_count(client, make_place):
    place = make_place("Counter")

    first = client.get(f"{BASE}/{place.id}").json()
    second = client.get(f"{BASE}/{place.id}").json()
    by_slug = client.get(f"{BASE}/slug/{place.slug}").json()

    assert first["visitCount"] == 1
    assert second["visitCount"] == 2
    assert by_slug["visitCount"] == 3


def test_missing_place_is_not_found(client):
    assert client.get(f"{BASE}/999").status_code == 404
    assert client.get(f"{BASE}/slug/nope").status_code == 404
    assert client.patch(f"{BASE}/999", json={"name": "x"}).status_code == 404
    assert client.delete(f"{BASE}/999").status_code == 404


def test_create_update_delete(client, category, tags):
    payload = {
        "name": "Gilutongan Sanctuary",
        "description": "Reef",
        "latitude": 10.2089,
        "longitude": 123.9897,
        "categoryId": category.id,
        "placeType": "beach",
        "tagIds": [tags[0].id],
        "status": "published",
    }
    r = client.post(BASE, json=payload)
    assert r.status_code == 201
    created = r.json()
    assert re.match(r"^gilutongan-sanctuary-\d{6}$", created["slug"])
    assert created["publishedAt"] is not None
    assert created["visitCount"] == 0
    assert [t["id"] for t in created["tags"]] == [tags[0].id]

    r = client.patch(f"{BASE}/{created['id']}", json={"name": "Gilutongan Island", "tagIds": [], "city": "Cordova"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["slug"].startswith("gilutongan-island-")
    assert updated["tags"] == []
    assert updated["city"] == "Cordova"
    assert updated["description"] == "Reef"

    r = client.delete(f"{BASE}/{created['id']}")
    assert r.status_code == 200
    assert client.get(f"{BASE}/{created['id']}").status_code == 404


def test_create_with_unknown_tag_is_bad_request(client):
    r = client.post(BASE, json={"name": "Ghost", "tagIds": [42]})
    assert r.status_code == 400


def test_create_rejects_out_of_range_coordinates(client):
    r = client.post(BASE, json={"name": "Nowhere", "latitude": 95, "longitude": 0})
    assert r.status_code == 422


def test_publish_time_uses_database_clock(client):
    created = client.post(BASE, json={"name": "Clocked", "status": "published"}).json()
    # both stamped by the same INSERT
    assert created["publishedAt"] == created["createdAt"]

    draft = client.post(BASE, json={"name": "Later"}).json()
    assert draft["publishedAt"] is None
    published = client.patch(f"{BASE}/{draft['id']}", json={"status": "published"}).json()
    assert published["publishedAt"] >= published["createdAt"]
