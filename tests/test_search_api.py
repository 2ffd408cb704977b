def test_search_covers_places_and_blogs(client, make_place, make_blog):
    make_place("Cordova Tower", rating=4.0)
    make_place("Beach Bar", city="Cordova", rating=4.8)
    make_place("Draft Cordova", status="draft")
    make_blog("Cordova in a day")
    make_blog("Cebu food")

    r = client.get("/api/v1/search", params={"q": "cordova"})
    assert r.status_code == 200
    body = r.json()
    assert body["query"] == "cordova"
    assert [p["name"] for p in body["places"]] == ["Beach Bar", "Cordova Tower"]
    assert [b["title"] for b in body["blogs"]] == ["Cordova in a day"]
    assert body["total"] == 3


def test_search_type_restricts_results(client, make_place, make_blog):
    make_place("Cordova Tower")
    make_blog("Cordova in a day")

    body = client.get("/api/v1/search", params={"q": "cordova", "type": "blogs"}).json()
    assert body["places"] == []
    assert body["total"] == 1

    assert client.get("/api/v1/search", params={"q": "x", "type": "people"}).status_code == 400


def test_blank_query_returns_nothing(client, make_place):
    make_place("Anything")
    body = client.get("/api/v1/search", params={"q": "   "}).json()
    assert body == {"query": "", "places": [], "blogs": [], "total": 0}


def test_trending_orders_by_popularity(client, make_place, make_blog):
    make_place("Quiet", visit_count=1)
    make_place("Busy", visit_count=40)
    make_place("Secret", visit_count=99, status="draft")
    make_blog("Old news", view_count=2)
    make_blog("Viral", view_count=70)

    body = client.get("/api/v1/search/trending").json()
    assert [p["name"] for p in body["trendingPlaces"]] == ["Busy", "Quiet"]
    assert [b["title"] for b in body["trendingBlogs"]] == ["Viral", "Old news"]


def test_wildcards_in_query_match_literally(client, make_place, make_blog):
    make_place("Lantaw 100% Seafood")
    make_place("Surf Dive Shop")
    make_blog("Half_day itinerary")
    make_blog("Harbour walk")

    body = client.get("/api/v1/search", params={"q": "%"}).json()
    assert [p["name"] for p in body["places"]] == ["Lantaw 100% Seafood"]
    assert body["blogs"] == []

    body = client.get("/api/v1/search", params={"q": "f_d"}).json()
    assert [b["title"] for b in body["blogs"]] == ["Half_day itinerary"]
    assert body["places"] == []
