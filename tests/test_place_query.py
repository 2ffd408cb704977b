import pytest
from pydantic import ValidationError

from app.core.errors import InvalidInputError
from app.schemas.place import PlaceQuery
from app.services.geo import haversine_km
from app.services.place_query import PlaceQueryEngine, QueryMode, resolve_sort, select_mode
from app.services.place_store import SqlPlaceStore

A = (10.2500, 123.9450)
B = (10.3000, 123.9500)
VIEWPORT = {"sw_lat": 10.22, "sw_lng": 123.915, "ne_lat": 10.28, "ne_lng": 123.975}


@pytest.fixture
def engine(db):
    return PlaceQueryEngine(SqlPlaceStore(db), default_radius_km=10)


@pytest.fixture
def cordova(make_place):
    a = make_place("Bantayan sa Hari", latitude=A[0], longitude=A[1], rating=4.0)
    b = make_place("Lantaw Restaurant", latitude=B[0], longitude=B[1], rating=4.5)
    c = make_place("Heritage Museum", latitude=None, longitude=None, rating=5.0)
    return a, b, c


def names(page):
    return [hit.place.name for hit in page.hits]


class RecordingStore:
    def __init__(self):
        self.calls = []

    def find(self, flt, sort, offset, limit):
        self.calls.append(("find", sort))
        return [], 0

    def within_radius(self, center, radius_km, flt, offset, limit):
        self.calls.append(("within_radius", radius_km))
        return [], 0

    def within_bounds(self, box, flt, offset, limit):
        self.calls.append(("within_bounds", box))
        return [], 0


def test_radius_excludes_points_beyond_cutoff(engine, cordova):
    page = engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=5))
    assert names(page) == ["Bantayan sa Hari"]
    assert page.total == 1
    assert page.extra_meta["radiusKm"] == 5
    assert page.extra_meta["centerPoint"] == {"latitude": A[0], "longitude": A[1]}


def test_radius_orders_nearest_first_with_distance(engine, cordova):
    page = engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=6))
    assert names(page) == ["Bantayan sa Hari", "Lantaw Restaurant"]
    distances = [hit.distance_km for hit in page.hits]
    assert distances[0] == pytest.approx(0.0, abs=1e-9)
    assert distances[1] == pytest.approx(haversine_km(*A, *B), rel=1e-9)
    assert all(d <= 6 for d in distances)


def test_radius_and_bounds_never_return_places_without_coordinates(engine, cordova):
    radius = engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=1000))
    bounds = engine.search(PlaceQuery(sw_lat=-90, sw_lng=-180, ne_lat=90, ne_lng=180))
    assert "Heritage Museum" not in names(radius)
    assert "Heritage Museum" not in names(bounds)
    plain = engine.search(PlaceQuery())
    assert "Heritage Museum" in names(plain)


def test_bounds_returns_places_inside_viewport(engine, cordova):
    page = engine.search(PlaceQuery(**VIEWPORT))
    assert names(page) == ["Bantayan sa Hari"]
    assert page.extra_meta["bounds"]["southwest"] == {"lat": 10.22, "lng": 123.915}


def test_bounds_orders_by_rating_then_visits_then_id(engine, make_place):
    make_place("Low", latitude=10.25, longitude=123.94, rating=3.0)
    make_place("Popular", latitude=10.24, longitude=123.95, rating=4.5, visit_count=50)
    make_place("Quiet", latitude=10.26, longitude=123.93, rating=4.5, visit_count=5)
    make_place("Quiet Twin", latitude=10.26, longitude=123.93, rating=4.5, visit_count=5)

    page = engine.find_in_bounds(PlaceQuery(**VIEWPORT))
    assert names(page) == ["Popular", "Quiet", "Quiet Twin", "Low"]


def test_pages_concatenate_to_full_result(engine, make_place):
    for i in range(5):
        make_place(f"P{i}", latitude=10.25 + i * 0.001, longitude=123.945, rating=float(i))

    full = names(engine.find_in_bounds(PlaceQuery(limit=100, **VIEWPORT)))
    pages = []
    for n in (1, 2, 3):
        page = engine.find_in_bounds(PlaceQuery(page=n, limit=2, **VIEWPORT))
        assert page.total == 5
        assert page.total_pages == 3
        pages.extend(names(page))
    assert pages == full
    assert len(set(pages)) == 5


def test_default_status_is_published(engine, make_place):
    make_place("Live", latitude=A[0], longitude=A[1])
    make_place("Draft", latitude=A[0], longitude=A[1], status="draft")

    assert names(engine.search(PlaceQuery())) == ["Live"]
    assert names(engine.search(PlaceQuery(status="draft"))) == ["Draft"]
    assert names(engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=1))) == ["Live"]


def test_filters_apply_in_every_mode(engine, make_place, category):
    make_place("Tower", latitude=A[0], longitude=A[1], category_id=category.id, city="Cordova")
    make_place("Elsewhere", latitude=A[0], longitude=A[1], city="Lapu-Lapu")

    radius = engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=2, city="cordova"))
    bounds = engine.search(PlaceQuery(category_id=category.id, **VIEWPORT))
    plain = engine.search(PlaceQuery(search="tower"))
    assert names(radius) == names(bounds) == names(plain) == ["Tower"]


def test_unknown_sort_field_falls_back_to_created_at(engine, make_place):
    for name in ("Beta", "Alpha", "Gamma"):
        make_place(name, rating=1.0)

    by_default = names(engine.search(PlaceQuery(sort_by="created_at")))
    assert names(engine.search(PlaceQuery(sort_by="not_a_column"))) == by_default
    assert names(engine.search(PlaceQuery(sort_by="name", sort_order="asc"))) == ["Alpha", "Beta", "Gamma"]


def test_resolve_sort_accepts_both_spellings():
    assert resolve_sort("visitCount", "asc").field == "visit_count"
    assert resolve_sort("visit_count", "ASC").descending is False
    assert resolve_sort("bogus", "sideways").field == "created_at"
    assert resolve_sort("bogus", "sideways").descending is True


def test_radius_outside_range_is_rejected():
    with pytest.raises(ValidationError):
        PlaceQuery(latitude=A[0], longitude=A[1], radius_km=0.1)
    with pytest.raises(ValidationError):
        PlaceQuery(latitude=A[0], longitude=A[1], radius_km=1000.5)
    assert PlaceQuery(latitude=A[0], longitude=A[1], radius_km=1000).radius_km == 1000


def test_engine_rejects_out_of_range_default_radius():
    engine = PlaceQueryEngine(RecordingStore(), default_radius_km=5000)
    with pytest.raises(InvalidInputError):
        engine.find_nearby(PlaceQuery(latitude=A[0], longitude=A[1]))


def test_mode_precedence():
    both = PlaceQuery(latitude=A[0], longitude=A[1], radius_km=5, **VIEWPORT)
    partial_bounds = PlaceQuery(sw_lat=10.22, sw_lng=123.915, ne_lat=10.28)
    no_radius = PlaceQuery(latitude=A[0], longitude=A[1])
    assert select_mode(both) is QueryMode.RADIUS
    assert select_mode(PlaceQuery(**VIEWPORT)) is QueryMode.BOUNDS
    assert select_mode(partial_bounds) is QueryMode.PLAIN
    assert select_mode(no_radius) is QueryMode.PLAIN


def test_nearby_uses_default_radius():
    store = RecordingStore()
    PlaceQueryEngine(store, default_radius_km=10).find_nearby(PlaceQuery(latitude=A[0], longitude=A[1]))
    assert store.calls == [("within_radius", 10)]


def test_missing_parameters_give_explained_empty_pages():
    store = RecordingStore()
    engine = PlaceQueryEngine(store)

    nearby = engine.find_nearby(PlaceQuery(latitude=A[0]))
    in_bounds = engine.find_in_bounds(PlaceQuery(sw_lat=10.22, sw_lng=123.915))

    assert nearby.hits == [] and nearby.total == 0
    assert "required" in nearby.extra_meta["message"]
    assert in_bounds.hits == [] and in_bounds.total == 0
    assert in_bounds.extra_meta["message"] == "All bounding box coordinates are required"
    assert store.calls == []


def test_radius_ties_break_by_id_across_pages(engine, make_place):
    centre = make_place("Centre", latitude=A[0], longitude=A[1])
    twins = [make_place(f"Twin {i}", latitude=10.26, longitude=123.945) for i in range(4)]
    expected = [centre.id] + sorted(t.id for t in twins)

    ids = []
    for n in (1, 2, 3):
        page = engine.search(PlaceQuery(latitude=A[0], longitude=A[1], radius_km=5, page=n, limit=2))
        assert page.total == 5
        assert page.total_pages == 3
        ids.extend(hit.place.id for hit in page.hits)
    assert ids == expected


def test_plain_pages_on_repeated_rating_follow_id(engine, make_place):
    places = [make_place(f"R{i}", rating=r) for i, r in enumerate([4.0, 4.0, 3.0, 4.0, 3.0])]
    expected = [p.id for p in sorted(places, key=lambda p: (-p.rating, p.id))]

    ids = []
    for n in (1, 2, 3):
        page = engine.search(PlaceQuery(sort_by="rating", page=n, limit=2))
        assert page.total == 5
        ids.extend(hit.place.id for hit in page.hits)
    assert ids == expected
    assert len(set(ids)) == 5


def test_text_filters_treat_wildcards_literally(engine, make_place):
    make_place("Bantayan sa Hari", city="Cordova")
    make_place("Lantaw 100% Seafood", city="Lapu_Lapu")

    assert names(engine.search(PlaceQuery(search="%"))) == ["Lantaw 100% Seafood"]
    assert names(engine.search(PlaceQuery(search="a_a"))) == []
    assert names(engine.search(PlaceQuery(city="u_l"))) == ["Lantaw 100% Seafood"]
    assert names(engine.search(PlaceQuery(city="_"))) == ["Lantaw 100% Seafood"]
