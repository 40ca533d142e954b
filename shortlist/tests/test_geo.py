import pytest

from shortlist.geo.distance import (
    DistanceCategory,
    average_distance_km,
    categorize_distance,
    distance_km,
    distances_km,
    min_distance_km,
    route_distance_km,
    travel_minutes,
)
from shortlist.geo.text import edit_distance, normalize_address

SEOUL = (37.5665, 126.9780)
BUSAN = (35.1796, 129.0756)
MYEONGDONG = (37.5636, 126.9850)


# ── Distances ────────────────────────────────────────────────────────────


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance_km(*SEOUL, *SEOUL) == 0.0

    def test_seoul_to_busan(self):
        assert 320 < distance_km(*SEOUL, *BUSAN) < 330

    def test_symmetric(self):
        assert distance_km(*SEOUL, *BUSAN) == pytest.approx(distance_km(*BUSAN, *SEOUL))

    def test_nearby_points_under_100m(self):
        assert distance_km(37.6336, 126.9750, 37.6337, 126.9751) < 0.1

    def test_vectorized_matches_scalar(self):
        points = [BUSAN, MYEONGDONG, SEOUL]
        result = distances_km(*SEOUL, points)
        expected = [distance_km(*SEOUL, *p) for p in points]
        assert result.tolist() == pytest.approx(expected)

    def test_vectorized_empty(self):
        assert len(distances_km(*SEOUL, [])) == 0

    def test_min_and_average(self):
        refs = [BUSAN, MYEONGDONG]
        near = distance_km(*SEOUL, *MYEONGDONG)
        far = distance_km(*SEOUL, *BUSAN)
        assert min_distance_km(SEOUL, refs) == pytest.approx(near)
        assert average_distance_km(SEOUL, refs) == pytest.approx((near + far) / 2)

    def test_empty_references(self):
        assert min_distance_km(SEOUL, []) == 0.0
        assert average_distance_km(SEOUL, []) == 0.0


class TestRoutes:
    def test_route_needs_two_stops(self):
        assert route_distance_km([]) == 0.0
        assert route_distance_km([SEOUL]) == 0.0

    def test_route_sums_legs(self):
        total = route_distance_km([SEOUL, MYEONGDONG, BUSAN])
        legs = distance_km(*SEOUL, *MYEONGDONG) + distance_km(*MYEONGDONG, *BUSAN)
        assert total == pytest.approx(legs)

    def test_travel_minutes_rounds_up(self):
        assert travel_minutes(1.0, 4.0) == 15
        assert travel_minutes(1.01, 4.0) == 16

    def test_travel_minutes_non_positive(self):
        assert travel_minutes(0, 4.0) == 0
        assert travel_minutes(3.0, 0) == 0

    def test_categorize_distance(self):
        assert categorize_distance(2.0) == DistanceCategory.walkable
        assert categorize_distance(2.1) == DistanceCategory.near
        assert categorize_distance(5.0) == DistanceCategory.near
        assert categorize_distance(5.1) == DistanceCategory.far


# ── Strings ──────────────────────────────────────────────────────────────


class TestEditDistance:
    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_case_and_outer_space_ignored(self):
        assert edit_distance("Myeongdong Cathedral", "myeongdong cathedral ") == 0

    def test_empty_string(self):
        assert edit_distance("", "abc") == 3
        assert edit_distance("", "") == 0

    def test_single_edit(self):
        assert edit_distance("Gyeongbokgung Palace", "Gyeongbokgung Palac") == 1


class TestNormalizeAddress:
    def test_korean_admin_units_removed(self):
        assert normalize_address("서울특별시 강남구 테헤란로 152") == "서울 강남 테헤란로 152"

    def test_brackets_and_romanized_suffix(self):
        assert normalize_address("[Jongno-gu] 161  Sajik-ro") == "jongno 161 sajik-ro"

    def test_variants_compare_equal(self):
        a = normalize_address("105 Namsangongwon-gil (Yongsan-gu), Seoul City")
        b = normalize_address("105 namsangongwon-gil yongsan-gu,   seoul")
        assert a == b

    def test_none(self):
        assert normalize_address(None) == ""
