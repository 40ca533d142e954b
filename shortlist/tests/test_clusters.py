import pytest
from pydantic import ValidationError

from shortlist.clusters.catalog import SEOUL_CLUSTERS, ClusterCatalog, build_seoul_catalog
from shortlist.clusters.matcher import STYLE_DESCRIPTORS, ClusterMatcher, match_score
from shortlist.clusters.models import Cluster
from shortlist.places.filtering import rank_places
from shortlist.places.models import Place, TravelStyle, UserPreferences

CATALOG = build_seoul_catalog()
MATCHER = ClusterMatcher(CATALOG)

REGISTRY_ORDER = ["hongdae", "gangnam", "sungsu", "jongno", "itaewon", "bukchon"]


# ── Catalog ──────────────────────────────────────────────────────────────


class TestCatalog:
    def test_registry_order(self):
        assert list(CATALOG.names) == REGISTRY_ORDER
        assert len(CATALOG) == 6

    def test_get_all_clusters_is_a_copy(self):
        clusters = CATALOG.get_all_clusters()
        clusters.pop("hongdae")
        clusters["fake"] = clusters["gangnam"]
        assert "hongdae" in CATALOG
        assert "fake" not in CATALOG
        assert len(CATALOG.get_all_clusters()) == 6

    def test_get_cluster(self):
        assert CATALOG.get_cluster("jongno").display_name == "Jongno"
        assert CATALOG.get_cluster("busan") is None

    def test_clusters_are_frozen(self):
        with pytest.raises(ValidationError):
            CATALOG.get_cluster("hongdae").radius_m = 10

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            ClusterCatalog([SEOUL_CLUSTERS[0], SEOUL_CLUSTERS[0]])

    def test_contains(self):
        hongdae = CATALOG.get_cluster("hongdae")
        assert hongdae.contains(hongdae.center_lat, hongdae.center_lng)
        assert not hongdae.contains(35.1796, 129.0756)
        assert not hongdae.contains(None, 126.9)


# ── Matching ─────────────────────────────────────────────────────────────


class TestMatchScore:
    def test_fraction_of_tags(self):
        assert match_score(("young", "active", "culture", "art"), "Young ART lover") == 0.5

    def test_no_tags(self):
        assert match_score((), "anything") == 0.0

    def test_no_match(self):
        assert match_score(("luxury", "shopping"), "hiking and camping") == 0.0

    def test_cluster_scores_sorted_with_registry_tiebreak(self):
        scores = MATCHER.cluster_scores("tradition and history")
        assert list(scores) == ["jongno", "bukchon", "hongdae", "gangnam", "sungsu", "itaewon"]
        assert scores["jongno"] == pytest.approx(2 / 3)
        assert scores["bukchon"] == pytest.approx(1 / 3)
        assert scores["hongdae"] == 0.0


# ── Distribution ─────────────────────────────────────────────────────────


class TestDistribution:
    def test_proportional_split(self):
        assert MATCHER.place_distribution({"hongdae": 0.8, "gangnam": 0.2}, 10) == {
            "hongdae": 8,
            "gangnam": 2,
        }

    def test_all_zero_scores_split_evenly(self):
        scores = {name: 0.0 for name in REGISTRY_ORDER}
        assert MATCHER.place_distribution(scores, 12) == {name: 2 for name in REGISTRY_ORDER}

    def test_even_split_remainder_follows_registry_order(self):
        scores = {name: 0.0 for name in reversed(REGISTRY_ORDER)}
        distribution = MATCHER.place_distribution(scores, 14)
        assert distribution["hongdae"] == 3
        assert distribution["gangnam"] == 3
        assert all(distribution[name] == 2 for name in REGISTRY_ORDER[2:])
        assert sum(distribution.values()) == 14

    @pytest.mark.parametrize("style", ["young art", "trendy hip culture", "luxury shopping tradition"])
    @pytest.mark.parametrize("total", [7, 10, 30, 31])
    def test_sum_within_rounding_tolerance(self, style, total):
        scores = MATCHER.cluster_scores(style)
        distribution = MATCHER.place_distribution(scores, total)
        assert abs(sum(distribution.values()) - total) <= len(scores) - 1

    def test_no_places(self):
        assert MATCHER.place_distribution({"hongdae": 1.0}, 0) == {"hongdae": 0}

    def test_no_scores(self):
        assert MATCHER.place_distribution({}, 10) == {}


# ── Selection ────────────────────────────────────────────────────────────


class TestSelection:
    def test_locate(self):
        assert "hongdae" in MATCHER.locate(37.5563, 126.9234)
        assert MATCHER.locate(35.1796, 129.0756) == []
        assert MATCHER.locate(None, None) == []

    def test_quota_picks_best_then_appends_rest(self):
        okay = Place(name="Hongdae cafe", latitude=37.5560, longitude=126.9230, rating=3.0)
        best = Place(name="Hongdae gallery", latitude=37.5565, longitude=126.9240, rating=5.0)
        gangnam = Place(name="COEX", latitude=37.5120, longitude=127.0590, rating=4.0)
        busan = Place(name="Haeundae", latitude=35.1587, longitude=129.1604, rating=4.8)

        result = MATCHER.select_places(
            [okay, best, gangnam, busan], {"hongdae": 1, "gangnam": 1}
        )
        assert [p.name for p in result] == ["Hongdae gallery", "COEX", "Hongdae cafe", "Haeundae"]

    def test_place_never_selected_twice(self):
        # Jongno and Bukchon overlap around Anguk
        anguk = Place(name="Anguk", latitude=37.5765, longitude=126.9854)
        result = MATCHER.select_places([anguk], {"jongno": 1, "bukchon": 1})
        assert result == [anguk]

    def test_contains_points_mask(self):
        hongdae = CATALOG.get_cluster("hongdae")
        mask = hongdae.contains_points([(37.5563, 126.9234), (35.1796, 129.0756), (37.5600, 126.9250)])
        assert mask.tolist() == [True, False, True]
        assert hongdae.contains_points([]).tolist() == []

    def test_places_without_coordinates_are_appended(self):
        nowhere = Place(name="Unknown stall")
        gallery = Place(name="Hongdae gallery", latitude=37.5565, longitude=126.9240)
        result = MATCHER.select_places([nowhere, gallery], {"hongdae": 1})
        assert result == [gallery, nowhere]

    def test_low_scoring_clusters_are_skipped(self):
        cafe = Place(name="Hongdae cafe", latitude=37.5560, longitude=126.9230)
        coex = Place(name="COEX", latitude=37.5120, longitude=127.0590)

        gated = MATCHER.select_places([cafe, coex], {"gangnam": 1}, scores={"gangnam": 0.1})
        assert gated == [cafe, coex]

        open_ = MATCHER.select_places([cafe, coex], {"gangnam": 1}, scores={"gangnam": 0.5})
        assert open_ == [coex, cafe]


# ── Cluster-aware ranking ────────────────────────────────────────────────


class TestRankWithClusters:
    def test_style_matching_cluster_moves_ahead(self):
        coex = Place(name="COEX", latitude=37.5120, longitude=127.0590, rating=5.0)
        busan = Place(name="Haeundae", latitude=35.1587, longitude=129.1604, rating=4.8)
        gallery = Place(name="Hongdae gallery", latitude=37.5565, longitude=126.9240, rating=4.0)
        prefs = UserPreferences(travel_style=TravelStyle.CULTURAL, trip_days=1)

        plain = rank_places([coex, busan, gallery], prefs)
        assert [r.place.name for r in plain] == ["COEX", "Haeundae", "Hongdae gallery"]

        clustered = MATCHER.rank_with_clusters([coex, busan, gallery], prefs)
        assert [r.place.name for r in clustered] == ["Hongdae gallery", "COEX", "Haeundae"]
        assert {r.place.name: r.score for r in clustered} == {
            r.place.name: r.score for r in plain
        }

    def test_without_style_keeps_ranked_order(self):
        coex = Place(name="COEX", latitude=37.5120, longitude=127.0590, rating=5.0)
        gallery = Place(name="Hongdae gallery", latitude=37.5565, longitude=126.9240, rating=4.0)
        prefs = UserPreferences(trip_days=1)

        result = MATCHER.rank_with_clusters([gallery, coex], prefs)
        assert [r.place.name for r in result] == ["COEX", "Hongdae gallery"]

    def test_empty_input(self):
        assert MATCHER.rank_with_clusters([], UserPreferences()) == []

    def test_every_style_has_a_descriptor(self):
        assert set(STYLE_DESCRIPTORS) == set(TravelStyle)
        scores = MATCHER.cluster_scores(STYLE_DESCRIPTORS[TravelStyle.SHOPPING])
        assert next(iter(scores)) == "gangnam"


def test_custom_catalog_injection():
    tiny = ClusterCatalog([
        Cluster(
            name="haeundae",
            display_name="Haeundae",
            center_lat=35.1587,
            center_lng=129.1604,
            radius_m=1500,
            styles=("beach", "nightlife"),
        ),
    ])
    matcher = ClusterMatcher(tiny)
    assert matcher.cluster_scores("beach holiday") == {"haeundae": 0.5}
    assert matcher.place_distribution({"haeundae": 0.0}, 5) == {"haeundae": 5}
