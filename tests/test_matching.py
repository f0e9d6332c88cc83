"""Unit tests for the matching engine.

Tests the ListingMatcher for:
- Two-stage manufacturer-then-title narrowing
- Specificity-first ordering and claiming
- One listing claimed by at most one product
- Empty keyword policies
- Deterministic results and run summaries
"""

import logging

import pytest

from listing_matcher.matching import (
    EmptyKeywordPolicy,
    ListingMatcher,
    MatchSummary,
    ProductMatch,
    match_listings_with_products,
    summarize,
)
from tests.helpers import make_listing, make_product


def names(results):
    return [result.product_name for result in results]


def by_name(results):
    return {result.product_name: result.listings for result in results}


@pytest.fixture
def camera_listings():
    return [
        make_listing("Canon PowerShot SD980 IS 12MP Digital Camera", "Canon Canada"),
        make_listing("Canon PowerShot SD980 12MP (Silver)", "Canon"),
        make_listing("Sony Cyber-shot DSC-W310 12.1MP", "Sony"),
        make_listing("Canon PowerShot SD980 compatible battery", "Duracell"),
    ]


@pytest.fixture
def camera_products():
    return [
        make_product("Canon_PowerShot_SD980", "Canon", "PowerShot", "SD980"),
        make_product("Sony_Cyber-shot_DSC-W310", "Sony", "Cyber-shot", "DSC-W310"),
        make_product("Canon_PowerShot_SD980_IS", "Canon", "PowerShot", "SD980 IS"),
    ]


class TestWorkedExamples:
    """The two reference scenarios for the matcher."""

    def test_single_listing_matches_product(self):
        listing = make_listing("Sony Camera", "Sony")
        product = make_product("Sony_Camera", manufacturer="Sony", family="Camera")

        matcher = ListingMatcher(["and"])
        profile = matcher.product_keywords(product)
        assert profile.title_keywords == {"sony", "camera"}
        assert profile.mfg_keywords == {"sony"}

        results = matcher.match([listing], [product])
        assert len(results) == 1
        assert results[0].product_name == "Sony_Camera"
        assert results[0].listings == [listing]

    def test_less_specific_product_gets_unclaimed_listing(self):
        sony_only = make_listing("Sony", "Sony")
        sony_camera = make_listing("Sony Camera", "Sony")
        generic = make_product("Sony", manufacturer="Sony")
        camera = make_product("Sony_Camera", manufacturer="Sony", family="Camera")

        results = ListingMatcher().match([sony_only, sony_camera], [generic, camera])

        assert names(results) == ["Sony_Camera", "Sony"]
        matched = by_name(results)
        assert matched["Sony_Camera"] == [sony_camera]
        assert matched["Sony"] == [sony_only]


class TestTwoStageNarrowing:
    """Tests for manufacturer-then-title narrowing."""

    def test_manufacturer_stage_filters_accessories(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        claimed = [listing for result in results for listing in result.listings]
        assert camera_listings[3] not in claimed

    def test_manufacturer_keywords_found_in_title_index(self):
        listing = make_listing("PowerShot SD980", "Canon")
        product = make_product("Canon_PowerShot_SD980", "Canon", "PowerShot", "SD980")
        results = ListingMatcher().match([listing], [product])
        assert results[0].listings == [listing]

    def test_manufacturer_field_may_contain_extra_words(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        assert by_name(results)["Canon_PowerShot_SD980_IS"] == [camera_listings[0]]

    def test_missing_title_keyword_prevents_match(self):
        listing = make_listing("Canon PowerShot", "Canon")
        product = make_product("Canon_PowerShot_SD980", "Canon", "PowerShot", "SD980")
        assert ListingMatcher().match([listing], [product])[0].listings == []

    def test_stop_words_ignored_in_both_stages(self):
        listing = make_listing("Appareil photo de Canon PowerShot SD980", "Canon")
        product = make_product("Canon_PowerShot_SD980", "Canon", "PowerShot de", "SD980")
        results = ListingMatcher(["de"]).match([listing], [product])
        assert results[0].listings == [listing]


class TestSpecificityOrdering:
    """Tests for most-specific-first claiming."""

    def test_products_sorted_by_title_keyword_count(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        assert names(results) == [
            "Canon_PowerShot_SD980_IS",
            "Canon_PowerShot_SD980",
            "Sony_Cyber-shot_DSC-W310",
        ]

    def test_more_specific_product_claims_shared_listing(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        matched = by_name(results)
        assert matched["Canon_PowerShot_SD980_IS"] == [camera_listings[0]]
        assert camera_listings[0] not in matched["Canon_PowerShot_SD980"]
        assert matched["Canon_PowerShot_SD980"] == [camera_listings[1]]

    def test_ties_keep_input_order(self):
        listing = make_listing("Nikon D90", "Nikon")
        first = make_product("Nikon_D90_a", "Nikon", model="D90")
        second = make_product("Nikon_D90_b", "Nikon", model="D90")

        results = ListingMatcher().match([listing], [first, second])

        assert names(results) == ["Nikon_D90_a", "Nikon_D90_b"]
        assert results[0].listings == [listing]
        assert results[1].listings == []

    def test_every_product_reported_once(self, camera_listings, camera_products):
        unmatched = make_product("Kodak_Z981", "Kodak", "EasyShare", "Z981")
        results = ListingMatcher().match(camera_listings, camera_products + [unmatched])
        assert sorted(names(results)) == sorted(
            [product.product_name for product in camera_products + [unmatched]]
        )
        assert by_name(results)["Kodak_Z981"] == []


class TestClaimInvariant:
    """A listing is claimed by at most one product."""

    def test_partition_property(self):
        listings = [
            make_listing(f"{brand} {family} {model} extra{i}", brand)
            for i, (brand, family, model) in enumerate(
                [
                    ("Sony", "Cyber-shot", "W310"),
                    ("Sony", "Cyber-shot", "W310"),
                    ("Sony", "Alpha", "A200"),
                    ("Canon", "PowerShot", "SD980"),
                    ("Canon", "IXUS", "SD980"),
                    ("Canon", "PowerShot", "A480"),
                ]
            )
        ]
        products = [
            make_product("Sony", "Sony"),
            make_product("Sony_Cyber-shot", "Sony", "Cyber-shot"),
            make_product("Sony_Cyber-shot_W310", "Sony", "Cyber-shot", "W310"),
            make_product("Canon_SD980", "Canon", model="SD980"),
            make_product("Canon_PowerShot", "Canon", "PowerShot"),
            make_product("Everything"),
        ]

        results = ListingMatcher().match(listings, products)

        claimed = [listing for result in results for listing in result.listings]
        assert len(claimed) == len({id(listing) for listing in claimed})
        assert all(any(listing is item for item in listings) for listing in claimed)

    def test_identical_listings_are_distinct(self):
        first = make_listing("Sony Camera", "Sony")
        second = make_listing("Sony Camera", "Sony")
        product = make_product("Sony_Camera", "Sony", "Camera")

        results = ListingMatcher().match([first, second], [product])

        assert len(results[0].listings) == 2
        assert results[0].listings[0] is first
        assert results[0].listings[1] is second


class TestEmptyKeywordPolicy:
    """Tests for products without manufacturer or title keywords."""

    @pytest.fixture
    def listings(self):
        return [
            make_listing("Leica M9 Camera", "Leica"),
            make_listing("Camera strap", "Generic"),
        ]

    def test_match_all_without_manufacturer(self, listings):
        product = make_product("Any_Camera", family="Camera")
        results = ListingMatcher().match(listings, [product])
        assert results[0].listings == listings

    def test_match_all_without_any_keywords_claims_remaining(self, listings):
        specific = make_product("Leica_M9", "Leica", model="M9")
        empty = make_product("Unknown")

        results = ListingMatcher().match(listings, [empty, specific])

        assert names(results) == ["Leica_M9", "Unknown"]
        assert results[0].listings == [listings[0]]
        assert results[1].listings == [listings[1]]

    def test_match_none(self, listings):
        product = make_product("Any_Camera", family="Camera")
        empty = make_product("Unknown")
        matcher = ListingMatcher(empty_keyword_policy="match_none")

        results = matcher.match(listings, [product, empty])

        assert all(result.listings == [] for result in results)

    def test_match_none_keeps_complete_products(self, listings):
        product = make_product("Leica_M9", "Leica", model="M9")
        matcher = ListingMatcher(empty_keyword_policy=EmptyKeywordPolicy.MATCH_NONE)
        assert matcher.match(listings, [product])[0].listings == [listings[0]]

    def test_invalid_policy_rejected(self):
        with pytest.raises(ValueError):
            ListingMatcher(empty_keyword_policy="sometimes")


class TestDeterminism:
    """Identical inputs produce identical results."""

    def test_two_runs_identical(self, camera_listings, camera_products):
        first = ListingMatcher(["and"]).match(camera_listings, camera_products)
        second = ListingMatcher(["and"]).match(camera_listings, camera_products)

        assert names(first) == names(second)
        for a, b in zip(first, second):
            assert [id(listing) for listing in a.listings] == [id(listing) for listing in b.listings]

    def test_discovery_order_follows_listing_order(self):
        listings = [make_listing(f"Sony Camera {i}", "Sony") for i in range(5)]
        product = make_product("Sony_Camera", "Sony", "Camera")
        results = ListingMatcher().match(listings, [product])
        assert results[0].listings == listings

    def test_accepts_iterators(self, camera_listings, camera_products):
        results = ListingMatcher().match(iter(camera_listings), iter(camera_products))
        assert len(results) == 3


class TestResultsAndSummary:
    """Tests for ProductMatch, MatchSummary and helpers."""

    def test_to_dict_uses_original_records(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        payload = results[0].to_dict()
        assert payload["product_name"] == "Canon_PowerShot_SD980_IS"
        assert payload["listings"][0] is camera_listings[0].record

    def test_product_attached_to_result(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        assert results[0].product is camera_products[2]

    def test_summarize(self, camera_listings, camera_products):
        results = ListingMatcher().match(camera_listings, camera_products)
        summary = summarize(results, camera_listings)
        assert summary == MatchSummary(
            product_count=3,
            listing_count=4,
            matched_product_count=3,
            claimed_listing_count=3,
        )
        assert summary.unclaimed_listing_count == 1

    def test_summary_log_fields(self):
        summary = MatchSummary(product_count=2, listing_count=5, matched_product_count=1, claimed_listing_count=3)
        assert summary.as_log_fields()["unclaimed_listing_count"] == 2

    def test_product_match_defaults(self):
        result = ProductMatch(product_name="Empty")
        assert result.listing_count == 0
        assert result.to_dict() == {"product_name": "Empty", "listings": []}

    def test_module_level_function(self):
        listing = make_listing("Sony and Camera", "Sony")
        product = make_product("Sony_Camera", "Sony", "Camera")
        results = match_listings_with_products([listing], [product], stop_words=["and"])
        assert results[0].listings == [listing]

    def test_no_products(self, camera_listings):
        assert ListingMatcher().match(camera_listings, []) == []

    def test_no_listings(self, camera_products):
        results = ListingMatcher().match([], camera_products)
        assert all(result.listings == [] for result in results)

    def test_completion_logged(self, caplog, camera_listings, camera_products):
        caplog.set_level(logging.INFO, logger="listing_matcher")
        ListingMatcher().match(camera_listings, camera_products)
        events = [getattr(record, "event", None) for record in caplog.records]
        assert "matching.completed" in events
        record = next(r for r in caplog.records if getattr(r, "event", None) == "matching.completed")
        assert record.claimed_listing_count == 3
        assert record.component == "matching"
