"""Property-based tests for the tag catalog.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tradejournal.analysis.catalog import (
    CATALOG,
    STRENGTH_TAG_SET,
    STRENGTH_TAGS,
    VALID_SEVERITIES,
    WEAKNESS_TAG_SET,
    WEAKNESS_TAGS,
    family_of,
    get_definition,
    is_known_tag,
    severity_of,
)


class TestCatalogPartition:
    """
    **Feature: trade-journal, Property 1: Strength/Weakness Partition**

    *For any* catalog tag, it belongs to exactly one family.
    """

    def test_families_are_disjoint(self):
        assert STRENGTH_TAG_SET.isdisjoint(WEAKNESS_TAG_SET)

    def test_families_cover_catalog(self):
        assert STRENGTH_TAG_SET | WEAKNESS_TAG_SET == set(CATALOG)

    def test_catalog_sizes(self):
        assert len(STRENGTH_TAGS) == 7
        assert len(WEAKNESS_TAGS) == 9

    @given(st.sampled_from(sorted(CATALOG)))
    def test_family_matches_definition(self, tag: str):
        assert family_of(tag) == get_definition(tag).family


class TestCatalogSeverity:
    """
    **Feature: trade-journal, Property 2: Severity Mapping Totality**

    *For any* catalog tag, a fixed severity from low/med/high exists.
    """

    @given(st.sampled_from(sorted(CATALOG)))
    def test_every_tag_has_valid_severity(self, tag: str):
        assert severity_of(tag) in VALID_SEVERITIES

    @pytest.mark.parametrize("tag,severity", [
        ("patience_confirmation", "high"),
        ("hard_stop_respected", "high"),
        ("base_hit_scalping", "med"),
        ("mnq_scaling", "low"),
        ("premature_breakeven", "high"),
        ("chasing_early_entry", "high"),
        ("overtrading", "med"),
        ("process_error", "low"),
    ])
    def test_known_severities(self, tag: str, severity: str):
        assert severity_of(tag) == severity

    @given(st.text(max_size=30).filter(lambda name: name not in CATALOG))
    def test_unknown_tags(self, name: str):
        assert not is_known_tag(name)
        assert family_of(name) is None
        assert severity_of(name) is None
        assert get_definition(name) is None


class TestCatalogImmutability:
    """
    **Feature: trade-journal, Property 3: Catalog Is Read-Only**
    """

    def test_catalog_cannot_be_modified(self):
        with pytest.raises(TypeError):
            CATALOG["new_tag"] = CATALOG["overtrading"]

    def test_definitions_are_frozen(self):
        definition = CATALOG["overtrading"]
        with pytest.raises(Exception):
            definition.severity = "low"

    def test_trigger_confidences_in_range(self):
        for definition in CATALOG.values():
            assert definition.triggers
            for group in definition.triggers:
                assert 0 < group.confidence <= 1
                assert group.keywords
