"""
Tests for sets/venn.py region masks.
"""

import pytest

from sets.venn import (
    Region,
    RegionState,
    compare_masks,
    compute_region_mask_from_expr,
    expression_matches_mask,
    full_mask,
    mask_to_regions,
    region_labels,
    regions_equal,
    regions_for_expression,
)


class TestMasks:
    @pytest.mark.parametrize(
        "expr, mask",
        [("A", 0b1100), ("B", 0b1010), ("A ∩ B", 0b1000), ("A ∪ B", 0b1110), ("(A ∪ B)^c", 0b0001), ("∅", 0)],
    )
    def test_two_sets(self, expr, mask):
        assert compute_region_mask_from_expr(expr, ["A", "B"]) == mask

    def test_three_sets(self):
        assert compute_region_mask_from_expr("A ∖ B", ["A", "B", "C"]) == 0b00110000
        assert compute_region_mask_from_expr("Ω", ["A", "B", "C"]) == full_mask(["A", "B", "C"]) == 255

    def test_unlisted_set_counts_as_empty(self):
        assert compute_region_mask_from_expr("A ∪ C", ["A", "B"]) == 0b1100

    def test_labels(self):
        assert region_labels(["A", "B"]) == ("outside", "B", "A", "A∩B")
        assert region_labels(["A", "B", "C"]) == (
            "outside", "C", "B", "B∩C", "A", "A∩C", "A∩B", "A∩B∩C",
        )

    def test_mask_to_regions(self):
        assert mask_to_regions(0b00110000, ["A", "B", "C"]) == ["A", "A∩C"]

    @pytest.mark.parametrize("sets", [["A"], ["A", "A"], ["A", "D"], ["A", "B", "C", "D"]])
    def test_bad_set_lists(self, sets):
        with pytest.raises(ValueError):
            compute_region_mask_from_expr("A", sets)

    def test_matches(self):
        assert expression_matches_mask("A Δ B", 0b0110, ["A", "B"])
        assert not expression_matches_mask("A", 0b0110, ["A", "B"])


class TestFeedback:
    def test_compare_masks(self):
        feedback = compare_masks(0b1100, 0b1010, ["A", "B"])
        states = [f.state for f in feedback]
        assert states == [RegionState.OK, RegionState.MISSING, RegionState.EXTRA, RegionState.OK]
        assert feedback[3].active


class TestNamedRegions:
    def test_regions_for_expression(self):
        assert regions_for_expression("A") == [Region.AB, Region.A_ONLY]
        assert regions_for_expression("(A ∪ B)^c") == [Region.OUTSIDE]

    def test_regions_equal_ignores_order(self):
        assert regions_equal([Region.AB, Region.A_ONLY], [Region.A_ONLY, Region.AB])
        assert not regions_equal([Region.AB], [Region.AB, Region.OUTSIDE])
