"""Tests for shanten.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from wwyd.core.group import GroupType
from wwyd.core.restrictions import HandShape, Restrictions, ShapeGroup
from wwyd.core.tile import make_tiles_from_string, tiles_to_34_array
from wwyd.generator.universe import resolve_universe
from wwyd.rules.shanten import (
    ShantenEvaluator, CHIITOI_GROUPS, KOKUSHI_GROUPS,
    shanten, shanten_standard, shanten_chiitoi, shanten_kokushi,
)


def make_34(tiles_str):
    """Helper: create 34 array from shorthand."""
    return tiles_to_34_array(make_tiles_from_string(tiles_str))


class TestShanten:
    def test_agari(self):
        """Complete hand should have shanten -1."""
        assert shanten(make_34("123m456p789s東東東南南")) == -1

    def test_tenpai(self):
        """One tile away from win = shanten 0."""
        assert shanten(make_34("123m456p789s東東東南")) == 0

    def test_tenpai_with_melds(self):
        """Ten closed tiles need only three sets."""
        assert shanten(make_34("123m456p789s東")) == 0

    def test_iishanten(self):
        """Two tiles away = shanten 1."""
        assert shanten(make_34("123m456p78s99s東東南")) == 1

    def test_ryanshanten(self):
        assert shanten_standard(make_34("123m456p78s東東南西北")) == 2

    def test_isolated_tiles(self):
        """Thirteen unrelated tiles are eight away from tenpai."""
        assert shanten_standard(make_34("147m258p369s東南西白")) == 8

    def test_chiitoi_tenpai(self):
        """Seven pairs tenpai."""
        arr = make_34("1199m1199p1199s東")
        assert shanten_chiitoi(arr) == 0
        assert shanten(arr) == 0

    def test_chiitoi_four_copies_count_once(self):
        assert shanten_chiitoi(make_34("1111m22334455m6m")) == 2

    def test_kokushi_tenpai(self):
        assert shanten_kokushi(make_34("19m19p19s東南西北白發中")) == 0

    def test_kokushi_complete(self):
        assert shanten_kokushi(make_34("119m19p19s東南西北白發中")) == -1

    def test_irregular_not_applicable(self):
        assert shanten_chiitoi(make_34("123m456p789s東")) == 99
        assert shanten_kokushi(make_34("19m")) == 99


class TestRestrictedEvaluator:
    def test_same_as_unrestricted_by_default(self):
        evaluator = ShantenEvaluator()
        arr = make_34("123m456p78s99s東東南")
        assert evaluator.shanten_34(arr) == shanten_standard(arr)

    def test_triplets_not_allowed(self):
        """Without koutsu an honor triplet is dead weight."""
        tiles = make_tiles_from_string("123m456m789m東東東南南")
        assert ShantenEvaluator().shanten(tiles) == -1
        assert ShantenEvaluator(allow_triplets=False).shanten(tiles) == 2

    def test_pair_is_not_a_partial_without_triplets(self):
        tiles = make_tiles_from_string("2345m5m456p789s11s")
        assert ShantenEvaluator().shanten(tiles) == 0
        assert ShantenEvaluator(allow_triplets=False).shanten(tiles) == 1

    def test_chiitoi_only(self):
        evaluator = ShantenEvaluator(regular=False, irregular_groups=CHIITOI_GROUPS)
        # A complete regular hand is far from seven pairs
        assert evaluator.shanten(make_tiles_from_string("123m456p789s東東東南南")) == 4
        assert evaluator.shanten(make_tiles_from_string("1199m1199p1199s東東")) == -1

    def test_honor_pairs_only(self):
        """Seven pairs drawn from the seven honor kinds."""
        evaluator = ShantenEvaluator(shape_keys=range(27, 34), regular=False,
                                     irregular_groups=CHIITOI_GROUPS)
        assert evaluator.shanten(make_tiles_from_string("東東南南西西北北白白發發中")) == 0

    def test_kokushi_groups(self):
        evaluator = ShantenEvaluator(shape_keys=[0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33],
                                     regular=False, irregular_groups=KOKUSHI_GROUPS)
        assert evaluator.shanten(make_tiles_from_string("19m19p19s東南西北白發中")) == 0

    def test_regular_or_irregular(self):
        evaluator = ShantenEvaluator(irregular_groups=CHIITOI_GROUPS)
        tiles = make_tiles_from_string("1199m1199p1199s東")
        assert evaluator.shanten(tiles) == 0
        assert evaluator.regular_shanten(tiles_to_34_array(tiles)) > 0

    def test_needs_a_target_form(self):
        with pytest.raises(ValueError):
            ShantenEvaluator(regular=False)

    def test_cached(self):
        evaluator = ShantenEvaluator()
        tiles = make_tiles_from_string("123m456p78s99s東東南")
        first = evaluator.shanten(tiles)
        assert evaluator.shanten(list(reversed(tiles))) == first

    def test_twelve_tiles_on_same_scale(self):
        """Twelve tiles sit one step further from a complete hand than thirteen."""
        evaluator = ShantenEvaluator()
        assert evaluator.shanten(make_tiles_from_string("123m456p789s東東南南")) == 0
        assert evaluator.shanten(make_tiles_from_string("123m456p789s東東南")) == 1

    def test_quad_group_size(self):
        evaluator = ShantenEvaluator(regular=False, irregular_groups=(GroupType.QUAD,) * 4
                                     + (GroupType.PAIR,))
        assert evaluator.shanten(make_tiles_from_string("111m222m333m444m55m")) == -1

    def test_for_restrictions_narrowed_shapes(self):
        restrictions = Restrictions(hand_shape=HandShape.BOTH,
                                    irregular_shape=(ShapeGroup(GroupType.PAIR, 7),))
        universe = resolve_universe(restrictions)
        pairs = make_tiles_from_string("1199m1199p1199s東")
        either = ShantenEvaluator.for_restrictions(restrictions, universe)
        assert either.shanten(pairs) == 0
        regular_only = ShantenEvaluator.for_restrictions(restrictions, universe,
                                                         [HandShape.REGULAR])
        assert regular_only.shanten(pairs) > 0
