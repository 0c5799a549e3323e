"""Tests for composer.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import random

import pytest

from wwyd.core.group import GroupType
from wwyd.core.restrictions import HandShape, Restrictions, ShapeGroup, TileRequirement
from wwyd.core.tile import TileSuit, WindDirection
from wwyd.generator.composer import COMPLETE_HAND_SIZE, HandComposer
from wwyd.generator.errors import GenerationInfeasible
from wwyd.generator.universe import resolve_universe
from wwyd.rules.shanten import ShantenEvaluator


CHINITSU = Restrictions(honor_tiles=TileRequirement.FORBIDDEN,
                        suits=frozenset({TileSuit.SOU}),
                        shapes_allowed=frozenset({GroupType.RUN, GroupType.PAIR}))

HONOR_PAIRS = Restrictions(suit_tiles=TileRequirement.FORBIDDEN,
                           hand_shape=HandShape.IRREGULAR,
                           irregular_shape=(ShapeGroup(GroupType.PAIR, 7),))


def compose(restrictions, seed=0):
    universe = resolve_universe(restrictions)
    composer = HandComposer(restrictions, universe, random.Random(seed))
    return composer.compose(), universe


class TestHandComposer:
    def test_single_suit_runs(self):
        composed, universe = compose(CHINITSU)
        assert len(composed.tiles) == COMPLETE_HAND_SIZE
        assert all(t.suit == TileSuit.SOU for t in composed.tiles)
        assert [g.group_type for g in composed.groups] == [GroupType.RUN] * 4 + [GroupType.PAIR]
        assert composed.shape == HandShape.REGULAR
        evaluator = ShantenEvaluator.for_restrictions(CHINITSU, universe)
        assert evaluator.shanten(composed.tiles) == -1

    def test_pool_accounts_for_every_tile(self):
        composed, _ = compose(Restrictions())
        assert composed.pool.drawn == COMPLETE_HAND_SIZE + len(composed.reserved)

    def test_honor_pairs(self):
        composed, _ = compose(HONOR_PAIRS)
        assert composed.shape == HandShape.IRREGULAR
        assert all(t.is_honor for t in composed.tiles)
        assert len(set(composed.tiles)) == 7

    def test_quads_reserve_tiles(self):
        restrictions = Restrictions(shapes_allowed=frozenset({GroupType.QUAD, GroupType.PAIR}))
        composed, _ = compose(restrictions)
        assert len(composed.tiles) == COMPLETE_HAND_SIZE
        assert len(composed.reserved) == 4
        assert composed.pool.drawn == 18

    def test_required_honors(self):
        restrictions = Restrictions(honor_tiles=TileRequirement.REQUIRED)
        for seed in range(5):
            composed, _ = compose(restrictions, seed)
            assert any(t.is_honor for t in composed.tiles)

    def test_both_shapes(self):
        restrictions = Restrictions(hand_shape=HandShape.BOTH,
                                    irregular_shape=(ShapeGroup(GroupType.PAIR, 7),))
        shapes = {compose(restrictions, seed)[0].shape for seed in range(20)}
        assert shapes == {HandShape.REGULAR, HandShape.IRREGULAR}

    def test_too_few_tiles(self):
        restrictions = Restrictions(suit_tiles=TileRequirement.FORBIDDEN,
                                    wind_directions=frozenset({WindDirection.EAST}),
                                    dragon_colors=frozenset())
        with pytest.raises(GenerationInfeasible):
            compose(restrictions)

    def test_attempts_run_out(self):
        """Four kinds cannot hold seven distinct pairs."""
        restrictions = Restrictions(suit_tiles=TileRequirement.FORBIDDEN,
                                    wind_directions=frozenset(WindDirection),
                                    dragon_colors=frozenset(),
                                    hand_shape=HandShape.IRREGULAR,
                                    irregular_shape=(ShapeGroup(GroupType.PAIR, 7),))
        universe = resolve_universe(restrictions)
        composer = HandComposer(restrictions, universe, random.Random(0), max_attempts=3)
        with pytest.raises(GenerationInfeasible):
            composer.compose()

    def test_seeded(self):
        first, _ = compose(Restrictions(), seed=11)
        second, _ = compose(Restrictions(), seed=11)
        assert first.tiles == second.tiles

    def test_narrowed_shapes(self):
        restrictions = Restrictions(shapes_allowed=frozenset({GroupType.TRIPLET}),
                                    hand_shape=HandShape.BOTH,
                                    irregular_shape=(ShapeGroup(GroupType.PAIR, 7),))
        universe = resolve_universe(restrictions)
        composer = HandComposer(restrictions, universe, random.Random(0),
                                shapes=[HandShape.IRREGULAR])
        for _ in range(5):
            assert composer.compose().shape == HandShape.IRREGULAR

    def test_needs_a_shape(self):
        universe = resolve_universe(Restrictions())
        with pytest.raises(ValueError):
            HandComposer(Restrictions(), universe, random.Random(0), shapes=[])
