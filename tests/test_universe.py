"""Tests for universe.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from wwyd.core.restrictions import Restrictions, TileRequirement
from wwyd.core.tile import Tile, TileSuit, WindDirection, DragonColor
from wwyd.generator.errors import RestrictionConflict
from wwyd.generator.universe import resolve_universe


class TestResolveUniverse:
    def test_default(self):
        universe = resolve_universe(Restrictions())
        assert len(universe.suited) == 27
        assert len(universe.honors) == 7
        assert len(universe.shape_keys) == 34
        assert universe.total_copies == 136

    def test_red_fives_are_extra_identities(self):
        universe = resolve_universe(Restrictions(red_tiles=True))
        assert len(universe.tiles) == 37
        assert universe.total_copies == 148
        assert universe.variants_by_key()[4] == (Tile(TileSuit.MAN, 5),
                                                 Tile(TileSuit.MAN, 5, is_red=True))
        # Shape keys are unchanged
        assert len(universe.shape_keys) == 34

    def test_red_fives_need_five(self):
        universe = resolve_universe(Restrictions(red_tiles=True,
                                                 numbers=frozenset({1, 9})))
        assert not any(t.is_red for t in universe.tiles)

    def test_honors_forbidden(self):
        universe = resolve_universe(Restrictions(honor_tiles=TileRequirement.FORBIDDEN))
        assert universe.honors == frozenset()
        assert all(t.is_number_tile for t in universe.tiles)

    def test_honor_subsets(self):
        universe = resolve_universe(Restrictions(
            suit_tiles=TileRequirement.FORBIDDEN,
            wind_directions=frozenset({WindDirection.EAST}),
            dragon_colors=frozenset({DragonColor.RED})))
        assert set(universe.tiles) == {Tile.wind(WindDirection.EAST), Tile.dragon(DragonColor.RED)}

    def test_suit_and_number_subsets(self):
        universe = resolve_universe(Restrictions(
            honor_tiles=TileRequirement.FORBIDDEN,
            suits=frozenset({TileSuit.SOU}), numbers=frozenset({1, 9})))
        assert [t.name for t in universe.tiles] == ["1s", "9s"]

    def test_everything_forbidden(self):
        with pytest.raises(RestrictionConflict):
            resolve_universe(Restrictions(honor_tiles=TileRequirement.FORBIDDEN,
                                          suit_tiles=TileRequirement.FORBIDDEN))

    def test_empty_allow_sets(self):
        with pytest.raises(RestrictionConflict):
            resolve_universe(Restrictions(suit_tiles=TileRequirement.FORBIDDEN,
                                          wind_directions=frozenset(),
                                          dragon_colors=frozenset()))

    def test_number_out_of_range(self):
        with pytest.raises(RestrictionConflict):
            resolve_universe(Restrictions(numbers=frozenset({0, 1})))

    def test_new_pool(self):
        universe = resolve_universe(Restrictions(red_tiles=True))
        pool = universe.new_pool()
        assert pool.total_remaining() == universe.total_copies
        assert Tile(TileSuit.PIN, 5, is_red=True) in universe
        assert Tile(TileSuit.PIN, 5, is_red=True) in pool

    def test_variants_by_key(self):
        universe = resolve_universe(Restrictions(red_tiles=True))
        by_key = universe.variants_by_key()
        assert len(by_key) == 34
        assert len(by_key[13]) == 2
        assert len(by_key[0]) == 1
