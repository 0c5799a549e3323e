"""Tests for pool.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from wwyd.core.pool import TilePool, PoolInvariantError, MAX_COPIES
from wwyd.core.tile import DragonColor, Tile, TileSuit, WindDirection


FIVE_MAN = Tile(TileSuit.MAN, 5)
RED_FIVE_MAN = Tile(TileSuit.MAN, 5, is_red=True)

ALL_KINDS = ([Tile(suit, n) for suit in (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)
              for n in range(1, 10)]
             + [Tile.wind(w) for w in WindDirection]
             + [Tile.dragon(d) for d in DragonColor])


class TestTilePool:
    def test_full_pool(self):
        pool = TilePool(ALL_KINDS)
        assert pool.total_remaining() == 136
        assert pool.initial_total == 136
        assert pool.drawn == 0
        assert len(pool) == 34

    def test_draw(self):
        pool = TilePool(ALL_KINDS)
        assert pool.draw(FIVE_MAN)
        assert pool.remaining(FIVE_MAN) == 3
        assert pool.drawn == 1

    def test_draw_until_empty(self):
        """Drawing an exhausted tile fails and leaves the pool unchanged."""
        pool = TilePool([FIVE_MAN])
        for _ in range(MAX_COPIES):
            assert pool.draw(FIVE_MAN)
        assert not pool.draw(FIVE_MAN)
        assert pool.remaining(FIVE_MAN) == 0
        assert pool.total_remaining() == 0

    def test_draw_unknown_tile(self):
        pool = TilePool([FIVE_MAN])
        assert not pool.draw(RED_FIVE_MAN)
        assert pool.total_remaining() == 4

    def test_return(self):
        pool = TilePool([FIVE_MAN])
        pool.draw(FIVE_MAN)
        pool.return_tile(FIVE_MAN)
        assert pool.remaining(FIVE_MAN) == 4

    def test_return_over_limit(self):
        pool = TilePool([FIVE_MAN])
        with pytest.raises(PoolInvariantError):
            pool.return_tile(FIVE_MAN)
        assert pool.remaining(FIVE_MAN) == 4

    def test_return_unknown_tile(self):
        pool = TilePool([FIVE_MAN])
        with pytest.raises(PoolInvariantError):
            pool.return_tile(RED_FIVE_MAN)

    def test_red_five_has_own_copies(self):
        pool = TilePool([FIVE_MAN, RED_FIVE_MAN])
        assert pool.remaining(RED_FIVE_MAN) == 4
        assert pool.remaining_for_key(4) == 8

    def test_available(self):
        pool = TilePool([RED_FIVE_MAN, FIVE_MAN])
        for _ in range(4):
            pool.draw(FIVE_MAN)
        assert pool.available() == [RED_FIVE_MAN]
        assert pool.available([FIVE_MAN]) == []

    def test_copies_out_of_range(self):
        with pytest.raises(PoolInvariantError):
            TilePool([FIVE_MAN], copies=5)
        assert TilePool([FIVE_MAN], copies=1).remaining(FIVE_MAN) == 1
