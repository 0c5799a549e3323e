"""Tests for group.py"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from wwyd.core.group import GroupType, BODY_GROUP_TYPES, make_group
from wwyd.core.tile import make_tiles_from_string


class TestGroupType:
    def test_sizes(self):
        assert GroupType.RUN.size == 3
        assert GroupType.TRIPLET.size == 3
        assert GroupType.QUAD.size == 4
        assert GroupType.PAIR.size == 2
        assert GroupType.SINGLE.size == 1

    def test_quad_hand_size(self):
        """A quad takes four tiles but only three stay in hand."""
        assert GroupType.QUAD.hand_size == 3
        assert GroupType.PAIR.hand_size == 2

    def test_body_types(self):
        assert BODY_GROUP_TYPES == (GroupType.RUN, GroupType.TRIPLET, GroupType.QUAD)

    def test_identical(self):
        assert not GroupType.RUN.is_identical
        assert GroupType.SINGLE.is_identical


class TestMakeGroup:
    def test_run(self):
        group = make_group(GroupType.RUN, make_tiles_from_string("645p"))
        assert str(group) == "4p5p6p"
        assert group.tile_index34 == 12

    def test_run_with_red_five(self):
        group = make_group(GroupType.RUN, make_tiles_from_string("406s"))
        assert any(t.is_red for t in group.tiles)

    def test_invalid_run(self):
        with pytest.raises(ValueError):
            make_group(GroupType.RUN, make_tiles_from_string("124m"))
        with pytest.raises(ValueError):
            make_group(GroupType.RUN, make_tiles_from_string("東南西"))
        with pytest.raises(ValueError):
            make_group(GroupType.RUN, make_tiles_from_string("89m1p"))

    def test_triplet_mixed_red(self):
        group = make_group(GroupType.TRIPLET, make_tiles_from_string("505m"))
        assert any(t.is_red for t in group.tiles)
        assert len(group.hand_tiles) == 3
        assert group.reserved_tiles == ()

    def test_quad_reserves_one_tile(self):
        group = make_group(GroupType.QUAD, make_tiles_from_string("白白白白"))
        assert len(group.hand_tiles) == 3
        assert len(group.reserved_tiles) == 1

    def test_wrong_size(self):
        with pytest.raises(ValueError):
            make_group(GroupType.PAIR, make_tiles_from_string("111m"))

    def test_identical_mismatch(self):
        with pytest.raises(ValueError):
            make_group(GroupType.PAIR, make_tiles_from_string("12m"))
