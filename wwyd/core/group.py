"""Structural group (面子/雀頭) data structures for hand assembly."""

from dataclasses import dataclass
from enum import Enum

from .tile import Tile


class GroupType(Enum):
    RUN = "shuntsu"      # 順子
    TRIPLET = "koutsu"   # 刻子
    QUAD = "kantsu"      # 槓子
    PAIR = "jantou"      # 雀頭
    SINGLE = "shinguru"  # 単騎

    @property
    def size(self) -> int:
        """Physical tiles taken from the pool."""
        return _GROUP_SIZES[self]

    @property
    def hand_size(self) -> int:
        """Tiles the group occupies in a concealed hand (a quad counts as three)."""
        return 3 if self is GroupType.QUAD else self.size

    @property
    def is_identical(self) -> bool:
        """Whether every tile of the group shares one shape key."""
        return self is not GroupType.RUN


_GROUP_SIZES = {
    GroupType.RUN: 3,
    GroupType.TRIPLET: 3,
    GroupType.QUAD: 4,
    GroupType.PAIR: 2,
    GroupType.SINGLE: 1,
}

BODY_GROUP_TYPES = (GroupType.RUN, GroupType.TRIPLET, GroupType.QUAD)


@dataclass(frozen=True)
class StructuralGroup:
    """A group drawn from the pool while assembling a hand.

    Attributes:
        group_type: Type of group
        tiles: All tiles in the group, sorted
    """
    group_type: GroupType
    tiles: tuple  # tuple of Tile

    @property
    def hand_tiles(self) -> tuple:
        """Tiles that go into the concealed hand."""
        return self.tiles[:self.group_type.hand_size]

    @property
    def reserved_tiles(self) -> tuple:
        """Tiles set aside from the hand (the fourth tile of a quad)."""
        return self.tiles[self.group_type.hand_size:]

    @property
    def tile_index34(self) -> int:
        """The 34 index of the group's lowest tile."""
        return self.tiles[0].index34

    def __str__(self):
        return "".join(t.name for t in self.tiles)


def make_group(group_type: GroupType, tiles) -> StructuralGroup:
    """Build a group, checking the tiles actually form that shape."""
    tiles = tuple(sorted(tiles))
    if len(tiles) != group_type.size:
        raise ValueError(f"{group_type.value} needs {group_type.size} tiles, got {len(tiles)}")
    keys = [t.index34 for t in tiles]
    if group_type.is_identical:
        if len(set(keys)) != 1:
            raise ValueError(f"{group_type.value} tiles must share one kind: {tiles}")
    else:
        first: Tile = tiles[0]
        if (first.is_honor or keys != [keys[0], keys[0] + 1, keys[0] + 2]
                or first.number > 7):
            raise ValueError(f"not a run: {tiles}")
    return StructuralGroup(group_type, tiles)
