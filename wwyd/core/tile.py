"""Tile identity with a 34-kind shape key and red five support."""

from enum import IntEnum
from typing import List, Optional


class TileSuit(IntEnum):
    MAN = 0   # 萬子
    PIN = 1   # 筒子
    SOU = 2   # 索子
    WIND = 3  # 風牌
    DRAGON = 4  # 三元牌


class WindDirection(IntEnum):
    EAST = 1   # 東
    SOUTH = 2  # 南
    WEST = 3   # 西
    NORTH = 4  # 北


class DragonColor(IntEnum):
    WHITE = 1  # 白
    GREEN = 2  # 發
    RED = 3    # 中


NUMBER_SUITS = (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)
HONOR_SUITS = (TileSuit.WIND, TileSuit.DRAGON)

# Only fives come in a red variant
RED_NUMBERS = frozenset({5})

# Yaochu (terminal + honor) shape keys
YAOCHU_INDICES = [0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33]

# Tile names for 34 encoding
TILE_NAMES_34 = [
    "1m", "2m", "3m", "4m", "5m", "6m", "7m", "8m", "9m",
    "1p", "2p", "3p", "4p", "5p", "6p", "7p", "8p", "9p",
    "1s", "2s", "3s", "4s", "5s", "6s", "7s", "8s", "9s",
    "東", "南", "西", "北", "白", "發", "中",
]

_SUIT_CHARS = {TileSuit.MAN: 'm', TileSuit.PIN: 'p', TileSuit.SOU: 's'}
_SUIT_OFFSETS = {TileSuit.MAN: 0, TileSuit.PIN: 9, TileSuit.SOU: 18,
                 TileSuit.WIND: 27, TileSuit.DRAGON: 31}
_HONOR_CHARS = {
    '東': (TileSuit.WIND, 1), '南': (TileSuit.WIND, 2),
    '西': (TileSuit.WIND, 3), '北': (TileSuit.WIND, 4),
    '白': (TileSuit.DRAGON, 1), '發': (TileSuit.DRAGON, 2),
    '中': (TileSuit.DRAGON, 3),
}


class Tile:
    """Immutable tile identity.

    Identity covers suit, number and the red flag, so a red five and a plain
    five are different tiles for pool bookkeeping. ``index34`` is the shape
    key shared by both and is what every shape calculation looks at.
    """
    __slots__ = ('_suit', '_number', '_is_red', '_index34')

    def __init__(self, suit: TileSuit, number: int, is_red: bool = False):
        suit = TileSuit(suit)
        if suit in NUMBER_SUITS:
            if not (1 <= number <= 9):
                raise ValueError(f"number tile must be 1..9, got {number}")
            if is_red and number not in RED_NUMBERS:
                raise ValueError(f"no red variant for number {number}")
        else:
            limit = 4 if suit == TileSuit.WIND else 3
            if not (1 <= number <= limit):
                raise ValueError(f"{suit.name.lower()} tile must be 1..{limit}, got {number}")
            if is_red:
                raise ValueError("honor tiles have no red variant")
        self._suit = suit
        self._number = number
        self._is_red = bool(is_red)
        self._index34 = _SUIT_OFFSETS[suit] + number - 1

    @classmethod
    def wind(cls, direction: WindDirection) -> 'Tile':
        return cls(TileSuit.WIND, int(direction))

    @classmethod
    def dragon(cls, color: DragonColor) -> 'Tile':
        return cls(TileSuit.DRAGON, int(color))

    @property
    def suit(self) -> TileSuit:
        return self._suit

    @property
    def number(self) -> int:
        return self._number

    @property
    def is_red(self) -> bool:
        return self._is_red

    @property
    def index34(self) -> int:
        return self._index34

    @property
    def is_honor(self) -> bool:
        return self._suit in HONOR_SUITS

    @property
    def is_number_tile(self) -> bool:
        return self._suit in NUMBER_SUITS

    @property
    def name(self) -> str:
        if self._is_red:
            return f"0{_SUIT_CHARS[self._suit]}"
        return TILE_NAMES_34[self._index34]

    def _key(self):
        return (self._index34, self._is_red)

    def __repr__(self):
        return f"Tile({self.name})"

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self):
        return hash(self._key())

    def __lt__(self, other):
        if isinstance(other, Tile):
            return self._key() < other._key()
        return NotImplemented


def tiles_to_34_array(tiles: List[Tile]) -> List[int]:
    """Convert list of tiles to 34-length count array."""
    arr = [0] * 34
    for t in tiles:
        arr[t.index34] += 1
    return arr


def make_tiles_from_string(s: str) -> List[Tile]:
    """Parse a shorthand string like '123m406p789s東南白' into tiles.

    ``0`` stands for the red five of the following suit.
    """
    tiles = []
    numbers: List[int] = []
    for ch in s:
        if ch.isdigit():
            numbers.append(int(ch))
        elif ch in ('m', 'p', 's'):
            suit = {'m': TileSuit.MAN, 'p': TileSuit.PIN, 's': TileSuit.SOU}[ch]
            for n in numbers:
                if n == 0:
                    tiles.append(Tile(suit, 5, is_red=True))
                else:
                    tiles.append(Tile(suit, n))
            numbers = []
        elif ch in _HONOR_CHARS:
            suit, number = _HONOR_CHARS[ch]
            tiles.append(Tile(suit, number))
        elif not ch.isspace():
            raise ValueError(f"unexpected character {ch!r} in tile string")
    if numbers:
        raise ValueError(f"digits without suit in tile string {s!r}")
    return tiles


def tiles_to_string(tiles: List[Tile]) -> str:
    """Inverse of make_tiles_from_string, grouping digits per suit."""
    out = []
    pending: List[str] = []
    pending_suit: Optional[str] = None
    for tile in sorted(tiles):
        if tile.is_honor:
            if pending:
                out.append("".join(pending) + pending_suit)
                pending, pending_suit = [], None
            out.append(tile.name)
            continue
        suit_char = _SUIT_CHARS[tile.suit]
        if pending_suit is not None and suit_char != pending_suit:
            out.append("".join(pending) + pending_suit)
            pending = []
        pending_suit = suit_char
        pending.append("0" if tile.is_red else str(tile.number))
    if pending:
        out.append("".join(pending) + pending_suit)
    return "".join(out)
