"""Hand definitions loaded from TOML and validated with pydantic.

A hand list is a sequence of ``[[hand]]`` tables::

    [[hand]]
    name = "Chiitoitsu"
    kanji = "七対子"

    [hand.restrictions]
    suit_tiles = "forbidden"
    hand_shape = "irregular"
    irregular_shape = [{ group_type = "jantou", group_count = 7 }]

Allow-lists take ``"*"`` to mean every variant. Enum values accept the
romaji name, the short code, and the English name, case-insensitively.
"""

import tomllib
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wwyd.core.group import GroupType
from wwyd.core.restrictions import (
    HandShape, Restrictions, ShapeGroup, TileRequirement,
)
from wwyd.core.tile import DragonColor, TileSuit, WindDirection

WILDCARD = "*"

E = TypeVar("E")

SUIT_ALIASES: Dict[str, TileSuit] = {
    "man": TileSuit.MAN, "m": TileSuit.MAN, "manzu": TileSuit.MAN, "characters": TileSuit.MAN,
    "pin": TileSuit.PIN, "p": TileSuit.PIN, "pinzu": TileSuit.PIN, "circles": TileSuit.PIN,
    "sou": TileSuit.SOU, "s": TileSuit.SOU, "souzu": TileSuit.SOU, "bamboos": TileSuit.SOU,
}

WIND_ALIASES: Dict[str, WindDirection] = {
    "ton": WindDirection.EAST, "e": WindDirection.EAST, "east": WindDirection.EAST,
    "nan": WindDirection.SOUTH, "s": WindDirection.SOUTH, "south": WindDirection.SOUTH,
    "shaa": WindDirection.WEST, "w": WindDirection.WEST, "west": WindDirection.WEST,
    "pei": WindDirection.NORTH, "n": WindDirection.NORTH, "north": WindDirection.NORTH,
}

DRAGON_ALIASES: Dict[str, DragonColor] = {
    "haku": DragonColor.WHITE, "w": DragonColor.WHITE, "white": DragonColor.WHITE,
    "hatsu": DragonColor.GREEN, "g": DragonColor.GREEN, "green": DragonColor.GREEN,
    "chun": DragonColor.RED, "r": DragonColor.RED, "red": DragonColor.RED,
}

GROUP_ALIASES: Dict[str, GroupType] = {
    "shuntsu": GroupType.RUN, "123": GroupType.RUN, "run": GroupType.RUN,
    "koutsu": GroupType.TRIPLET, "111": GroupType.TRIPLET, "triplet": GroupType.TRIPLET,
    "kantsu": GroupType.QUAD, "1111": GroupType.QUAD, "quad": GroupType.QUAD,
    "jantou": GroupType.PAIR, "11": GroupType.PAIR, "pair": GroupType.PAIR,
    "shinguru": GroupType.SINGLE, "1": GroupType.SINGLE, "single": GroupType.SINGLE,
}

# Wildcard expansion for group lists matches the regular-hand default
GROUP_WILDCARD = frozenset({GroupType.RUN, GroupType.TRIPLET, GroupType.QUAD, GroupType.PAIR})


class HandListError(ValueError):
    """A hand list could not be read or validated."""


def _parse_alias(value: str, aliases: Dict[str, E], kind: str) -> E:
    key = str(value).strip().lower()
    if key not in aliases:
        raise ValueError(f"unknown {kind} {value!r}")
    return aliases[key]


def _expand(values: Optional[List[str]], aliases: Dict[str, E], kind: str,
            everything) -> Optional[FrozenSet[E]]:
    """Resolve an allow-list; ``"*"`` anywhere in it means every variant."""
    if values is None:
        return None
    if any(str(v).strip() == WILDCARD for v in values):
        return frozenset(everything)
    return frozenset(_parse_alias(v, aliases, kind) for v in values)


def _enum_by_value(enum_cls: Type[E], value) -> E:
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    for member in enum_cls:
        if member.value == key:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"expected one of {allowed}, got {value!r}")


class ShapeGroupModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    group_type: GroupType
    group_count: int = Field(ge=1, le=14)

    @field_validator("group_type", mode="before")
    @classmethod
    def _parse_group_type(cls, v):
        if isinstance(v, GroupType):
            return v
        return _parse_alias(v, GROUP_ALIASES, "group type")


class RestrictionsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    honor_tiles: TileRequirement = TileRequirement.OPTIONAL
    honor_wind_directions_allowed: Optional[List[str]] = None
    honor_dragon_colors_allowed: Optional[List[str]] = None
    suit_tiles: TileRequirement = TileRequirement.OPTIONAL
    suit_variants_allowed: Optional[List[str]] = None
    suit_numbers_allowed: Optional[List[Union[int, str]]] = None
    red_tiles: bool = False
    shapes_allowed: Optional[List[str]] = None
    hand_shape: HandShape = HandShape.REGULAR
    irregular_shape: Optional[List[ShapeGroupModel]] = None

    @field_validator("honor_tiles", "suit_tiles", mode="before")
    @classmethod
    def _parse_requirement(cls, v):
        return _enum_by_value(TileRequirement, v)

    @field_validator("hand_shape", mode="before")
    @classmethod
    def _parse_hand_shape(cls, v):
        return _enum_by_value(HandShape, v)

    @field_validator("honor_wind_directions_allowed")
    @classmethod
    def _check_winds(cls, v):
        _expand(v, WIND_ALIASES, "wind direction", WindDirection)
        return v

    @field_validator("honor_dragon_colors_allowed")
    @classmethod
    def _check_dragons(cls, v):
        _expand(v, DRAGON_ALIASES, "dragon color", DragonColor)
        return v

    @field_validator("suit_variants_allowed")
    @classmethod
    def _check_suits(cls, v):
        _expand(v, SUIT_ALIASES, "suit", ())
        return v

    @field_validator("shapes_allowed")
    @classmethod
    def _check_shapes(cls, v):
        _expand(v, GROUP_ALIASES, "group type", ())
        return v

    @field_validator("suit_numbers_allowed")
    @classmethod
    def _check_numbers(cls, v):
        if v is None:
            return v
        for number in v:
            if number == WILDCARD:
                continue
            if isinstance(number, str) or not (1 <= number <= 9):
                raise ValueError(f"suit numbers must be 1..9 or '*', got {number!r}")
        return v

    def to_restrictions(self) -> Restrictions:
        """Resolve aliases and wildcards into the core restrictions object."""
        numbers = None
        if self.suit_numbers_allowed is not None:
            if WILDCARD in self.suit_numbers_allowed:
                numbers = frozenset(range(1, 10))
            else:
                numbers = frozenset(int(n) for n in self.suit_numbers_allowed)

        irregular = ()
        if self.irregular_shape:
            irregular = tuple(ShapeGroup(g.group_type, g.group_count)
                              for g in self.irregular_shape)

        return Restrictions(
            honor_tiles=self.honor_tiles,
            wind_directions=_expand(self.honor_wind_directions_allowed, WIND_ALIASES,
                                    "wind direction", WindDirection),
            dragon_colors=_expand(self.honor_dragon_colors_allowed, DRAGON_ALIASES,
                                  "dragon color", DragonColor),
            suit_tiles=self.suit_tiles,
            suits=_expand(self.suit_variants_allowed, SUIT_ALIASES, "suit",
                          (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)),
            numbers=numbers,
            red_tiles=self.red_tiles,
            shapes_allowed=_expand(self.shapes_allowed, GROUP_ALIASES, "group type",
                                   GROUP_WILDCARD),
            hand_shape=self.hand_shape,
            irregular_shape=irregular,
        )


class HandDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    kanji: Optional[str] = None
    description: Optional[str] = None
    restrictions: RestrictionsModel

    @property
    def title(self) -> str:
        if self.kanji:
            return f"{self.name} ({self.kanji})"
        return self.name


class HandList(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hands: List[HandDefinition] = Field(default_factory=list, alias="hand")

    def names(self) -> List[str]:
        return [h.name for h in self.hands]

    def find(self, name: str) -> HandDefinition:
        """Look a hand up by name (case-insensitive) or kanji."""
        wanted = name.strip().lower()
        for hand in self.hands:
            if hand.name.lower() == wanted or (hand.kanji and hand.kanji == name.strip()):
                return hand
        raise HandListError(f"no hand named {name!r}")


def parse_hand_list(text: str) -> HandList:
    """Parse and validate a TOML hand list."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise HandListError(f"invalid TOML: {e}") from e
    try:
        return HandList.model_validate(data)
    except ValidationError as e:
        raise HandListError(str(e)) from e


def load_hand_list(path: Union[str, Path]) -> HandList:
    """Read a hand list file from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise HandListError(f"cannot read {path}: {e}") from e
    return parse_hand_list(text)
