"""Tile display formatting with colors for terminal output."""

from rich.text import Text

from wwyd.core.tile import Tile, TileSuit


# Long labels: suit abbreviation + number + red marker, or the honor name
SUIT_LABELS = {
    TileSuit.MAN: "Man",
    TileSuit.PIN: "Pin",
    TileSuit.SOU: "Sou",
}

HONOR_LABELS = {
    (TileSuit.WIND, 1): "Ton",
    (TileSuit.WIND, 2): "Nan",
    (TileSuit.WIND, 3): "Shaa",
    (TileSuit.WIND, 4): "Pei",
    (TileSuit.DRAGON, 1): "Haku",
    (TileSuit.DRAGON, 2): "Hatsu",
    (TileSuit.DRAGON, 3): "Chun",
}

# Color schemes
SUIT_COLORS = {
    TileSuit.MAN: "red",
    TileSuit.PIN: "blue",
    TileSuit.SOU: "green",
    TileSuit.WIND: "yellow",
    TileSuit.DRAGON: "yellow",
}


def tile_label(tile: Tile) -> str:
    """Readable label such as 'Man5r' or 'Haku'."""
    if tile.is_honor:
        return HONOR_LABELS[(tile.suit, tile.number)]
    return f"{SUIT_LABELS[tile.suit]}{tile.number}{'r' if tile.is_red else ''}"


def tile_to_rich_text(tile: Tile, highlight: bool = False) -> Text:
    """Convert a tile to a Rich Text object with appropriate colors."""
    if tile.is_red:
        style = "bold red on white"
    else:
        style = f"bold {SUIT_COLORS[tile.suit]}"
        if highlight:
            style += " on white"
    if highlight:
        style += " underline"
    return Text(f"[{tile.name}]", style=style)


def tiles_to_rich_text(tiles: list, separator: str = " ",
                       highlight: Tile = None) -> Text:
    """Convert a list of tiles to Rich Text, optionally marking one tile."""
    result = Text()
    marked = False
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(separator)
        is_marked = not marked and highlight is not None and tile == highlight
        if is_marked:
            marked = True
        result.append_text(tile_to_rich_text(tile, highlight=is_marked))
    return result
