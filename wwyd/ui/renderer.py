"""Rich rendering of generated problems."""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wwyd.generator.hand_generator import GeneratedProblem
from wwyd.ui.tile_display import tile_label, tile_to_rich_text, tiles_to_rich_text

SHANTEN_NAMES = {0: "tenpai", 1: "iishanten", 2: "ryanshanten", 3: "sanshanten"}


def shanten_label(shanten: int) -> str:
    if shanten in SHANTEN_NAMES:
        return SHANTEN_NAMES[shanten]
    return f"{shanten}-shanten"


def build_discard_table(problem: GeneratedProblem, limit: Optional[int] = None) -> Table:
    """Table of discard candidates, best first, one row per distinct tile."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Discard")
    table.add_column("Ukeire", justify="right")
    table.add_column("Shanten", justify="right")
    table.add_column("Improving tiles")

    seen = set()
    rank = 0
    for candidate in problem.discards:
        if candidate.tile in seen:
            continue
        seen.add(candidate.tile)
        rank += 1
        if limit is not None and rank > limit:
            break
        table.add_row(
            str(rank),
            tile_to_rich_text(candidate.tile),
            str(candidate.ukeire),
            str(candidate.shanten_after),
            tiles_to_rich_text(list(candidate.waits), separator=""),
        )
    return table


def render_problem(console: Console, problem: GeneratedProblem,
                   title: str = "What would you discard?",
                   show_answer: bool = True, limit: Optional[int] = None):
    """Print a problem: the hand, its shanten and optionally the ranking."""
    body = Text()
    best = problem.best_discard if show_answer else None
    body.append_text(tiles_to_rich_text(list(problem.hand), highlight=best))
    body.append("\n")
    body.append(f"{shanten_label(problem.shanten)} ({problem.shape.value} shape)", style="dim")
    if problem.reserved:
        body.append("\n")
        body.append("Declared quad tiles: ", style="dim")
        body.append_text(tiles_to_rich_text(list(problem.reserved)))
    console.print(Panel(body, title=title, border_style="cyan", padding=(1, 2)))

    if show_answer:
        console.print(f"  Best discard: [bold]{tile_label(best)}[/bold]")
        console.print(build_discard_table(problem, limit))
    console.print()


def render_hand_names(console: Console, names: List[str]):
    """List the hand definitions available in a config file."""
    for name in names:
        console.print(f"  - {name}")
