"""Command line interface: generate what-would-you-discard problems."""

import argparse
import json
import os
import sys
from typing import List, Optional

from rich.console import Console

from wwyd.config.hand_list import HandListError, load_hand_list
from wwyd.engine.problem_log import ProblemLogger
from wwyd.generator.errors import GenerationError
from wwyd.generator.hand_generator import HandGenerator
from wwyd.logging_config import get_logger, resolve_log_level, setup_logging
from wwyd.ui.renderer import render_hand_names, render_problem

DEFAULT_CONFIG = os.path.join(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__))), "config", "hands.toml")

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="wwyd", description="Generate 'what would you discard' mahjong problems")
    ap.add_argument("--config", "-c", default=DEFAULT_CONFIG,
                    help="TOML file with [[hand]] definitions")
    ap.add_argument("--hand", "-H", help="Name (or kanji) of the hand to generate; defaults to the first")
    ap.add_argument("--list", action="store_true", help="List the hands in the config and exit")
    ap.add_argument("--shanten", "-s", type=int, default=1, help="Target shanten (0 = tenpai)")
    ap.add_argument("--count", "-n", type=int, default=1, help="Number of problems to generate")
    ap.add_argument("--seed", type=int, help="Seed for reproducible problems")
    ap.add_argument("--top", type=int, help="Show only the best N discards")
    ap.add_argument("--hide-answer", action="store_true", help="Print the hand without the ranking")
    ap.add_argument("--json", action="store_true", help="Output JSON instead of tables")
    ap.add_argument("--save-dir", help="Save the session as JSON into this directory")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    ap.add_argument("--log-dir", help="Also write the log to a timestamped file in this directory")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        setup_logging(resolve_log_level(args.log_level), args.log_dir)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        return 2

    if args.shanten < 0:
        err_console.print("[red]--shanten must be 0 or more[/red]")
        return 2
    if args.count < 1:
        err_console.print("[red]--count must be at least 1[/red]")
        return 2

    try:
        hand_list = load_hand_list(args.config)
        if args.list:
            render_hand_names(console, hand_list.names())
            return 0
        if not hand_list.hands:
            raise HandListError(f"{args.config} defines no hands")
        definition = hand_list.find(args.hand) if args.hand else hand_list.hands[0]
    except HandListError as e:
        err_console.print(f"[red]{e}[/red]")
        return 1

    session = ProblemLogger(definition.name, {
        "config": os.path.abspath(args.config),
        "shanten": args.shanten,
        "count": args.count,
        "seed": args.seed,
    })
    try:
        generator = HandGenerator(definition.restrictions.to_restrictions(), seed=args.seed)
        for i in range(args.count):
            problem = generator.generate(args.shanten)
            session.record(problem)
            if not args.json:
                render_problem(console, problem,
                               title=f"{definition.title}  #{i + 1}",
                               show_answer=not args.hide_answer, limit=args.top)
    except GenerationError as e:
        logger.warning("generation_failed", hand=definition.name, error=str(e))
        err_console.print(f"[red]{definition.name}: {e}[/red]")
        return 1

    if args.json:
        print(json.dumps(session.to_dict(), ensure_ascii=False, indent=2))

    if args.save_dir:
        path = session.save(args.save_dir)
        err_console.print(f"[dim]Saved session {session.session_id} to {path}[/dim]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
