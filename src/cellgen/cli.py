#!/usr/bin/env python3
"""
Cellular Automata Generator CLI

Generates a GIF of a one-dimensional cellular automaton for a chosen ruleset
and number of starting cells, or streams the evolution to the terminal.

    cellgen gif --ruleset 3 --start-cells 2 --output out.gif
    cellgen term --glyphs
    cellgen interactive
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .config import AutomatonConfig
from .core.automaton import MAX_START_CELLS, MIN_START_CELLS, Automaton1D, stream_rows
from .core.glyphs import stream_glyph_rows
from .core.rules import Ruleset, parse_ruleset
from .errors import ConfigurationError
from .render.gif import render_animation, save_animation
from .render.terminal import TerminalPrinter

logger = logging.getLogger(__name__)


def _list_ids(rulesets: List[Ruleset]) -> str:
    """Format ruleset numbers for a prompt, e.g. "4, 5 and 6"."""
    ids = [str(r.value) for r in rulesets]
    if len(ids) < 2:
        return "".join(ids)
    return f"{', '.join(ids[:-1])} and {ids[-1]}"


def run_gif(config: AutomatonConfig) -> int:
    """Evolve the automaton and write the GIF artifact."""
    logger.info(f"Generating animation: {config.width}x{config.generations}, "
                f"ruleset {config.ruleset.value} ({config.ruleset.name}), "
                f"{config.start_cells} start cell(s)")

    automaton = Automaton1D(config.width, config.generations, config.ruleset,
                            config.start_cells, rng=config.make_rng())
    animation = render_animation(automaton,
                                 square_size=config.square_size,
                                 show_grid=config.show_grid,
                                 frame_delay=config.frame_delay,
                                 final_delay_factor=config.final_delay_factor)
    save_animation(animation, config.output)
    print(f"Animation saved to {config.output}")
    return 0


def run_terminal(config: AutomatonConfig, max_rows: Optional[int] = None,
                 glyphs: bool = False, out=None) -> int:
    """Stream generations to the terminal until interrupted."""
    if glyphs:
        rows = stream_glyph_rows(config.width, config.start_cells,
                                 rng=config.make_rng(), max_rows=max_rows)
    else:
        rows = stream_rows(config.width, config.ruleset, config.start_cells,
                           rng=config.make_rng(), max_rows=max_rows)

    printer = TerminalPrinter(out=out, delay=config.term_delay)
    printed = printer.run(rows)
    logger.debug(f"Printed {printed} rows")
    return 0


def run_interactive(config: AutomatonConfig,
                    input_fn: Callable[[str], str] = input) -> int:
    """Ask for grid lines, ruleset and start cells, then write the GIF."""
    print("Welcome to the cellular automata generator!")

    answer = input_fn("Would you like to show the grid lines? y/n (default: n)\n")
    show_grid = answer.strip().lower() == "y"
    print("")

    standard = _list_ids([r for r in Ruleset if not r.is_experimental])
    experimental = _list_ids([r for r in Ruleset if r.is_experimental])

    answer = input_fn(f"Select a cellular automata ruleset (1-{len(Ruleset)}):\n"
                      f"{standard} are more standard cellular automata rulesets\n"
                      f"{experimental} are experimental rulesets using bit manipulation\n")
    try:
        ruleset = parse_ruleset(answer.strip())
    except ConfigurationError:
        print("Invalid input, exiting...")
        return 1
    print("")

    answer = input_fn(f"How many starting cells to fill ({MIN_START_CELLS}-{MAX_START_CELLS}):\n"
                      f"For rulesets {experimental} it is highly recommended to use 1\n"
                      "Example: A value of 2 will start with 2 cells filled in the first row\n")
    try:
        start_cells = int(answer.strip())
    except ValueError:
        print("Invalid input, exiting...")
        return 1
    if not (MIN_START_CELLS <= start_cells <= MAX_START_CELLS):
        print("Invalid input, exiting...")
        return 1
    print("")

    print("Generating animation...")
    return run_gif(config.replace(show_grid=show_grid, ruleset=ruleset, start_cells=start_cells))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cellgen", description="One-dimensional cellular automata generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--width", type=int, help="Cells per row")
        p.add_argument("--ruleset", type=str, help="Ruleset number (1-6) or name")
        p.add_argument("--start-cells", type=int, help="Seed cells in the first row (1-4)")
        p.add_argument("--seed", type=int, help="Random seed for reproducible colors")

    gif = sub.add_parser("gif", help="Write an animated GIF")
    add_common(gif)
    gif.add_argument("--generations", type=int, help="Rows in the image")
    gif.add_argument("--square-size", type=int, help="Pixel size of one cell")
    gif.add_argument("--frame-delay", type=int, help="Frame delay in 1/100 s")
    gif.add_argument("--show-grid", action="store_true", default=None, help="Draw grid lines")
    gif.add_argument("--output", type=str, help="Output GIF path")

    term = sub.add_parser("term", help="Stream rows to the terminal")
    add_common(term)
    term.add_argument("--delay", type=float, help="Seconds between rows")
    term.add_argument("--max-rows", type=int, help="Stop after this many rows")
    term.add_argument("--glyphs", action="store_true", help="Use the RGB + glyph automaton")

    interactive = sub.add_parser("interactive", help="Answer prompts, then write a GIF")
    interactive.add_argument("--output", type=str, help="Output GIF path")

    return parser


def main(argv: Optional[List[str]] = None,
         input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = AutomatonConfig.from_env()
        overrides = vars(args)

        if args.command == "gif":
            config = config.replace(width=overrides.get("width"),
                                    generations=overrides.get("generations"),
                                    ruleset=overrides.get("ruleset"),
                                    start_cells=overrides.get("start_cells"),
                                    seed=overrides.get("seed"),
                                    square_size=overrides.get("square_size"),
                                    frame_delay=overrides.get("frame_delay"),
                                    show_grid=overrides.get("show_grid"),
                                    output=overrides.get("output"))
            return run_gif(config)

        if args.command == "term":
            config = config.replace(width=overrides.get("width"),
                                    ruleset=overrides.get("ruleset"),
                                    start_cells=overrides.get("start_cells"),
                                    seed=overrides.get("seed"),
                                    term_delay=overrides.get("delay"))
            if args.max_rows is not None and args.max_rows < 0:
                raise ConfigurationError(f"--max-rows must be non-negative, got {args.max_rows}")
            return run_terminal(config, max_rows=args.max_rows, glyphs=args.glyphs)

        config = config.replace(output=overrides.get("output"))
        return run_interactive(config, input_fn=input_fn)

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
