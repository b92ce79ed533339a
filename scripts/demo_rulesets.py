#!/usr/bin/env python3
"""
Ruleset Gallery Demonstration Script

Renders one GIF per ruleset from the same seed so the rulesets can be
compared side by side, and writes a short summary log of how much of each
grid the automaton filled.
"""

import json
import logging
import sys
from pathlib import Path

import numpy as np

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from cellgen.core.automaton import Automaton1D
from cellgen.core.rules import NUM_STATES, Ruleset
from cellgen.render.gif import render_animation, save_animation


def run_gallery(out_dir: Path, width: int = 100, generations: int = 100,
                start_cells: int = 1, seed: int = 0, square_size: int = 6) -> dict:
    """Render every ruleset and return per-ruleset metrics."""
    logger.info("=== RULESET GALLERY ===")
    logger.info(f"Grid: {width}x{generations}, start cells: {start_cells}, seed: {seed}")
    out_dir.mkdir(parents=True, exist_ok=True)

    results = {}
    for ruleset in Ruleset:
        automaton = Automaton1D(width, generations, ruleset, start_cells,
                                rng=np.random.default_rng(seed))
        animation = render_animation(automaton, square_size=square_size)
        path = save_animation(animation, out_dir / f"ruleset_{ruleset.value}_{ruleset.name.lower()}.gif")

        grid = automaton.to_array()
        counts = np.bincount(grid.ravel(), minlength=NUM_STATES)
        fill = automaton.count_active() / grid.size

        logger.info(f"Ruleset {ruleset.value} ({ruleset.name}): fill={fill:.1%}, "
                    f"state counts={counts.tolist()}")
        results[ruleset.name] = {
            "ruleset": ruleset.value,
            "file": str(path),
            "fill": fill,
            "state_counts": counts.tolist(),
            "frames": len(animation),
        }

    return results


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Render every ruleset to a GIF")
    parser.add_argument("--out-dir", type=Path, default=Path("gallery"), help="Output directory")
    parser.add_argument("--width", type=int, default=100, help="Cells per row")
    parser.add_argument("--generations", type=int, default=100, help="Rows per image")
    parser.add_argument("--start-cells", type=int, default=1, help="Seed cells (1-4)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for seed colors")

    args = parser.parse_args()

    try:
        results = run_gallery(args.out_dir, args.width, args.generations, args.start_cells, args.seed)

        summary = args.out_dir / "summary.json"
        summary.write_text(json.dumps(results, indent=2))
        logger.info(f"Summary saved to: {summary}")

    except Exception as e:
        logger.error(f"Gallery failed: {e}")
        sys.exit(1)
