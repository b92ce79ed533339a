#!/usr/bin/env python3
"""
Check memory budget of a full-size run.
Evolves and renders one automaton and compares process RSS growth to a threshold.
"""

import os
import sys

import numpy as np
import psutil

from cellgen.core.automaton import Automaton1D
from cellgen.core.rules import Ruleset
from cellgen.render.gif import render_animation


def measure_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def check_memory_budget(threshold_mb=500, width=100, generations=100):
    """Render one animation and check RSS growth against budget."""
    before = measure_memory_mb()

    automaton = Automaton1D(width, generations, Ruleset.CROSS_SUM, 4, rng=np.random.default_rng(0))
    animation = render_animation(automaton)

    used_mb = measure_memory_mb() - before
    print(f"Rendered {len(animation)} frames of {width}x{generations}")
    print(f"  Memory growth: {used_mb:.1f}MB (threshold {threshold_mb}MB)")

    if used_mb < threshold_mb:
        print("✓ Memory usage within budget")
        return 0
    print(f"✗ Memory usage {used_mb:.1f}MB exceeds threshold {threshold_mb}MB")
    return 1


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--threshold", type=float, default=500.0)
    parser.add_argument("--width", type=int, default=100)
    parser.add_argument("--generations", type=int, default=100)

    args = parser.parse_args()
    exit_code = check_memory_budget(args.threshold, args.width, args.generations)
    sys.exit(exit_code)
