"""
Compare a layout's disclosed win probability with a Monte Carlo run.

    python scripts/simulate_layout.py grid --runs 20000 --seed 7
"""

import argparse
import os
import sys

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from scratchcore.config import settings
from scratchcore.core.catalog import prize_catalog
from scratchcore.core.diagnostics import DiagnosticLog
from scratchcore.core.logger import init_logging
from scratchcore.core.odds import compute_odds
from scratchcore.core.prize_pool import PrizePool
from scratchcore.core.rng import SeededRNG
from scratchcore.core.win_evaluator import win_evaluator


def simulate(layout_id: str, runs: int, seed: int) -> dict:
    layout = prize_catalog.require_layout(layout_id)
    pool = PrizePool(rng=SeededRNG(seed))
    quiet = DiagnosticLog(forward_to_logger=False)

    wins = 0
    for _ in range(runs):
        area_prizes = pool.draw_area_prizes(layout, diagnostics=quiet)
        if win_evaluator.is_winner(layout, layout.area_ids, area_prizes, diagnostics=quiet):
            wins += 1

    odds = compute_odds(layout, diagnostics=quiet)
    return {
        "layout": layout.id,
        "win_condition": layout.win_condition.value,
        "estimated": odds.win_probability,
        "observed": wins / runs,
        "runs": runs,
    }


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("layout_id")
    parser.add_argument("--runs", type=int, default=10000)
    parser.add_argument("--seed", type=int, default=1)
    args = parser.parse_args()

    init_logging(
        level=settings.logging.level,
        log_to_file=settings.logging.log_to_file,
        formatter=settings.logging.formatter,
        log_file_path=settings.paths.get_log_path(),
    )

    result = simulate(args.layout_id, args.runs, args.seed)
    print(f"Layout:     {result['layout']} ({result['win_condition']})")
    print(f"Estimated:  {result['estimated']:.4f}")
    print(f"Observed:   {result['observed']:.4f} over {result['runs']} tickets")


if __name__ == "__main__":
    main()
