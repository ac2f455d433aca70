"""Command line interface for RoundTableMatch."""
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Sequence

from .csv_loader import load_all, load_matrix
from .errors import SeatingError
from .model_builder import EPSILON
from .scoring import grade_seating, seating_stats
from .solver import SeatingModel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Single round table seating")
    parser.add_argument("--people", type=Path, help="Path to people.csv (id,name)")
    parser.add_argument("--preferences", type=Path,
                        help="Path to preferences.csv (guest1_id,guest2_id,relationship,strength)")
    parser.add_argument("--matrix", type=Path,
                        help="Path to a square preference matrix CSV with names in the header.")
    parser.add_argument("--epsilon", type=float, default=EPSILON,
                        help="Tie-breaking bonus added to every pair (must be > 0).")
    parser.add_argument("--max-iterations", type=int, default=None,
                        help="Cutting-plane iteration limit (default: twice the number of people).")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Time limit in seconds for each solver call.")
    parser.add_argument("--solver-msg", action="store_true",
                        help="Show the solver's own output.")
    parser.add_argument("--no-presolve", action="store_true",
                        help="Disable the solver's presolve step.")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log every cutting-plane iteration.")
    parser.add_argument("--out-seating", type=Path,
                        help="Write seating CSV: seat,name.")
    parser.add_argument("--out-report", type=Path,
                        help="Write a one-line report CSV with scores and grade.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``python -m round_table_match.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.epsilon <= 0:
        parser.error("--epsilon must be positive")
    if args.max_iterations is not None and args.max_iterations < 1:
        parser.error("--max-iterations must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    model = SeatingModel(
        epsilon=args.epsilon,
        max_iterations=args.max_iterations,
        msg=args.solver_msg,
        presolve=not args.no_presolve,
        time_limit=args.time_limit,
    )
    if args.matrix:
        names, matrix = load_matrix(args.matrix)
        model.build_from_matrix(names, matrix)
    elif args.people and args.preferences:
        people, preferences = load_all(args.people, args.preferences)
        model.build(people, preferences)
    else:
        parser.error("either --matrix or both --people and --preferences are required")

    try:
        seating = model.solve()
    except SeatingError as e:
        print(f"[ERROR] {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    for seat, name in enumerate(seating, start=1):
        print(f"{seat},{name}")

    if args.out_seating:
        args.out_seating.parent.mkdir(parents=True, exist_ok=True)
        with args.out_seating.open("w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["seat", "name"])
            for seat, name in enumerate(seating, start=1):
                w.writerow([seat, name])

    report = grade_seating(seating_stats(model.order, model.preferences))
    print(f"[REPORT] grade={report['grade']} total={report['total_score']:.2f} "
          f"mean={report['mean_score']:.2f} pairs={report['pair_count']} "
          f"pos={report['pos_pairs']} neg={report['neg_pairs']} neu={report['neu_pairs']}")

    if args.out_report:
        args.out_report.parent.mkdir(parents=True, exist_ok=True)
        with args.out_report.open("w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=[
                "grade", "total_score", "mean_score", "pair_count",
                "pos_pairs", "neg_pairs", "neu_pairs", "seating",
            ])
            w.writeheader()
            w.writerow({
                "grade": report["grade"],
                "total_score": f"{report['total_score']:.4f}",
                "mean_score": f"{report['mean_score']:.4f}",
                "pair_count": report["pair_count"],
                "pos_pairs": report["pos_pairs"],
                "neg_pairs": report["neg_pairs"],
                "neu_pairs": report["neu_pairs"],
                "seating": "|".join(seating),
            })
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
