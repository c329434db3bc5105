#!/usr/bin/env python3
"""
run_calibration.py — Run the full calibration pipeline.

Usage:
    python run_calibration.py                      # Full run
    python run_calibration.py --corpus-dir path/    # Custom corpus location
    python run_calibration.py --optimize            # Include threshold recommendation
    python run_calibration.py --json                # Output JSON only (for CI)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from calibration.corpus_parser import parse_all_corpora
from calibration.benchmark import run_benchmark, format_report, save_report
from calibration.optimizer import recommend_thresholds, format_optimization_report
from spamscore.config import settings
from spamscore.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SpamScore Calibration Runner")
    parser.add_argument(
        "--corpus-dir",
        default="calibration/corpus",
        help="Path to corpus directory (default: calibration/corpus)",
    )
    parser.add_argument(
        "--optimize",
        action="store_true",
        help="Include warning threshold recommendation",
    )
    parser.add_argument(
        "--output-dir",
        default="calibration/reports",
        help="Directory for output reports (default: calibration/reports)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON only (for CI/automation)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(stream=sys.stderr)

    # Step 1: Check corpus
    corpus_dir = Path(args.corpus_dir)
    if not corpus_dir.exists():
        print(f"Error: Corpus directory not found: {corpus_dir}")
        return 1

    samples = parse_all_corpora(corpus_dir)
    if not samples:
        print(f"Error: No samples found in {corpus_dir}")
        print("Add labeled samples to calibration/corpus/seed_corpus.txt")
        return 1

    if not args.json:
        print(f"Loaded {len(samples)} samples from {corpus_dir}")

    # Step 2: Run benchmark
    config = settings.scoring_config()
    result = run_benchmark(corpus_dir=corpus_dir, config=config)
    report_path, json_path = save_report(result, args.output_dir)

    # Step 3: Output
    if args.json:
        print(json_path.read_text(encoding="utf-8"))
    else:
        print(format_report(result))
        print(f"\nReport saved to: {report_path}")
        print(f"JSON saved to:   {json_path}")

    # Step 4: Optimization (if requested)
    if args.optimize:
        recommendation = recommend_thresholds(result, config)
        if args.json:
            print(json.dumps({
                "summary": recommendation.summary,
                "current_threshold": recommendation.current_threshold,
                "recommended_threshold": recommendation.recommended_threshold,
                "current_f1": recommendation.current_f1,
                "recommended_f1": recommendation.recommended_f1,
            }, indent=2))
        else:
            print()
            print(format_optimization_report(recommendation))

    # Step 5: Exit code for CI
    if result.f1 < 0.5:
        print("\nF1 below 0.5 — calibration failing")
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
