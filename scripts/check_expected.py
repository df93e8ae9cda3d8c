#!/usr/bin/env python3
"""
Expected-Answer Check Script

Runs one clustering query against a data file, compares it with a known
answer and reports timing.

Usage:
    python scripts/check_expected.py edges data/clustering1.txt --k 4 --expect 106
    python scripts/check_expected.py bits data/clustering_big.txt --spacing 3 --expect 6118
    python scripts/check_expected.py bits data/small.txt --spacing 2 --expect 1 --debug
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from kspacing.config import SpacingConfig
from kspacing.engine import ExplicitClusteringEngine, ImplicitClusteringDriver
from kspacing.io import read_bit_vector_file, read_edge_file
from kspacing.utils.telemetry import MergeCollector, telemetry_collector

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check a clustering answer against an expected value"
    )
    parser.add_argument("model", choices=["edges", "bits"], help="Input format / distance model")
    parser.add_argument("input", type=Path, help="Path to the data file")
    parser.add_argument("--k", type=int, default=None, help="Cluster target (edges model)")
    parser.add_argument(
        "--spacing",
        type=int,
        default=None,
        help="Spacing threshold (bits model)",
    )
    parser.add_argument("--expect", type=float, required=True, help="Expected answer")
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Verbose per-merge logging (default: false)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if not args.input.exists():
        raise FileNotFoundError(f"Input file not found: {args.input}")

    config = SpacingConfig(debug=args.debug)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    collector = MergeCollector()
    start = time.time()
    with telemetry_collector(collector):
        if args.model == "edges":
            graph = read_edge_file(args.input, label_base=config.label_base)
            k = config.cluster_target if args.k is None else args.k
            answer = ExplicitClusteringEngine.from_graph(graph, config=config).run(k).spacing
            print(f"Spacing of a {k}-clustering: {answer}")
        else:
            vectors = read_bit_vector_file(args.input)
            spacing = config.spacing_threshold if args.spacing is None else args.spacing
            answer = ImplicitClusteringDriver(vectors, config=config).run(spacing).clusters
            print(f"Clusters with spacing >= {spacing}: {answer}")
    total = time.time() - start

    report = collector.summary()
    print(f"  Expected: {args.expect:g}")
    print(f"  Merges: {report.total_merges} over {report.total_stages} stages")
    print(f"  Total duration: {total:.2f}s")

    if answer != args.expect:
        print("  MISMATCH")
        return 1
    print("  OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
