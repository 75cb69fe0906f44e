#!/usr/bin/env python3
"""Batch statistics for fish generation.

Samples many fish of one species under the Low/Medium/High player presets
and prints quality, rarity and price distributions.

Usage:
    python scripts/batch_stats.py [--species ID] [--samples N] [--seed N] [--json]

Example:
    python scripts/batch_stats.py --species pike --samples 2000 --seed 7
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main() -> int:
    from fishcore.batch_stats import DEFAULT_SAMPLES_PER_PRESET, run_batch
    from fishcore.config.species import DEFAULT_SPECIES
    from fishcore.data import SpeciesCatalog
    from fishcore.logging_config import configure_logging

    catalog = SpeciesCatalog.from_dicts(DEFAULT_SPECIES)

    parser = argparse.ArgumentParser(description="Sample fish generation under player presets")
    parser.add_argument(
        "--species",
        default=catalog.species_ids()[0],
        choices=catalog.species_ids(),
        help="Species to sample (default: first in catalog)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES_PER_PRESET,
        help=f"Fish per preset (default: {DEFAULT_SAMPLES_PER_PRESET})",
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    parser.add_argument("--json", action="store_true", help="Print one JSON line per preset")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    args = parser.parse_args()

    configure_logging(level=args.log_level)
    batch = run_batch(catalog.get(args.species), samples=args.samples, seed=args.seed)

    if args.json:
        import orjson

        for report in batch.reports:
            print(orjson.dumps(report).decode("utf-8"))
        return 0

    print("=" * 60)
    print(f"FISH BATCH STATISTICS (seed={batch.seed})")
    print("=" * 60)
    for report in batch.reports:
        print(report.summary_line())
    return 0


if __name__ == "__main__":
    sys.exit(main())
