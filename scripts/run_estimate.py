"""Helper script to compute the bundled sample estimate."""
from __future__ import annotations

import argparse
from pathlib import Path

from foamest.cli import main

SAMPLE_ESTIMATE = Path(__file__).resolve().parents[1] / "data_sample" / "sample_estimate.json"


def _parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(description="Compute the sample spray-foam estimate")
    parser.add_argument(
        "--estimate",
        default=str(SAMPLE_ESTIMATE),
        help="Estimate JSON to compute (defaults to data_sample/sample_estimate.json).",
    )
    return parser.parse_known_args(argv)


if __name__ == "__main__":  # pragma: no cover
    args, remaining = _parse_args()
    raise SystemExit(main([args.estimate, *remaining]))
