import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from .api import calculate
from .config import Config
from .config import load_config as load_runtime_config
from .estimate_io import EstimateFileError, estimate_target, load_estimate, save_estimate
from .estimate_writer import write_outputs
from .reporting import make_summary_text
from .transitions import new_estimate

BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_ESTIMATE = 2


def _init_estimate(runtime_cfg: Config) -> int:
    estimate = new_estimate(runtime_cfg.init_name)
    target = runtime_cfg.estimate_path or runtime_cfg.output_dir
    if runtime_cfg.estimate_path is None:
        runtime_cfg.output_dir.mkdir(parents=True, exist_ok=True)
    existing = estimate_target(estimate, target)
    if existing.exists():
        logger.error("Refusing to overwrite existing estimate %s", existing)
        return EXIT_BAD_ESTIMATE
    written = save_estimate(estimate, target)
    logger.info("Created estimate %s", written)
    return EXIT_OK


def run(runtime_config: Optional[Config] = None) -> int:
    runtime_cfg = runtime_config or load_runtime_config(os.environ, None)

    if runtime_cfg.init:
        return _init_estimate(runtime_cfg)

    if runtime_cfg.estimate_path is None:
        logger.error("No estimate file given. Pass a path or set FOAMEST_ESTIMATE.")
        return EXIT_BAD_ESTIMATE

    stage_counter = 0

    def log_stage(message: str) -> None:
        nonlocal stage_counter
        stage_counter += 1
        logger.info("[estimate:%02d] %s", stage_counter, message)

    def log_detail(message: str) -> None:
        logger.info("             %s", message)

    log_stage(f"Loading estimate from {runtime_cfg.estimate_path}")
    try:
        estimate = load_estimate(runtime_cfg.estimate_path)
    except FileNotFoundError:
        logger.error("Estimate file not found: %s", runtime_cfg.estimate_path)
        return EXIT_BAD_ESTIMATE
    except EstimateFileError as exc:
        logger.error("%s (%s)", exc, runtime_cfg.estimate_path)
        return EXIT_BAD_ESTIMATE
    log_detail(f"estimate_name={estimate.name or '(unnamed)'} | spray_areas={len(estimate.spray_areas)}")

    log_stage("Computing area quantities and job totals")
    result = calculate(estimate)
    for idx, cost in enumerate(result.areas, start=1):
        logger.debug(
            "[area] %d :: sqft=%.1f | gallons=%.1f | sets=%.2f | total=$%s",
            idx,
            cost.sqft,
            cost.gallons,
            cost.sets,
            f"{cost.total_cost:,.2f}",
        )
    log_detail(
        f"customer_charge=${result.job.customer_cost:,.2f} | "
        f"margin={result.job.profit_margin:.1f}% ({result.job.margin_status})"
    )

    if runtime_cfg.export:
        log_stage("Persisting estimate outputs to disk")
        out_xlsx = runtime_cfg.summary_xlsx(estimate.name)
        out_csv = runtime_cfg.areas_csv(estimate.name)
        write_outputs(result, str(out_xlsx), str(out_csv))
        log_detail(f"outputs_written => {out_xlsx}, {out_csv}")
    else:
        log_stage("Export disabled; skipping output files")

    logger.info("\n=== SUMMARY ===\n")
    logger.info("%s", make_summary_text(result))
    return EXIT_OK


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute a spray-foam insulation estimate from a saved estimate file")
    parser.add_argument("estimate", nargs="?", help="Path to the estimate JSON file")
    parser.add_argument("--output-dir", help="Directory for generated outputs")
    parser.add_argument("--no-export", action="store_true", help="Log the summary without writing xlsx/csv outputs")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Write a new estimate with default inputs instead of computing one.",
    )
    parser.add_argument("--name", help="Estimate name used with --init")
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    runtime_cfg = load_runtime_config(os.environ, args)
    log_level = logging.DEBUG if runtime_cfg.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")
    try:
        return run(runtime_config=runtime_cfg)
    except Exception:  # pragma: no cover - defensive
        logger.exception("Fatal error during estimate calculation")
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
