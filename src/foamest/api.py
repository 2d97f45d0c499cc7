from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .config import load_config
from .estimate_io import load_estimate
from .models import Estimate, EstimateResult
from .price_logic import area_costs, summarize_actuals, summarize_job


def calculate(estimate: Estimate) -> EstimateResult:
    """Run every area through the calculator and fold the results into job totals."""

    costs = area_costs(estimate.spray_areas)
    job = summarize_job(estimate.global_inputs, estimate.spray_areas, costs)
    actuals = summarize_actuals(estimate.global_inputs, estimate.actuals, job)
    return EstimateResult(estimate=estimate, areas=tuple(costs), job=job, actuals=actuals)


@dataclass
class EstimateOptions:
    estimate_path: Path
    output_dir: Optional[Path] = None
    export: bool = True


def estimate_file(options: EstimateOptions) -> Dict[str, Path]:
    """Programmatic interface to compute a saved estimate and return artifact paths.

    Returns a dict with keys summary_xlsx and areas_csv, empty when export is off.
    """
    import os

    from .cli import run as run_estimate

    env = dict(os.environ)
    env["FOAMEST_ESTIMATE"] = str(options.estimate_path)
    if options.output_dir:
        env["FOAMEST_OUTPUT_DIR"] = str(options.output_dir)
    if not options.export:
        env["FOAMEST_DISABLE_EXPORT"] = "1"

    cfg = load_config(env, None)
    rc = run_estimate(cfg)
    if rc != 0:
        raise RuntimeError(f"Estimate run failed with code {rc}")
    if not cfg.export:
        return {}
    name = load_estimate(cfg.estimate_path).name
    return {
        "summary_xlsx": cfg.summary_xlsx(name),
        "areas_csv": cfg.areas_csv(name),
    }
