"""Persist computed estimate tables for sharing outside the tool."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .models import EstimateResult
from .reporting import area_frame, inputs_frame, summary_frame

logger = logging.getLogger(__name__)


def write_outputs(result: EstimateResult, xlsx_path: str, csv_path: str) -> None:
    """Write an ``Estimate``/``Summary``/``Inputs``/``Areas`` workbook and a CSV of the area table."""

    areas = area_frame(result)
    summary = summary_frame(result)

    xlsx = Path(xlsx_path)
    xlsx.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(xlsx, engine="openpyxl") as writer:
        pd.DataFrame(
            {
                "ESTIMATE_NAME": [result.estimate.name],
                "AREA_COUNT": [len(result.estimate.spray_areas)],
                "MARGIN_STATUS": [result.job.margin_status],
                "ACTUAL_MARGIN_STATUS": [result.actuals.margin_status],
            }
        ).to_excel(writer, sheet_name="Estimate", index=False)
        summary.to_excel(writer, sheet_name="Summary", index=False)
        inputs_frame(result).to_excel(writer, sheet_name="Inputs", index=False)
        areas.to_excel(writer, sheet_name="Areas", index=False)
    logger.debug("Wrote %s (%d areas)", xlsx, len(areas))

    csv = Path(csv_path)
    csv.parent.mkdir(parents=True, exist_ok=True)
    areas.to_csv(csv, index=False)
    logger.debug("Wrote %s", csv)
