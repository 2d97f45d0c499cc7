from __future__ import annotations

from dataclasses import fields
from typing import List, Tuple

import pandas as pd

from .models import EstimateResult
from .project_meta import FIELD_LABELS

AREA_COLUMNS = [
    "AREA",
    "AREA_TYPE",
    "FOAM_TYPE",
    "FOAM_THICKNESS",
    "SQFT",
    "GALLONS",
    "SETS",
    "BASE_MATERIAL_COST",
    "MARKUP",
    "TOTAL_COST",
]


def area_frame(result: EstimateResult) -> pd.DataFrame:
    """One row per spray area with its quantities and material pricing."""

    rows = []
    for idx, (area, cost) in enumerate(zip(result.estimate.spray_areas, result.areas), start=1):
        rows.append(
            {
                "AREA": idx,
                "AREA_TYPE": area.area_type,
                "FOAM_TYPE": area.foam_type,
                "FOAM_THICKNESS": area.foam_thickness,
                "SQFT": cost.sqft,
                "GALLONS": cost.gallons,
                "SETS": cost.sets,
                "BASE_MATERIAL_COST": cost.base_material_cost,
                "MARKUP": cost.markup_amount,
                "TOTAL_COST": cost.total_cost,
            }
        )
    return pd.DataFrame(rows, columns=AREA_COLUMNS)


def _summary_lines(result: EstimateResult) -> List[Tuple[str, float]]:
    job = result.job
    actual = result.actuals
    g = result.estimate.global_inputs
    return [
        ("Open Cell Gallons", job.open_gallons),
        ("Open Cell Sets", job.open_sets),
        ("Closed Cell Gallons", job.closed_gallons),
        ("Closed Cell Sets", job.closed_sets),
        ("Total Material Cost", job.base_material_cost),
        ("Base Labor Cost", job.base_labor_cost),
        ("Fuel Cost", job.fuel_cost),
        ("Waste Disposal", g.waste_disposal),
        ("Equipment Rental", g.equipment_rental),
        ("Base Job Cost", job.total_base_cost),
        ("Material Markup", job.material_markup_amount),
        ("Labor Markup", job.labor_markup_amount),
        ("Customer Charge", job.customer_cost),
        ("Franchise Royalty", job.franchise_royalty),
        ("Brand Fund", job.brand_fund),
        ("Sales Commission", job.sales_commission),
        ("Total Fees", job.total_fees),
        ("Estimated Profit", job.estimated_profit),
        ("Profit Margin %", job.profit_margin),
        ("Actual Material Cost", actual.actual_material_cost),
        ("Actual Labor Cost", actual.actual_labor_cost),
        ("Actual Base Job Cost", actual.actual_base_cost),
        ("Actual Fees", actual.actual_fees),
        ("Actual Profit", actual.actual_profit),
        ("Actual Margin %", actual.actual_margin),
    ]


def inputs_frame(result: EstimateResult) -> pd.DataFrame:
    """Job-level inputs and actuals, labelled as on the estimate form."""

    estimate = result.estimate
    rows = []
    for record in (estimate.global_inputs, estimate.actuals):
        for f in fields(record):
            rows.append((FIELD_LABELS[f.name], getattr(record, f.name)))
    return pd.DataFrame(rows, columns=["INPUT", "VALUE"])


def summary_frame(result: EstimateResult) -> pd.DataFrame:
    return pd.DataFrame(_summary_lines(result), columns=["LINE", "AMOUNT"])


def make_summary_text(result: EstimateResult) -> str:
    job = result.job
    actual = result.actuals
    g = result.estimate.global_inputs
    title = result.estimate.name or "(unnamed estimate)"
    areas = area_frame(result)
    table = areas.to_string(index=False, float_format=lambda v: f"{v:,.2f}") if not areas.empty else "(no spray areas)"
    return (
        f"Estimate: {title}\n"
        f"Open Cell: {job.open_gallons:.1f} gal • {job.open_sets:.2f} sets\n"
        f"Closed Cell: {job.closed_gallons:.1f} gal • {job.closed_sets:.2f} sets\n"
        f"Spray areas:\n{table}\n"
        f"Total Material Cost: ${job.base_material_cost:,.2f}\n"
        f"Base Labor Cost: ${job.base_labor_cost:,.2f}\n"
        f"Fuel Cost: ${job.fuel_cost:,.2f}\n"
        f"Waste Disposal: ${g.waste_disposal:,.2f}\n"
        f"Equipment Rental: ${g.equipment_rental:,.2f}\n"
        f"Base Job Cost: ${job.total_base_cost:,.2f}\n"
        f"Material Markup: ${job.material_markup_amount:,.2f}\n"
        f"Labor Markup: ${job.labor_markup_amount:,.2f}\n"
        f"Customer Charge: ${job.customer_cost:,.2f}\n"
        f"Franchise Royalty: ${job.franchise_royalty:,.2f}\n"
        f"Brand Fund: ${job.brand_fund:,.2f}\n"
        f"Sales Commission: ${job.sales_commission:,.2f}\n"
        f"Total Fees: ${job.total_fees:,.2f}\n"
        f"Estimated Profit: ${job.estimated_profit:,.2f} ({job.profit_margin:.1f}%) [{job.margin_status}]\n"
        f"Actual Material Cost: ${actual.actual_material_cost:,.2f}\n"
        f"Actual Labor Cost: ${actual.actual_labor_cost:,.2f}\n"
        f"Actual Base Job Cost: ${actual.actual_base_cost:,.2f}\n"
        f"Total Fees: ${actual.actual_fees:,.2f}\n"
        f"Actual Profit: ${actual.actual_profit:,.2f} ({actual.actual_margin:.1f}%) [{actual.margin_status}]\n"
    )
