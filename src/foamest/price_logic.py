import logging
import math
import os
from typing import Iterable, List, Optional, Sequence

from dotenv import load_dotenv

from .geometry import material_quantities, safe_ratio
from .models import (
    Actuals,
    ActualsSummary,
    AreaCost,
    GlobalInputs,
    JobSummary,
    SprayArea,
)
from .project_meta import GALLONS_PER_SET, OPEN_CELL

load_dotenv()

logger = logging.getLogger(__name__)

# Franchise overhead, each a flat share of the customer charge.
FRANCHISE_ROYALTY_RATE = float(os.getenv('FRANCHISE_ROYALTY_RATE', '0.06'))
BRAND_FUND_RATE = float(os.getenv('BRAND_FUND_RATE', '0.01'))
SALES_COMMISSION_RATE = float(os.getenv('SALES_COMMISSION_RATE', '0.03'))

# The post-job comparison uses a single flat fee and prices every actual
# gallon at the open-cell set price, whatever the real foam mix was.
ACTUAL_FEE_RATE = float(os.getenv('ACTUAL_FEE_RATE', '0.10'))
ACTUAL_SET_PRICE = float(os.getenv('ACTUAL_SET_PRICE', '1870'))

MARGIN_LOW_THRESHOLD = float(os.getenv('MARGIN_LOW_THRESHOLD', '25'))
MARGIN_HEALTHY_THRESHOLD = float(os.getenv('MARGIN_HEALTHY_THRESHOLD', '30'))

MARGIN_LOW = "low"
MARGIN_MEDIUM = "medium"
MARGIN_HEALTHY = "healthy"


def classify_margin(margin: float) -> str:
    """
    Bucket a margin percentage for display.

    Below 25 is ``low``, below 30 is ``medium``, anything else (including
    NaN and infinities) falls through to ``healthy``.
    """

    if margin < MARGIN_LOW_THRESHOLD:
        return MARGIN_LOW
    if margin < MARGIN_HEALTHY_THRESHOLD:
        return MARGIN_MEDIUM
    return MARGIN_HEALTHY


def area_cost(area: SprayArea) -> AreaCost:
    qty = material_quantities(area)
    base_material_cost = qty.sets * area.material_price
    markup_amount = base_material_cost * (area.material_markup / 100)
    return AreaCost(
        sqft=qty.sqft,
        gallons=qty.gallons,
        sets=qty.sets,
        base_material_cost=base_material_cost,
        markup_amount=markup_amount,
        total_cost=base_material_cost + markup_amount,
    )


def area_costs(areas: Iterable[SprayArea]) -> List[AreaCost]:
    return [area_cost(area) for area in areas]


def summarize_job(
    global_inputs: GlobalInputs,
    areas: Sequence[SprayArea],
    costs: Optional[Sequence[AreaCost]] = None,
) -> JobSummary:
    """
    Fold per-area material costs and the job-level inputs into a cost summary.

    Parameters
    ----------
    global_inputs:
        Labor, travel and overhead inputs for the job.
    areas:
        Spray areas in display order.
    costs:
        Optional precomputed :func:`area_cost` results aligned with ``areas``.

    Returns
    -------
    JobSummary
        Gallon totals by foam class, base costs, markups, customer charge,
        franchise fees and the estimated profit and margin.
    """

    if costs is None:
        costs = area_costs(areas)
    if len(costs) != len(areas):
        raise ValueError(f"Expected {len(areas)} area costs, got {len(costs)}")

    open_gallons = 0.0
    closed_gallons = 0.0
    base_material_cost = 0.0
    material_markup_amount = 0.0
    for area, cost in zip(areas, costs):
        if area.foam_type == OPEN_CELL:
            open_gallons += cost.gallons
        else:
            closed_gallons += cost.gallons
        base_material_cost += cost.base_material_cost
        material_markup_amount += cost.markup_amount

    g = global_inputs
    fuel_cost = g.travel_distance * g.travel_rate
    base_labor_cost = g.labor_hours * g.manual_labor_rate
    total_base_cost = base_material_cost + base_labor_cost + fuel_cost + g.waste_disposal + g.equipment_rental
    labor_markup_amount = base_labor_cost * (g.labor_markup / 100)
    customer_cost = total_base_cost + material_markup_amount + labor_markup_amount

    franchise_royalty = customer_cost * FRANCHISE_ROYALTY_RATE
    brand_fund = customer_cost * BRAND_FUND_RATE
    sales_commission = customer_cost * SALES_COMMISSION_RATE
    total_fees = franchise_royalty + brand_fund + sales_commission

    estimated_profit = customer_cost - total_base_cost - total_fees
    profit_margin = safe_ratio(estimated_profit, customer_cost) * 100
    if not math.isfinite(profit_margin):
        logger.warning("Customer charge is $%.2f; estimated margin is undefined", customer_cost)

    return JobSummary(
        open_gallons=open_gallons,
        closed_gallons=closed_gallons,
        open_sets=open_gallons / GALLONS_PER_SET,
        closed_sets=closed_gallons / GALLONS_PER_SET,
        base_material_cost=base_material_cost,
        material_markup_amount=material_markup_amount,
        fuel_cost=fuel_cost,
        base_labor_cost=base_labor_cost,
        total_base_cost=total_base_cost,
        labor_markup_amount=labor_markup_amount,
        customer_cost=customer_cost,
        franchise_royalty=franchise_royalty,
        brand_fund=brand_fund,
        sales_commission=sales_commission,
        total_fees=total_fees,
        estimated_profit=estimated_profit,
        profit_margin=profit_margin,
        margin_status=classify_margin(profit_margin),
    )


def summarize_actuals(global_inputs: GlobalInputs, actuals: Actuals, job: JobSummary) -> ActualsSummary:
    """
    Compare what the job actually consumed against the estimated charge.

    The customer is billed the estimate, so ``actual_customer_cost`` is the
    estimated customer cost rather than a recomputation from actuals.
    """

    g = global_inputs
    actual_gallons = actuals.actual_open_gallons + actuals.actual_closed_gallons
    actual_material_cost = (actual_gallons / GALLONS_PER_SET) * ACTUAL_SET_PRICE
    actual_labor_cost = actuals.actual_labor_hours * g.manual_labor_rate
    actual_base_cost = actual_material_cost + actual_labor_cost + job.fuel_cost + g.waste_disposal + g.equipment_rental
    actual_customer_cost = job.customer_cost
    actual_fees = actual_customer_cost * ACTUAL_FEE_RATE
    actual_profit = actual_customer_cost - actual_base_cost - actual_fees
    actual_margin = safe_ratio(actual_profit, actual_customer_cost) * 100
    if not math.isfinite(actual_margin):
        logger.warning("Customer charge is $%.2f; actual margin is undefined", actual_customer_cost)

    return ActualsSummary(
        actual_material_cost=actual_material_cost,
        actual_labor_cost=actual_labor_cost,
        actual_base_cost=actual_base_cost,
        actual_customer_cost=actual_customer_cost,
        actual_fees=actual_fees,
        actual_profit=actual_profit,
        actual_margin=actual_margin,
        margin_status=classify_margin(actual_margin),
    )
