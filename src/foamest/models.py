from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class GlobalInputs:
    """Job-level labor, travel and overhead inputs."""

    manual_labor_rate: float = 0.0
    labor_hours: float = 0.0
    labor_markup: float = 0.0
    travel_distance: float = 0.0
    travel_rate: float = 0.0
    waste_disposal: float = 0.0
    equipment_rental: float = 0.0


@dataclass(frozen=True)
class SprayArea:
    """One measured area to be sprayed."""

    length: float = 0.0
    width: float = 0.0
    foam_type: str = ""
    foam_thickness: float = 0.0
    material_price: float = 0.0
    material_markup: float = 0.0
    area_type: str = ""
    roof_pitch: str = ""


@dataclass(frozen=True)
class Actuals:
    """Counters entered after the job is complete."""

    actual_labor_hours: float = 0.0
    actual_open_gallons: float = 0.0
    actual_closed_gallons: float = 0.0


@dataclass(frozen=True)
class Estimate:
    """The persisted unit: name, global inputs, ordered areas and actuals."""

    name: str = ""
    global_inputs: GlobalInputs = field(default_factory=GlobalInputs)
    spray_areas: Tuple[SprayArea, ...] = ()
    actuals: Actuals = field(default_factory=Actuals)


@dataclass(frozen=True)
class AreaQuantities:
    sqft: float
    gallons: float
    sets: float


@dataclass(frozen=True)
class AreaCost:
    """Quantities plus material pricing for a single area."""

    sqft: float
    gallons: float
    sets: float
    base_material_cost: float
    markup_amount: float
    total_cost: float


@dataclass(frozen=True)
class JobSummary:
    """Job-level cost, fee and profit breakdown."""

    open_gallons: float
    closed_gallons: float
    open_sets: float
    closed_sets: float
    base_material_cost: float
    material_markup_amount: float
    fuel_cost: float
    base_labor_cost: float
    total_base_cost: float
    labor_markup_amount: float
    customer_cost: float
    franchise_royalty: float
    brand_fund: float
    sales_commission: float
    total_fees: float
    estimated_profit: float
    profit_margin: float
    margin_status: str


@dataclass(frozen=True)
class ActualsSummary:
    """Post-job comparison of actual costs against the estimated charge."""

    actual_material_cost: float
    actual_labor_cost: float
    actual_base_cost: float
    actual_customer_cost: float
    actual_fees: float
    actual_profit: float
    actual_margin: float
    margin_status: str


@dataclass(frozen=True)
class EstimateResult:
    """Everything derived from one :class:`Estimate`."""

    estimate: Estimate
    areas: Tuple[AreaCost, ...]
    job: JobSummary
    actuals: ActualsSummary
