from __future__ import annotations

from pathlib import Path

import pytest

from foamest.models import Actuals, Estimate, GlobalInputs, SprayArea

DATA_SAMPLE_DIR = Path(__file__).resolve().parents[1] / "data_sample"


@pytest.fixture
def sample_estimate_path() -> Path:
    return DATA_SAMPLE_DIR / "sample_estimate.json"


@pytest.fixture
def open_area() -> SprayArea:
    return SprayArea(
        length=10.0,
        width=20.0,
        foam_type="Open",
        foam_thickness=6.0,
        material_price=1870.0,
        material_markup=80.0,
        area_type="General Area",
        roof_pitch="4/12",
    )


@pytest.fixture
def closed_area() -> SprayArea:
    return SprayArea(
        length=10.0,
        width=20.0,
        foam_type="Closed",
        foam_thickness=2.0,
        material_price=2470.0,
        material_markup=75.0,
        area_type="General Area",
        roof_pitch="4/12",
    )


@pytest.fixture
def job_inputs() -> GlobalInputs:
    return GlobalInputs(
        manual_labor_rate=50.0,
        labor_hours=10.0,
        labor_markup=40.0,
        travel_distance=50.0,
        travel_rate=0.68,
        waste_disposal=50.0,
        equipment_rental=100.0,
    )


@pytest.fixture
def two_area_estimate(job_inputs: GlobalInputs, open_area: SprayArea, closed_area: SprayArea) -> Estimate:
    return Estimate(
        name="Barn retrofit",
        global_inputs=job_inputs,
        spray_areas=(open_area, closed_area),
        actuals=Actuals(actual_labor_hours=12.0, actual_open_gallons=6.0, actual_closed_gallons=5.0),
    )
