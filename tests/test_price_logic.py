from __future__ import annotations

import importlib
import math
from dataclasses import replace

import numpy as np
import pytest

import foamest.price_logic as price_logic
from foamest.models import Actuals, GlobalInputs


def test_area_cost_applies_markup(open_area):
    cost = price_logic.area_cost(open_area)
    assert cost.base_material_cost == pytest.approx(187.0)
    assert cost.markup_amount == pytest.approx(149.6)
    assert cost.total_cost == pytest.approx(336.6)


def test_summarize_job_matches_hand_calculation(job_inputs, open_area, closed_area):
    job = price_logic.summarize_job(job_inputs, [open_area, closed_area])

    assert job.open_gallons == pytest.approx(5.5)
    assert job.closed_gallons == pytest.approx(5.5)
    assert job.open_sets == pytest.approx(0.1)
    assert job.closed_sets == pytest.approx(0.1)

    base_material = 187.0 + 247.0
    material_markup = 149.6 + 185.25
    assert job.base_material_cost == pytest.approx(base_material)
    assert job.material_markup_amount == pytest.approx(material_markup)
    assert job.fuel_cost == pytest.approx(34.0)
    assert job.base_labor_cost == pytest.approx(500.0)

    total_base = base_material + 500.0 + 34.0 + 50.0 + 100.0
    assert job.total_base_cost == pytest.approx(total_base)
    assert job.labor_markup_amount == pytest.approx(200.0)

    customer = total_base + material_markup + 200.0
    assert job.customer_cost == pytest.approx(customer)
    assert job.franchise_royalty == pytest.approx(customer * 0.06)
    assert job.brand_fund == pytest.approx(customer * 0.01)
    assert job.sales_commission == pytest.approx(customer * 0.03)
    assert job.total_fees == pytest.approx(customer * 0.10)

    profit = customer - total_base - customer * 0.10
    assert job.estimated_profit == pytest.approx(profit)
    assert job.profit_margin == pytest.approx(profit / customer * 100)


def test_summarize_job_without_areas(job_inputs):
    job = price_logic.summarize_job(job_inputs, [])
    assert job.open_gallons == 0.0
    assert job.base_material_cost == 0.0
    assert job.total_base_cost == pytest.approx(500.0 + 34.0 + 50.0 + 100.0)


def test_summarize_job_rejects_misaligned_costs(job_inputs, open_area):
    with pytest.raises(ValueError):
        price_logic.summarize_job(job_inputs, [open_area, open_area], costs=[price_logic.area_cost(open_area)])


def test_zero_customer_cost_yields_nan_margin(caplog):
    with caplog.at_level("WARNING", logger="foamest.price_logic"):
        job = price_logic.summarize_job(GlobalInputs(), [])
        actual = price_logic.summarize_actuals(GlobalInputs(), Actuals(), job)
    assert job.customer_cost == 0.0
    assert math.isnan(job.profit_margin)
    assert math.isnan(actual.actual_margin)
    assert "margin is undefined" in caplog.text


def test_nan_flows_through_job_totals(job_inputs, open_area):
    roof = replace(open_area, area_type="Roof Deck", roof_pitch="bad")
    job = price_logic.summarize_job(job_inputs, [roof, open_area])
    assert np.isnan(job.open_gallons)
    assert np.isnan(job.customer_cost)
    assert np.isnan(job.profit_margin)


def test_actuals_use_open_cell_price_and_flat_fee(job_inputs, open_area, closed_area):
    job = price_logic.summarize_job(job_inputs, [open_area, closed_area])
    actuals = Actuals(actual_labor_hours=12.0, actual_open_gallons=27.5, actual_closed_gallons=27.5)
    summary = price_logic.summarize_actuals(job_inputs, actuals, job)

    assert summary.actual_material_cost == pytest.approx(1870.0)
    assert summary.actual_labor_cost == pytest.approx(600.0)
    assert summary.actual_base_cost == pytest.approx(1870.0 + 600.0 + 34.0 + 50.0 + 100.0)
    assert summary.actual_customer_cost == job.customer_cost
    assert summary.actual_fees == pytest.approx(job.customer_cost * 0.10)
    expected_profit = job.customer_cost - summary.actual_base_cost - summary.actual_fees
    assert summary.actual_profit == pytest.approx(expected_profit)
    assert summary.actual_margin == pytest.approx(expected_profit / job.customer_cost * 100)


@pytest.mark.parametrize(
    "margin, status",
    [
        (-5.0, "low"),
        (24.99, "low"),
        (25.0, "medium"),
        (29.9, "medium"),
        (30.0, "healthy"),
        (55.0, "healthy"),
        (float("nan"), "healthy"),
        (float("-inf"), "low"),
    ],
)
def test_classify_margin(margin, status):
    assert price_logic.classify_margin(margin) == status


def test_fee_rates_env_override(monkeypatch, job_inputs, open_area):
    monkeypatch.setenv("FRANCHISE_ROYALTY_RATE", "0.08")
    monkeypatch.setenv("ACTUAL_FEE_RATE", "0.12")
    importlib.reload(price_logic)
    try:
        job = price_logic.summarize_job(job_inputs, [open_area])
        assert job.franchise_royalty == pytest.approx(job.customer_cost * 0.08)
        assert job.total_fees == pytest.approx(job.customer_cost * 0.12)
        actual = price_logic.summarize_actuals(job_inputs, Actuals(), job)
        assert actual.actual_fees == pytest.approx(job.customer_cost * 0.12)
    finally:
        monkeypatch.delenv("FRANCHISE_ROYALTY_RATE", raising=False)
        monkeypatch.delenv("ACTUAL_FEE_RATE", raising=False)
        importlib.reload(price_logic)
