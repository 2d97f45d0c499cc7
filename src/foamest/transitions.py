"""
Pure edit operations on an :class:`~foamest.models.Estimate`.

Every function returns a new estimate; the input value is never changed.
"""

from __future__ import annotations

import math
import re
from dataclasses import fields, replace
from typing import Optional

from .models import Actuals, Estimate, GlobalInputs, SprayArea
from .project_meta import (
    DEFAULT_PITCH,
    GENERAL_AREA,
    GLOBAL_INPUT_DEFAULTS,
    OPEN_CELL,
    attribute_name,
    foam_defaults,
    normalize_area_type,
    normalize_foam_type,
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_TEXT_FIELDS = {"foam_type", "area_type", "roof_pitch"}


def coerce_number(value: object) -> float:
    """
    Coerce a form value to a float the way the estimate form does.

    Numbers pass through, strings use their leading numeric prefix
    (``"12ft"`` -> 12.0, ``"Infinity"`` -> inf), and anything unparseable,
    NaN or boolean becomes 0.
    """

    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return 0.0 if math.isnan(number) else number
    match = _LEADING_NUMBER.match(str(value if value is not None else ""))
    if not match:
        return 0.0
    return float(match.group(0))


def default_area() -> SprayArea:
    thickness, price, markup = foam_defaults(OPEN_CELL)
    return SprayArea(
        length=0.0,
        width=0.0,
        foam_type=OPEN_CELL,
        foam_thickness=thickness,
        material_price=price,
        material_markup=markup,
        area_type=GENERAL_AREA,
        roof_pitch=DEFAULT_PITCH,
    )


def new_estimate(name: str = "") -> Estimate:
    """A fresh estimate with the form defaults and one default area."""

    return Estimate(
        name=name,
        global_inputs=GlobalInputs(**GLOBAL_INPUT_DEFAULTS),
        spray_areas=(default_area(),),
        actuals=Actuals(),
    )


def rename(estimate: Estimate, name: str) -> Estimate:
    return replace(estimate, name=str(name))


def _check_field(record_type: type, key: str) -> str:
    attr = attribute_name(key)
    if attr not in {f.name for f in fields(record_type)}:
        raise KeyError(f"{key} is not a {record_type.__name__} field")
    return attr


def update_global(estimate: Estimate, key: str, value: object) -> Estimate:
    attr = _check_field(GlobalInputs, key)
    inputs = replace(estimate.global_inputs, **{attr: coerce_number(value)})
    return replace(estimate, global_inputs=inputs)


def add_area(estimate: Estimate, area: Optional[SprayArea] = None) -> Estimate:
    new_area = area if area is not None else default_area()
    return replace(estimate, spray_areas=estimate.spray_areas + (new_area,))


def _check_index(estimate: Estimate, index: int) -> int:
    count = len(estimate.spray_areas)
    if not 0 <= index < count:
        raise IndexError(f"Spray area {index} out of range ({count} areas)")
    return index


def remove_area(estimate: Estimate, index: int) -> Estimate:
    idx = _check_index(estimate, index)
    areas = estimate.spray_areas[:idx] + estimate.spray_areas[idx + 1:]
    return replace(estimate, spray_areas=areas)


def update_area(estimate: Estimate, index: int, key: str, value: object) -> Estimate:
    """
    Set one field of the area at ``index``.

    Changing the foam type also resets thickness, material price and markup
    to that foam's defaults, whatever they were before.
    """

    idx = _check_index(estimate, index)
    attr = _check_field(SprayArea, key)
    area = estimate.spray_areas[idx]

    if attr == "foam_type":
        foam_type = normalize_foam_type(str(value)) or str(value)
        thickness, price, markup = foam_defaults(foam_type)
        area = replace(
            area,
            foam_type=foam_type,
            foam_thickness=thickness,
            material_price=price,
            material_markup=markup,
        )
    elif attr == "area_type":
        area = replace(area, area_type=normalize_area_type(str(value)) or str(value))
    elif attr in _TEXT_FIELDS:
        area = replace(area, **{attr: str(value)})
    else:
        area = replace(area, **{attr: coerce_number(value)})

    areas = estimate.spray_areas[:idx] + (area,) + estimate.spray_areas[idx + 1:]
    return replace(estimate, spray_areas=areas)


def update_actual(estimate: Estimate, key: str, value: object) -> Estimate:
    attr = _check_field(Actuals, key)
    return replace(estimate, actuals=replace(estimate.actuals, **{attr: coerce_number(value)}))


def set_actuals(estimate: Estimate, **values: object) -> Estimate:
    """Replace any subset of the actuals counters in one step."""

    updated = estimate
    for key, value in values.items():
        updated = update_actual(updated, key, value)
    return updated
