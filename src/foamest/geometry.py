"""Square footage, gallons and set quantities for a single spray area."""

from __future__ import annotations

import logging
import math
from typing import Tuple

from .models import AreaQuantities, SprayArea
from .project_meta import GABLE, GALLONS_PER_SET, OPEN_CELL, ROOF_DECK

logger = logging.getLogger(__name__)

# Yield: board feet per set and the thickness divisor for each foam class.
BOARD_FEET_PER_SET = 2000.0
OPEN_CELL_RATIO = 6.0
CLOSED_CELL_RATIO = 2.0

_NAN = float("nan")


def safe_ratio(numerator: float, denominator: float) -> float:
    """
    Divide like IEEE floats do instead of raising.

    ``0/0`` and anything involving NaN give NaN; ``x/0`` gives a signed infinity.
    """

    if math.isnan(numerator) or math.isnan(denominator):
        return _NAN
    if denominator == 0:
        if numerator == 0:
            return _NAN
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _to_number(text: str) -> float:
    value = text.strip()
    if not value:
        # An empty side parses as zero, same as the form's Number("") coercion.
        return 0.0
    try:
        return float(value)
    except ValueError:
        return _NAN


def parse_pitch(text: str) -> Tuple[float, float]:
    """
    Split a ``"rise/run"`` pitch string into two numbers.

    Sides that are not numeric come back as NaN and a missing run is NaN, so
    a malformed pitch propagates NaN instead of raising.
    """

    parts = str(text if text is not None else "").split("/")
    rise = _to_number(parts[0])
    run = _to_number(parts[1]) if len(parts) > 1 else _NAN
    return rise, run


def pitch_factor(text: str) -> float:
    """Multiplier converting plan-view roof area to sloped surface area."""

    rise, run = parse_pitch(text)
    slope = safe_ratio(rise, run)
    factor = math.sqrt(1.0 + slope * slope) if not math.isnan(slope) else _NAN
    if math.isnan(factor):
        logger.warning("Roof pitch %r is not a usable rise/run ratio; square footage is undefined", text)
    return factor


def area_sqft(area: SprayArea) -> float:
    sqft = area.length * area.width
    if area.area_type == GABLE:
        sqft = sqft / 2
    if area.area_type == ROOF_DECK:
        sqft *= pitch_factor(area.roof_pitch)
    return sqft


def foam_ratio(foam_type: str) -> float:
    return OPEN_CELL_RATIO if foam_type == OPEN_CELL else CLOSED_CELL_RATIO


def material_quantities(area: SprayArea) -> AreaQuantities:
    """
    Convert one area's geometry and foam parameters into material quantities.

    ``gallons = sqft * (thickness / ratio) / 2000 * 55`` where the ratio is 6
    for open cell and 2 for everything else; ``sets = gallons / 55``.
    """

    sqft = area_sqft(area)
    gallons = (sqft * (area.foam_thickness / foam_ratio(area.foam_type)) / BOARD_FEET_PER_SET) * GALLONS_PER_SET
    sets = gallons / GALLONS_PER_SET
    return AreaQuantities(sqft=sqft, gallons=gallons, sets=sets)
