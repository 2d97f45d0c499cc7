"""
Shared metadata for estimate inputs: choice lists, form defaults and labels.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

OPEN_CELL = "Open"
CLOSED_CELL = "Closed"
FOAM_TYPES: Tuple[str, ...] = (OPEN_CELL, CLOSED_CELL)

GENERAL_AREA = "General Area"
ROOF_DECK = "Roof Deck"
GABLE = "Gable"
AREA_TYPES: Tuple[str, ...] = (GENERAL_AREA, ROOF_DECK, GABLE)

# Keep tuple structure to preserve order for display
PITCH_CHOICES: Tuple[str, ...] = tuple(f"{rise}/12" for rise in range(1, 13))
DEFAULT_PITCH = "4/12"

GALLONS_PER_SET = 55.0

# foam_type -> (thickness in, price per set, markup %)
FOAM_DEFAULTS: Dict[str, Tuple[float, float, float]] = {
    OPEN_CELL: (6.0, 1870.0, 80.0),
    CLOSED_CELL: (2.0, 2470.0, 75.0),
}

GLOBAL_INPUT_DEFAULTS: Dict[str, float] = {
    "manual_labor_rate": 50.0,
    "labor_hours": 0.0,
    "labor_markup": 40.0,
    "travel_distance": 50.0,
    "travel_rate": 0.68,
    "waste_disposal": 50.0,
    "equipment_rental": 0.0,
}

FIELD_LABELS: Dict[str, str] = {
    "manual_labor_rate": "Manual Labor Rate",
    "labor_hours": "Labor Hours",
    "labor_markup": "Labor Markup",
    "travel_distance": "Travel Distance",
    "travel_rate": "Travel Rate",
    "waste_disposal": "Waste Disposal",
    "equipment_rental": "Equipment Rental",
    "length": "Length",
    "width": "Width",
    "foam_type": "Foam Type",
    "foam_thickness": "Foam Thickness",
    "material_price": "Material Price",
    "material_markup": "Material Markup",
    "area_type": "Area Type",
    "roof_pitch": "Roof Pitch",
    "actual_labor_hours": "Actual Labor Hours",
    "actual_open_gallons": "Actual Open Cell Gallons",
    "actual_closed_gallons": "Actual Closed Cell Gallons",
}


def foam_defaults(foam_type: str) -> Tuple[float, float, float]:
    """Return ``(thickness, price, markup)`` for a foam type.

    Anything other than open cell gets the closed-cell defaults.
    """

    return FOAM_DEFAULTS[OPEN_CELL] if foam_type == OPEN_CELL else FOAM_DEFAULTS[CLOSED_CELL]


def _match_choice(value: str, choices: Tuple[str, ...]) -> Optional[str]:
    if not value:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    if candidate in choices:
        return candidate
    compressed = candidate.lower().replace(" ", "").replace("-", "").replace("_", "")
    for choice in choices:
        if compressed == choice.lower().replace(" ", ""):
            return choice
    return None


def normalize_foam_type(value: str) -> Optional[str]:
    """
    Normalize a foam type string into ``"Open"`` or ``"Closed"``.

    Accepts ``"open"``, ``"Open"``, ``"open cell"``, ``"closed-cell"`` and so on.
    Returns ``None`` if the value cannot be mapped.
    """

    if not value:
        return None
    text = str(value).strip().lower()
    if text.endswith("cell"):
        text = text[: -len("cell")].rstrip(" -_")
    return _match_choice(text, FOAM_TYPES)


def normalize_area_type(value: str) -> Optional[str]:
    """Normalize ``"roof deck"``, ``"ROOF_DECK"`` etc. into the canonical area type."""

    return _match_choice(str(value or ""), AREA_TYPES)

# attribute name -> key used in saved estimate files
WIRE_NAMES: Dict[str, str] = {
    "manual_labor_rate": "manualLaborRate",
    "labor_hours": "laborHours",
    "labor_markup": "laborMarkup",
    "travel_distance": "travelDistance",
    "travel_rate": "travelRate",
    "waste_disposal": "wasteDisposal",
    "equipment_rental": "equipmentRental",
    "length": "length",
    "width": "width",
    "foam_type": "foamType",
    "foam_thickness": "foamThickness",
    "material_price": "materialPrice",
    "material_markup": "materialMarkup",
    "area_type": "areaType",
    "roof_pitch": "roofPitch",
    "actual_labor_hours": "actualLaborHours",
    "actual_open_gallons": "actualOpenGallons",
    "actual_closed_gallons": "actualClosedGallons",
}
ATTRIBUTE_NAMES: Dict[str, str] = {wire: attr for attr, wire in WIRE_NAMES.items()}


def attribute_name(key: str) -> str:
    """Resolve either spelling of a field name to the dataclass attribute."""

    if key in WIRE_NAMES:
        return key
    if key in ATTRIBUTE_NAMES:
        return ATTRIBUTE_NAMES[key]
    raise KeyError(f"Unknown estimate field: {key}")
