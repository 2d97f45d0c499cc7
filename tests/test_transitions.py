import math

import pytest

from foamest import transitions
from foamest.models import Actuals, GlobalInputs


def test_new_estimate_uses_form_defaults():
    estimate = transitions.new_estimate("Shop")
    assert estimate.name == "Shop"
    assert estimate.global_inputs == GlobalInputs(
        manual_labor_rate=50.0,
        labor_hours=0.0,
        labor_markup=40.0,
        travel_distance=50.0,
        travel_rate=0.68,
        waste_disposal=50.0,
        equipment_rental=0.0,
    )
    assert estimate.spray_areas == (transitions.default_area(),)
    assert estimate.actuals == Actuals()

    area = estimate.spray_areas[0]
    assert (area.foam_type, area.foam_thickness, area.material_price, area.material_markup) == ("Open", 6.0, 1870.0, 80.0)
    assert (area.area_type, area.roof_pitch) == ("General Area", "4/12")


def test_switching_to_closed_resets_foam_fields(two_area_estimate):
    edited = transitions.update_area(two_area_estimate, 0, "foam_thickness", "9")
    edited = transitions.update_area(edited, 0, "material_price", 999)
    edited = transitions.update_area(edited, 0, "foamType", "Closed")
    area = edited.spray_areas[0]
    assert (area.foam_thickness, area.material_price, area.material_markup) == (2.0, 2470.0, 75.0)


def test_switching_back_to_open_resets_foam_fields(closed_area, two_area_estimate):
    edited = transitions.update_area(two_area_estimate, 1, "foam_type", "open cell")
    area = edited.spray_areas[1]
    assert area.foam_type == "Open"
    assert (area.foam_thickness, area.material_price, area.material_markup) == (6.0, 1870.0, 80.0)


def test_fields_stay_editable_after_foam_reset(two_area_estimate):
    edited = transitions.update_area(two_area_estimate, 0, "foam_type", "Closed")
    edited = transitions.update_area(edited, 0, "materialMarkup", "60")
    assert edited.spray_areas[0].material_markup == 60.0
    assert edited.spray_areas[0].foam_thickness == 2.0


def test_update_area_does_not_touch_original(two_area_estimate, open_area):
    edited = transitions.update_area(two_area_estimate, 0, "length", 12)
    assert edited.spray_areas[0].length == 12.0
    assert two_area_estimate.spray_areas[0] == open_area
    assert edited.spray_areas[1] is two_area_estimate.spray_areas[1]


def test_update_area_text_fields(two_area_estimate):
    edited = transitions.update_area(two_area_estimate, 0, "area_type", "roof deck")
    edited = transitions.update_area(edited, 0, "roofPitch", "8/12")
    assert edited.spray_areas[0].area_type == "Roof Deck"
    assert edited.spray_areas[0].roof_pitch == "8/12"


def test_update_area_rejects_unknown_field(two_area_estimate):
    with pytest.raises(KeyError):
        transitions.update_area(two_area_estimate, 0, "color", "blue")
    with pytest.raises(KeyError):
        transitions.update_area(two_area_estimate, 0, "laborHours", 3)


def test_add_and_remove_area(two_area_estimate, open_area):
    added = transitions.add_area(two_area_estimate)
    assert len(added.spray_areas) == 3
    assert added.spray_areas[-1] == transitions.default_area()

    removed = transitions.remove_area(added, 0)
    assert len(removed.spray_areas) == 2
    assert removed.spray_areas[0] == two_area_estimate.spray_areas[1]

    with pytest.raises(IndexError):
        transitions.remove_area(removed, 5)


def test_remove_last_area_leaves_empty_sequence(two_area_estimate):
    emptied = transitions.remove_area(transitions.remove_area(two_area_estimate, 1), 0)
    assert emptied.spray_areas == ()


def test_update_global_coerces_like_the_form(two_area_estimate):
    edited = transitions.update_global(two_area_estimate, "laborHours", "12.5")
    assert edited.global_inputs.labor_hours == 12.5
    edited = transitions.update_global(edited, "travel_rate", "")
    assert edited.global_inputs.travel_rate == 0.0
    edited = transitions.update_global(edited, "waste_disposal", "75 dollars")
    assert edited.global_inputs.waste_disposal == 75.0


def test_actuals_transitions(two_area_estimate):
    edited = transitions.set_actuals(two_area_estimate, actual_labor_hours="20", actualOpenGallons=40)
    assert edited.actuals == Actuals(actual_labor_hours=20.0, actual_open_gallons=40.0, actual_closed_gallons=5.0)
    edited = transitions.update_actual(edited, "actualClosedGallons", "abc")
    assert edited.actuals.actual_closed_gallons == 0.0


def test_rename(two_area_estimate):
    assert transitions.rename(two_area_estimate, "Garage").name == "Garage"


@pytest.mark.parametrize(
    "value, expected",
    [("3", 3.0), ("-2.5", -2.5), (".5", 0.5), ("1e2", 100.0), ("12ft", 12.0), ("", 0.0), (None, 0.0), ("x1", 0.0), (float("nan"), 0.0), (7, 7.0), (True, 0.0), ("Infinity", math.inf), ("-Infinity", -math.inf), ("infinity", 0.0)],
)
def test_coerce_number(value, expected):
    assert transitions.coerce_number(value) == expected


@pytest.mark.parametrize("index", [-1, -2, 2])
def test_area_index_must_be_in_range(two_area_estimate, index):
    with pytest.raises(IndexError):
        transitions.remove_area(two_area_estimate, index)
    with pytest.raises(IndexError):
        transitions.update_area(two_area_estimate, index, "length", 5)
