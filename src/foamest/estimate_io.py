"""Read and write saved estimate files."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .models import Actuals, Estimate, GlobalInputs, SprayArea
from .project_meta import WIRE_NAMES
from .transitions import coerce_number

logger = logging.getLogger(__name__)

DEFAULT_FILE_STEM = "spray-foam-estimate"
INVALID_JSON_MESSAGE = "Invalid JSON file."

PathLike = Union[str, Path]


class EstimateFileError(ValueError):
    """Raised when an estimate file cannot be parsed."""


def _wire_value(value: Any) -> Any:
    # NaN and infinities are not JSON; written as null they load back as 0
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _record_to_wire(record: object) -> Dict[str, Any]:
    return {WIRE_NAMES[key]: _wire_value(value) for key, value in asdict(record).items()}


def to_dict(estimate: Estimate) -> Dict[str, Any]:
    return {
        "estimateName": estimate.name,
        "globalInputs": _record_to_wire(estimate.global_inputs),
        "sprayAreas": [_record_to_wire(area) for area in estimate.spray_areas],
        "actuals": _record_to_wire(estimate.actuals),
    }


def dumps(estimate: Estimate) -> str:
    return json.dumps(to_dict(estimate), indent=2, allow_nan=False)


def _number(value: object) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return coerce_number(value)


def _record_from_wire(record_type: type, payload: object, label: str):
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise EstimateFileError(f"{label} must be a JSON object, got {type(payload).__name__}")
    values: Dict[str, Any] = {}
    for f in fields(record_type):
        raw = payload.get(WIRE_NAMES[f.name])
        if f.type in ("str", str):
            values[f.name] = "" if raw is None else str(raw)
        else:
            values[f.name] = _number(raw)
    return record_type(**values)


def from_dict(payload: Mapping[str, Any]) -> Estimate:
    """
    Build an estimate from a parsed document.

    Missing top-level keys fall back to empty values (no name, zeroed inputs,
    no areas, zeroed actuals), not to the defaults of a new estimate.
    """

    areas_payload = payload.get("sprayAreas") or []
    if not isinstance(areas_payload, list):
        raise EstimateFileError("sprayAreas must be a JSON array")
    name = payload.get("estimateName")
    return Estimate(
        name="" if name is None else str(name),
        global_inputs=_record_from_wire(GlobalInputs, payload.get("globalInputs"), "globalInputs"),
        spray_areas=tuple(
            _record_from_wire(SprayArea, area, f"sprayAreas[{idx}]") for idx, area in enumerate(areas_payload)
        ),
        actuals=_record_from_wire(Actuals, payload.get("actuals"), "actuals"),
    )


def loads(text: str) -> Estimate:
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise EstimateFileError(INVALID_JSON_MESSAGE) from exc
    if not isinstance(payload, dict):
        raise EstimateFileError(INVALID_JSON_MESSAGE)
    return from_dict(payload)


def default_filename(estimate: Estimate) -> str:
    return f"{estimate.name or DEFAULT_FILE_STEM}.json"


def estimate_target(estimate: Estimate, path: PathLike) -> Path:
    """File that ``save_estimate`` writes for ``path``.

    When ``path`` is an existing directory the file is named after the estimate.
    """

    target = Path(path).expanduser()
    if target.is_dir():
        target = target / default_filename(estimate)
    return target


def save_estimate(estimate: Estimate, path: PathLike) -> Path:
    """Write ``estimate`` as pretty-printed JSON and return the file written."""

    target = estimate_target(estimate, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps(estimate), encoding="utf-8")
    logger.info("Saved estimate %r to %s", estimate.name, target)
    return target


def load_estimate(path: PathLike) -> Estimate:
    target = Path(path).expanduser()
    try:
        text = target.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise EstimateFileError(INVALID_JSON_MESSAGE) from exc
    estimate = loads(text)
    logger.info("Loaded estimate %r from %s (%d areas)", estimate.name, target, len(estimate.spray_areas))
    return estimate
