"""Spray-foam insulation estimate calculator."""

from .api import calculate
from .estimate_io import EstimateFileError, load_estimate, save_estimate
from .models import Actuals, Estimate, EstimateResult, GlobalInputs, SprayArea
from .transitions import new_estimate

__all__ = [
    "calculate",
    "EstimateFileError",
    "load_estimate",
    "save_estimate",
    "Actuals",
    "Estimate",
    "EstimateResult",
    "GlobalInputs",
    "SprayArea",
    "new_estimate",
]
