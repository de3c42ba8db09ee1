"""Scoring and response-curve core for the EQ Match ear-training game."""

from .core.bands import Band, BandResult, EqScore, normalize, normalize_bands
from .core.scoring import score
from .response.curve import CurvePoint, eq_curve

__all__ = [
    "Band",
    "BandResult",
    "EqScore",
    "CurvePoint",
    "normalize",
    "normalize_bands",
    "eq_curve",
    "score",
]
