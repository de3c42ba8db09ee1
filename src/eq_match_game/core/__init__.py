from .bands import Band, BandResult, EqScore, normalize, normalize_bands
from .scoring import score, score_enhanced, score_simple, tolerance_score

__all__ = [
    "Band",
    "BandResult",
    "EqScore",
    "normalize",
    "normalize_bands",
    "score",
    "score_simple",
    "score_enhanced",
    "tolerance_score",
]
