from .curve import CurvePoint, band_response, compute_eq_curve, eq_curve

__all__ = ["CurvePoint", "band_response", "compute_eq_curve", "eq_curve"]
