# src/eq_match_game/response/curve.py

"""
Approximate frequency-response curves for a set of EQ bands.

These are visual heuristics, not biquad transfer functions: each filter type
maps frequency to a fraction of the band's gain, and the curve is the sum of
gain * fraction over all bands.
"""

import logging
from typing import List, NamedTuple, Sequence

import numpy as np

from .. import config
from ..core.bands import Band, normalize_bands
from ..utils import log_frequency_grid

logger = logging.getLogger(__name__)


class CurvePoint(NamedTuple):
    freq_hz: float
    gain_db: float


# === Filter Functions (fraction of the band gain applied at f) ===
def peaking_filter_response(f, fc, q):
    """Symmetric bell in log-frequency space; narrower as Q grows."""
    log_ratio = np.log(f / fc)
    q_factor = max(config.MIN_Q, q)
    return 1.0 / (1.0 + (log_ratio * q_factor * config.PEAK_BELL_WIDTH) ** 2)


def notch_filter_response(f, fc, q):
    return -peaking_filter_response(f, fc, q)


def highpass_filter_response(f, fc, q):
    return np.where(f >= fc, 1.0, (f / fc) ** (2 * q))


def lowpass_filter_response(f, fc, q):
    return np.where(f <= fc, 1.0, (fc / f) ** (2 * q))


def highshelf_filter_response(f, fc, q):
    width = fc / max(config.MIN_Q, q)
    return np.where(f >= fc, 1.0, 0.5 + 0.5 * np.tanh((f - fc) / width))


def lowshelf_filter_response(f, fc, q):
    width = fc / max(config.MIN_Q, q)
    return np.where(f <= fc, 1.0, 0.5 + 0.5 * np.tanh((fc - f) / width))


FILTER_RESPONSES = {
    "peak": peaking_filter_response,
    "notch": notch_filter_response,
    "highpass": highpass_filter_response,
    "lowpass": lowpass_filter_response,
    "highshelf": highshelf_filter_response,
    "lowshelf": lowshelf_filter_response,
}


def band_response(f, band: Band):
    """Gain contribution (dB) of one band at the frequencies in f."""
    f = np.asarray(f, dtype=float)
    response = FILTER_RESPONSES[band.effective_type]
    return band.gain_db * response(f, band.freq, band.effective_q)


def compute_eq_curve(f, bands: Sequence[Band]):
    """
    Sums the contributions of all bands. No display clamp is applied.
    """
    f = np.asarray(f, dtype=float)
    eq_total = np.zeros_like(f)
    for band in normalize_bands(bands):
        eq_total += band_response(f, band)
    return eq_total


def eq_curve(bands: Sequence[Band], num_points: int = config.CURVE_POINTS) -> List[CurvePoint]:
    """
    Sampled display curve: num_points log-spaced frequencies from 20 Hz to
    20 kHz, each paired with the summed gain clamped to [-12, 12] dB.
    An empty band list gives an empty curve.
    """
    if not bands:
        return []

    freqs = log_frequency_grid(num_points)
    gains = np.clip(compute_eq_curve(freqs, bands), config.MIN_GAIN, config.MAX_GAIN)
    logger.debug("Evaluated %d bands at %d points", len(bands), len(freqs))
    return [CurvePoint(float(f), float(g)) for f, g in zip(freqs, gains)]
