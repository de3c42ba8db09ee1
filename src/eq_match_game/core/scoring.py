# src/eq_match_game/core/scoring.py

"""
EQ match scoring.

Two strategies, picked from the shape of the target data:

1. Simple mode (targets carry only freq/gain): each target band is matched to
   a user band at exactly the same frequency and scored on gain error alone.
2. Enhanced mode (any target carries id, q or type): each target band is
   matched to the nearest user band within 3 * tol_freq and scored on a
   weighted mix of gain, frequency and Q error.

A user band is never removed from the candidate pool, so one user band can
satisfy several target bands.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import List, Optional

from .. import config
from ..utils import clamp, round_half_up
from .bands import Band, BandResult, EqScore, normalize_bands

logger = logging.getLogger(__name__)

NAN = float("nan")


def tolerance_score(error, tolerance, penalty_rate):
    """
    100 inside the tolerance window, then a linear decay of penalty_rate
    points per unit of excess error, floored at 0.
    """
    error = abs(error)
    if error <= tolerance:
        return 100.0
    return max(0.0, 100.0 - penalty_rate * (error - tolerance))


def _clamped_score(value) -> int:
    return round_half_up(clamp(value, 0, 100))


def _as_band_list(bands, name) -> List[Band]:
    if not isinstance(bands, Sequence) or isinstance(bands, (str, bytes)):
        raise TypeError(f"Invalid input: {name} must be a sequence of bands, got {type(bands).__name__}")

    result = []
    for band in bands:
        if isinstance(band, Band):
            result.append(band)
        elif isinstance(band, Mapping):
            result.append(Band.from_dict(band))
        else:
            raise TypeError(f"Invalid input: {name} contains a {type(band).__name__}, expected a band")
    return result


def is_enhanced_target(target_bands) -> bool:
    """Enhanced mode applies when any target band carries id, q or type."""
    return any(band.has_extended_fields for band in target_bands)


def find_best_frequency_match(user_bands, target_band, tol_freq) -> Optional[Band]:
    """
    Nearest user band by |freq difference|, limited to MATCH_RADIUS_FACTOR * tol_freq.
    Ties keep the earliest candidate.
    """
    max_diff = tol_freq * config.MATCH_RADIUS_FACTOR
    best_match = None
    min_diff = math.inf
    for user_band in user_bands:
        diff = abs(user_band.freq - target_band.freq)
        if diff < min_diff and diff <= max_diff:
            min_diff = diff
            best_match = user_band
    return best_match


def score_simple(user_bands, target_bands, tol_db=config.DEFAULT_TOL_DB) -> List[BandResult]:
    """Per-band results using exact frequency matching and gain error only."""
    per_band = []
    for target in target_bands:
        match = next((b for b in user_bands if b.freq == target.freq), None)
        if match is None:
            logger.debug("No user band at %.1f Hz", target.freq)
            per_band.append(BandResult(freq=target.freq, delta_db=NAN, score=0))
            continue

        delta_db = match.gain_db - target.gain_db
        band_score = tolerance_score(delta_db, tol_db, config.PENALTY_PER_DB)
        per_band.append(BandResult(freq=target.freq, delta_db=delta_db, score=_clamped_score(band_score)))
    return per_band


def score_enhanced(user_bands, target_bands, tol_db=config.DEFAULT_TOL_DB,
                   tol_freq=config.DEFAULT_TOL_FREQ, tol_q=config.DEFAULT_TOL_Q) -> List[BandResult]:
    """Per-band results using nearest-frequency matching and weighted gain/freq/Q error."""
    users = normalize_bands(user_bands, config.USER_ID_PREFIX)
    targets = normalize_bands(target_bands, config.TARGET_ID_PREFIX)

    per_band = []
    for raw_target, target in zip(target_bands, targets):
        match = find_best_frequency_match(users, target, tol_freq)
        if match is None:
            logger.debug("No user band within %.1f Hz of %.1f Hz",
                         tol_freq * config.MATCH_RADIUS_FACTOR, target.freq)
            per_band.append(BandResult(
                id=raw_target.id, freq=target.freq,
                delta_db=NAN, delta_freq=NAN, delta_q=NAN, score=0))
            continue

        delta_db = match.gain_db - target.gain_db
        delta_freq = match.freq - target.freq
        delta_q = match.q - target.q

        db_score = tolerance_score(delta_db, tol_db, config.PENALTY_PER_DB)
        freq_score = tolerance_score(delta_freq, tol_freq, config.FREQ_PENALTY_RATE)
        q_score = tolerance_score(delta_q, tol_q, config.Q_PENALTY_RATE)

        combined = (db_score * config.GAIN_WEIGHT
                    + freq_score * config.FREQ_WEIGHT
                    + q_score * config.Q_WEIGHT)

        per_band.append(BandResult(
            id=raw_target.id, freq=target.freq,
            delta_db=delta_db, delta_freq=delta_freq, delta_q=delta_q,
            score=_clamped_score(combined)))
    return per_band


def score(user_bands, target_bands, tol_db=config.DEFAULT_TOL_DB,
          tol_freq=config.DEFAULT_TOL_FREQ, tol_q=config.DEFAULT_TOL_Q) -> EqScore:
    """
    Score a user EQ against a target EQ.

    :param user_bands: The player's bands (Band objects or {"freq", "gainDb", ...} mappings).
    :param target_bands: The bands to match.
    :param tol_db: Gain error (dB) that still scores 100.
    :param tol_freq: Frequency error (Hz) that still scores 100; enhanced mode only.
    :param tol_q: Q error that still scores 100; enhanced mode only.
    :return: EqScore with the rounded mean score and per-band results in target order.
    :raises TypeError: If either argument is not a sequence of bands.
    """
    users = _as_band_list(user_bands, "user_bands")
    targets = _as_band_list(target_bands, "target_bands")

    if not targets:
        return EqScore(total=0, per_band=())

    if is_enhanced_target(targets):
        logger.debug("Scoring %d target bands in enhanced mode", len(targets))
        per_band = score_enhanced(users, targets, tol_db, tol_freq, tol_q)
    else:
        logger.debug("Scoring %d target bands in simple mode", len(targets))
        per_band = score_simple(users, targets, tol_db)

    total = sum(r.score for r in per_band) / len(per_band) if per_band else 0
    return EqScore(total=_clamped_score(total), per_band=tuple(per_band))
