# src/eq_match_game/utils.py

"""
Utility functions for frequency grids and value clamping.
"""

import math

import numpy as np
from . import config


def log_frequency_grid(num_points=config.CURVE_POINTS):
    """
    Log-spaced frequencies from MIN_FREQ to MAX_FREQ, both ends included.
    Returns an empty array for num_points <= 0.
    """
    if num_points <= 0:
        return np.array([])
    return np.geomspace(config.MIN_FREQ, config.MAX_FREQ, num_points)


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def round_half_up(value):
    """Round to the nearest integer with .5 going up, as the game UI does."""
    return int(math.floor(value + 0.5))
