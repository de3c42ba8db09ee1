# src/eq_match_game/config.py

"""
Central configuration settings for the EQ Match game core.
"""

# =============================================================================
# BAND RANGES
# =============================================================================
MIN_FREQ = 20  # Hz
MAX_FREQ = 20000  # Hz
MIN_GAIN = -12  # dB, also the display clamp of the curve
MAX_GAIN = 12  # dB
MIN_Q = 0.1
MAX_Q = 10

# =============================================================================
# BAND DEFAULTS
# =============================================================================
DEFAULT_Q = 1.0
DEFAULT_FILTER_TYPE = "peak"
FILTER_TYPES = ("peak", "highpass", "lowpass", "highshelf", "lowshelf", "notch")

USER_ID_PREFIX = "user"
TARGET_ID_PREFIX = "target"

# =============================================================================
# CURVE SETTINGS
# =============================================================================
CURVE_POINTS = 100  # log-spaced samples between MIN_FREQ and MAX_FREQ
PEAK_BELL_WIDTH = 2  # scales ln(f/fc) * q in the peak/notch bell

# =============================================================================
# SCORING SETTINGS
# =============================================================================
DEFAULT_TOL_DB = 3.0  # dB error that still scores 100
DEFAULT_TOL_FREQ = 50.0  # Hz, enhanced mode only
DEFAULT_TOL_Q = 0.5  # enhanced mode only
PENALTY_PER_DB = 10  # points lost per dB beyond tolerance
FREQ_PENALTY_RATE = PENALTY_PER_DB / 10  # points per Hz
Q_PENALTY_RATE = PENALTY_PER_DB * 10  # points per unit of Q
MATCH_RADIUS_FACTOR = 3  # candidates must be within 3 * tol_freq

# Weighted combination in enhanced mode: 50% gain, 30% frequency, 20% Q
GAIN_WEIGHT = 0.5
FREQ_WEIGHT = 0.3
Q_WEIGHT = 0.2

# =============================================================================
# PRESET FILES (Equalizer APO text format)
# =============================================================================
FILTER_CODES = {
    "peak": "PK",
    "notch": "NO",
    "highpass": "HP",
    "lowpass": "LP",
    "highshelf": "HSC",
    "lowshelf": "LSC",
}

# =============================================================================
# PLOT SETTINGS
# =============================================================================
FREQ_GRID_LINES = [50, 100, 200, 500, 1000, 2000, 5000, 10000, 20000]
GAIN_GRID_LINES = [-12, -6, 0, 6, 12]
