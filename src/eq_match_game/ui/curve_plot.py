# src/eq_match_game/ui/curve_plot.py

"""Static comparison plot of the target and user EQ curves, in the game's dark theme."""

import logging

import matplotlib.pyplot as plt

from .. import config
from ..response.curve import eq_curve

logger = logging.getLogger(__name__)

BACKGROUND = "#1e1e1e"
FOREGROUND = "#dcdcdc"
TARGET_COLOR = "#00ff00"  # Bright Green
USER_COLOR = "#55aaff"  # Blue


def _plot_bands(ax, bands, color, label, num_points):
    curve = eq_curve(bands, num_points)
    if curve:
        freqs, gains = zip(*curve)
        ax.plot(freqs, gains, color=color, linewidth=2, label=label)
    if bands:
        ax.scatter([b.freq for b in bands], [b.gain_db for b in bands],
                   color=color, edgecolors=FOREGROUND, zorder=3, s=40)


def plot_curves(target_bands, user_bands, output_path=None, num_points=config.CURVE_POINTS):
    """
    Draw the target and user display curves with their band markers on a
    log-frequency axis. Returns the Figure; saves it when output_path is given.
    """
    fig, ax = plt.subplots(figsize=(12, 6))
    fig.patch.set_facecolor(BACKGROUND)
    ax.set_facecolor(BACKGROUND)

    _plot_bands(ax, target_bands, TARGET_COLOR, "Target", num_points)
    _plot_bands(ax, user_bands, USER_COLOR, "Your EQ", num_points)

    ax.set_xscale("log")
    ax.set_xlim(config.MIN_FREQ, config.MAX_FREQ)
    ax.set_ylim(config.MIN_GAIN, config.MAX_GAIN)
    ax.set_title("EQ Match", color=FOREGROUND)
    ax.set_xlabel("Frequency (Hz)", color=FOREGROUND)
    ax.set_ylabel("Gain (dB)", color=FOREGROUND)
    ax.tick_params(colors=FOREGROUND)

    for f in config.FREQ_GRID_LINES:
        ax.axvline(x=f, color="#6b7280", linewidth=1, alpha=0.4)
    ax.set_xticks(config.FREQ_GRID_LINES)
    ax.set_xticklabels([f"{f // 1000}k" if f >= 1000 else str(f) for f in config.FREQ_GRID_LINES])
    ax.minorticks_off()

    for level in config.GAIN_GRID_LINES:
        ax.axhline(y=level, color="#6b7280", linewidth=1.5 if level == 0 else 1,
                   alpha=0.6 if level == 0 else 0.4)
    ax.set_yticks(config.GAIN_GRID_LINES)

    if target_bands or user_bands:
        ax.legend(facecolor="#2d2d2d", labelcolor=FOREGROUND)
    fig.tight_layout()

    if output_path is not None:
        fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
        logger.info("Curve plot saved to %s", output_path)
    return fig
