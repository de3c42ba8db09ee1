# src/eq_match_game/cli/__main__.py

"""
Command-line entry point for scoring EQ Match attempts and inspecting curves.
"""

import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from eq_match_game import config
from eq_match_game.core.bands import format_frequency
from eq_match_game.core.scoring import score
from eq_match_game.eq_control.equalizer_apo import load_bands
from eq_match_game.response.curve import eq_curve

console = Console()
app = typer.Typer(
    name="eq-match",
    help="Score EQ Match attempts and inspect EQ response curves.",
    no_args_is_help=True,
)


def handle_error(error: Exception) -> None:
    """Report a failure in red and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _read_bands(path: Path):
    try:
        return load_bands(path)
    except (OSError, ValueError) as e:
        handle_error(e)


def _fmt(value, unit="", precision=1):
    if value is None:
        return ""
    if math.isnan(value):
        return "—"
    return f"{value:+.{precision}f}{unit}"


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """EQ Match scoring tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )


@app.command("score")
def score_command(
    target: Path = typer.Argument(..., help="Target band set (.json or Equalizer APO preset)"),
    user: Path = typer.Argument(..., help="User band set (.json or Equalizer APO preset)"),
    tol_db: float = typer.Option(config.DEFAULT_TOL_DB, "--tol-db", help="Gain tolerance in dB"),
    tol_freq: float = typer.Option(config.DEFAULT_TOL_FREQ, "--tol-freq", help="Frequency tolerance in Hz"),
    tol_q: float = typer.Option(config.DEFAULT_TOL_Q, "--tol-q", help="Q tolerance"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Score a user EQ against a target EQ."""
    target_bands = _read_bands(target)
    user_bands = _read_bands(user)
    result = score(user_bands, target_bands, tol_db=tol_db, tol_freq=tol_freq, tol_q=tol_q)

    if as_json:
        # NaN is not valid JSON; unmatched deltas become null
        data = result.to_dict()
        for band in data["perBand"]:
            for key, value in band.items():
                if isinstance(value, float) and math.isnan(value):
                    band[key] = None
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title="EQ Match")
    table.add_column("Band")
    table.add_column("Frequency", justify="right")
    table.add_column("Δ Gain", justify="right")
    table.add_column("Δ Freq", justify="right")
    table.add_column("Δ Q", justify="right")
    table.add_column("Score", justify="right")
    for i, band in enumerate(result.per_band, start=1):
        table.add_row(
            band.id or str(i),
            format_frequency(band.freq),
            _fmt(band.delta_db, " dB"),
            _fmt(band.delta_freq, " Hz"),
            _fmt(band.delta_q, "", 2),
            str(band.score),
        )
    console.print(table)
    console.print(f"Total score: [bold]{result.total}[/bold]/100")


@app.command("curve")
def curve_command(
    bands: Path = typer.Argument(..., help="Band set (.json or Equalizer APO preset)"),
    points: int = typer.Option(config.CURVE_POINTS, "--points", "-n", min=1, help="Number of samples"),
    csv_path: Optional[Path] = typer.Option(None, "--csv", help="Write the curve to a CSV file"),
):
    """Print (or export) the sampled display curve of a band set."""
    curve = eq_curve(_read_bands(bands), points)

    if csv_path is not None:
        with open(csv_path, "w", newline="") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(["frequency", "gain_db"])
            for point in curve:
                writer.writerow([f"{point.freq_hz:.2f}", f"{point.gain_db:.2f}"])
        console.print(f"Curve with {len(curve)} points saved to '{csv_path}'")
        return

    for point in curve:
        typer.echo(f"{point.freq_hz:10.2f} Hz  {point.gain_db:+7.2f} dB")


@app.command("plot")
def plot_command(
    target: Path = typer.Argument(..., help="Target band set"),
    user: Path = typer.Argument(..., help="User band set"),
    output: Path = typer.Option(..., "--output", "-o", help="Image file to write"),
):
    """Render the target and user curves to an image."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from eq_match_game.ui.curve_plot import plot_curves

    target_bands = _read_bands(target)
    user_bands = _read_bands(user)
    fig = plot_curves(target_bands, user_bands)
    try:
        fig.savefig(output, dpi=150, facecolor=fig.get_facecolor())
    except (OSError, ValueError) as e:
        handle_error(e)
    finally:
        plt.close(fig)
    console.print(f"Plot saved to '{output}'")


def main():
    """Launch the eq-match command line."""
    app()


if __name__ == "__main__":
    main()
