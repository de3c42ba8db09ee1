# src/eq_match_game/eq_control/equalizer_apo.py

import json
import logging
from pathlib import Path

from .. import config
from ..core.bands import Band

logger = logging.getLogger(__name__)

CODE_TO_TYPE = {code: filter_type for filter_type, code in config.FILTER_CODES.items()}


class EqualizerPreset:
    """
    A band set stored in the Equalizer APO text format, used for challenge and
    answer files.

    Attributes:
        preamp (float): Preamp value in dB (default: 0.0).
        filters (list): List of filter dictionaries, each containing:
            - enabled (bool): True if the filter is enabled.
            - filter_code (str): Filter type code (PK, NO, HP, LP, HSC, LSC).
            - fc (float): Center/corner frequency in Hz.
            - gain (float): Gain in dB.
            - q (float): Q factor.

    Example:
        preset = EqualizerPreset.from_bands([Band(100, 2.0, q=1.0, type="peak")])
        preset.apply_to_file("challenge.txt")
        bands = EqualizerPreset.load_from_file("challenge.txt").to_bands()
    """
    def __init__(self, preamp: float = 0.0):
        self.preamp = preamp
        self.filters = []

    def add_filter(self, enabled: bool, filter_code: str, fc: float, gain: float, q: float):
        """
        Add a filter to the preset.

        :param enabled: True if the filter is enabled; False otherwise.
        :param filter_code: Filter type code (e.g., 'PK', 'LSC', 'HP').
        :param fc: Center frequency in Hz.
        :param gain: Gain in dB.
        :param q: Q factor.
        """
        if filter_code not in CODE_TO_TYPE:
            raise ValueError(f"Unsupported filter code '{filter_code}'.")
        self.filters.append({
            "enabled": enabled,
            "filter_code": filter_code,
            "fc": fc,
            "gain": gain,
            "q": q,
        })

    def remove_filter(self, index: int):
        """
        Remove the filter at the given index (0-indexed).
        """
        try:
            del self.filters[index]
        except IndexError:
            raise ValueError("Filter index out of range.")

    @classmethod
    def from_bands(cls, bands, preamp: float = 0.0):
        """Build an all-enabled preset from bands; Q and type defaults are written out."""
        preset = cls(preamp=preamp)
        for band in bands:
            preset.add_filter(True, config.FILTER_CODES[band.effective_type],
                              band.freq, band.gain_db, band.effective_q)
        return preset

    def to_bands(self):
        """Enabled filters as bands, in file order."""
        return [
            Band(freq=filt["fc"], gain_db=filt["gain"], q=filt["q"],
                 type=CODE_TO_TYPE[filt["filter_code"]])
            for filt in self.filters if filt["enabled"]
        ]

    def to_string(self) -> str:
        lines = [f"Preamp: {self.preamp:.2f} dB"]
        for i, filt in enumerate(self.filters, start=1):
            status = "ON" if filt["enabled"] else "OFF"
            lines.append(
                f"Filter {i}: {status} {filt['filter_code']} Fc {filt['fc']:.1f} Hz "
                f"Gain {filt['gain']:.1f} dB Q {filt['q']:.2f}"
            )
        return "\n".join(lines)

    def apply_to_file(self, config_path):
        """
        Write the preset to the given file path.
        """
        with open(config_path, "w") as f:
            f.write(self.to_string())
        logger.info("Preset with %d filters written to %s", len(self.filters), config_path)

    @classmethod
    def parse(cls, content: str):
        """
        Parse preset text. The first line must be the preamp setting; filter
        lines that cannot be parsed are logged and skipped.
        """
        lines = [line for line in content.splitlines() if line.strip()]
        if not lines:
            raise ValueError("Preset file is empty.")

        # e.g. "Preamp: -5.50 dB"
        preamp_line = lines[0]
        if not preamp_line.startswith("Preamp:"):
            raise ValueError("Invalid preset file: missing preamp line.")
        try:
            preamp_value = float(preamp_line.split("Preamp:")[1].strip().split()[0])
        except (IndexError, ValueError) as e:
            raise ValueError("Invalid preamp value in preset file.") from e

        preset = cls(preamp=preamp_value)
        for line in lines[1:]:
            try:
                # Filter 1: ON LSC Fc 105.0 Hz Gain -1.3 dB Q 0.70
                parts = line.split()
                enabled = parts[2].upper() == "ON"
                filter_code = parts[3]
                fc = float(parts[5])
                gain = float(parts[8])
                q = float(parts[11])
                preset.add_filter(enabled, filter_code, fc, gain, q)
            except (IndexError, ValueError) as e:
                logger.warning("Skipping preset line '%s': %s", line, e)
        return preset

    @classmethod
    def load_from_file(cls, file_path):
        with open(file_path, "r") as f:
            return cls.parse(f.read())


def load_bands(path):
    """
    Load a band set. `.json` files hold a list of band mappings (or
    {"bands": [...]}); anything else is read as an Equalizer APO preset.
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        return EqualizerPreset.load_from_file(path).to_bands()

    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("bands")
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of bands.")
    return [Band.from_dict(item) for item in data]


def save_bands(path, bands):
    """Inverse of load_bands; JSON keeps absent q/type/id absent."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path, "w") as f:
            json.dump({"bands": [band.to_dict() for band in bands]}, f, indent=2)
        logger.info("Saved %d bands to %s", len(bands), path)
    else:
        EqualizerPreset.from_bands(bands).apply_to_file(path)
