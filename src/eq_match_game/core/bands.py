# src/eq_match_game/core/bands.py

"""
Value types shared by the curve evaluator and the scorer.

A Band is one parametric EQ adjustment. Optional fields stay None when the
source data omitted them; the scorer relies on that to tell legacy
frequency/gain-only challenges apart from full ones. `normalize` is the one
place where the Q and filter-type defaults are applied.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .. import config
from ..utils import clamp, round_half_up

EXTENDED_FIELDS = ("id", "q", "type")


@dataclass(frozen=True)
class Band:
    """One equalizer band: frequency (Hz), gain (dB), optional Q and type."""

    freq: float
    gain_db: float
    q: Optional[float] = None
    type: Optional[str] = None
    id: Optional[str] = None
    # optional keys the source mapping carried, even when their value was null
    present_fields: FrozenSet[str] = field(default=frozenset(), compare=False, repr=False)

    def __post_init__(self):
        if self.type is not None and self.type not in config.FILTER_TYPES:
            raise ValueError(
                f"Unknown filter type '{self.type}'. Expected one of {', '.join(config.FILTER_TYPES)}."
            )

    @property
    def effective_q(self) -> float:
        return config.DEFAULT_Q if self.q is None else self.q

    @property
    def effective_type(self) -> str:
        return config.DEFAULT_FILTER_TYPE if self.type is None else self.type

    @property
    def has_extended_fields(self) -> bool:
        """True when the band carries any of id, q or type, including an explicit null."""
        if self.present_fields:
            return True
        return self.id is not None or self.q is not None or self.type is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Band":
        """
        Build a band from the JSON shape used by the game UI
        ({"freq", "gainDb", "q"?, "type"?, "id"?}). "gain_db" is accepted too.
        """
        try:
            freq = float(data["freq"])
            gain = data["gainDb"] if "gainDb" in data else data["gain_db"]
            gain_db = float(gain)
            q = data.get("q")
            q = None if q is None else float(q)
        except KeyError as e:
            raise ValueError(f"Band is missing required field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"Band has a non-numeric freq, gain or q: {data!r}") from e

        band_id = data.get("id")
        return cls(
            freq=freq,
            gain_db=gain_db,
            q=q,
            type=data.get("type"),
            id=None if band_id is None else str(band_id),
            present_fields=frozenset(key for key in EXTENDED_FIELDS if key in data),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"freq": self.freq, "gainDb": self.gain_db}
        for key in EXTENDED_FIELDS:
            value = getattr(self, key)
            if value is not None or key in self.present_fields:
                data[key] = value
        return data


@dataclass(frozen=True)
class BandResult:
    """
    Outcome of scoring one target band.

    delta_freq and delta_q are only filled in enhanced mode. Unmatched bands
    carry NaN deltas and a score of 0.
    """

    freq: float
    delta_db: float
    score: int
    id: Optional[str] = None
    delta_freq: Optional[float] = None
    delta_q: Optional[float] = None

    @property
    def matched(self) -> bool:
        return not math.isnan(self.delta_db)

    def to_dict(self) -> Dict[str, Any]:
        data = {"freq": self.freq, "deltaDb": self.delta_db, "score": self.score}
        if self.id is not None:
            data["id"] = self.id
        if self.delta_freq is not None:
            data["deltaFreq"] = self.delta_freq
        if self.delta_q is not None:
            data["deltaQ"] = self.delta_q
        return data


@dataclass(frozen=True)
class EqScore:
    """Aggregate score: total (0-100) and per-band results in target order."""

    total: int
    per_band: Tuple[BandResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "perBand": [r.to_dict() for r in self.per_band]}


def normalize(band: Band, index: Optional[int] = None, prefix: str = "band") -> Band:
    """
    Return a copy of `band` with q defaulted to 1.0 and type to "peak".
    When the band has no id and an index is given, it gets "<prefix>-<index>".
    """
    band_id = band.id
    if band_id is None and index is not None:
        band_id = f"{prefix}-{index}"
    return replace(band, q=band.effective_q, type=band.effective_type, id=band_id)


def normalize_bands(bands: Sequence[Band], prefix: str = "band") -> List[Band]:
    return [normalize(band, i, prefix) for i, band in enumerate(bands)]


# --- Editing helpers (slider / drag updates) ---

def clamp_band(band: Band) -> Band:
    """Clamp freq, gain and (if set) Q into the editable ranges."""
    q = band.q
    if q is not None:
        q = clamp(q, config.MIN_Q, config.MAX_Q)
    return replace(
        band,
        freq=clamp(band.freq, config.MIN_FREQ, config.MAX_FREQ),
        gain_db=clamp(band.gain_db, config.MIN_GAIN, config.MAX_GAIN),
        q=q,
    )


def update_band(band: Band, **changes) -> Band:
    """
    Apply a partial update (freq, gain_db, q, type) and clamp the changed values.
    Fields that are not part of the update are left exactly as they were.
    """
    allowed = {"freq", "gain_db", "q", "type"}
    unknown = set(changes) - allowed
    if unknown:
        raise TypeError(f"Unsupported band field(s): {', '.join(sorted(unknown))}")

    if changes.get("freq") is not None:
        changes["freq"] = clamp(changes["freq"], config.MIN_FREQ, config.MAX_FREQ)
    if changes.get("gain_db") is not None:
        changes["gain_db"] = clamp(changes["gain_db"], config.MIN_GAIN, config.MAX_GAIN)
    if changes.get("q") is not None:
        changes["q"] = clamp(changes["q"], config.MIN_Q, config.MAX_Q)
    return replace(band, **changes)


def update_bands(bands: Sequence[Band], band_id: str, **changes) -> List[Band]:
    """
    Update the band whose id (or positional "user-<index>" fallback) is band_id.
    Returns a new list; unknown ids leave it unchanged.
    """
    updated = []
    for i, band in enumerate(bands):
        current_id = band.id if band.id is not None else f"{config.USER_ID_PREFIX}-{i}"
        updated.append(update_band(band, **changes) if current_id == band_id else band)
    return updated


def format_frequency(freq: float) -> str:
    if freq >= 1000:
        return f"{freq / 1000:.1f}kHz"
    return f"{freq:.0f}Hz"


def format_band(band: Band) -> str:
    """Control label, e.g. '1.0kHz • +2.0dB • Q: 1.0'."""
    sign = "+" if band.gain_db > 0 else ""
    return f"{format_frequency(band.freq)} • {sign}{band.gain_db:.1f}dB • Q: {band.effective_q:.1f}"


def drag_band(band: Band, freq: float, gain_db: float) -> Band:
    """
    Move a band to a dragged graph position: clamped, then snapped to a whole
    Hz and a tenth of a dB.
    """
    freq = round_half_up(clamp(freq, config.MIN_FREQ, config.MAX_FREQ))
    gain_db = round_half_up(clamp(gain_db, config.MIN_GAIN, config.MAX_GAIN) * 10) / 10
    return update_band(band, freq=freq, gain_db=gain_db)
