# tests/test_bands.py

import dataclasses

import pytest

from eq_match_game.core.bands import (
    Band,
    clamp_band,
    format_band,
    normalize,
    normalize_bands,
    drag_band,
    update_band,
    update_bands,
)


class TestNormalize:

    def test_applies_defaults(self):
        band = normalize(Band(440, 2))

        assert band.q == 1.0
        assert band.type == "peak"
        assert band.id is None

    def test_keeps_explicit_values(self):
        band = normalize(Band(440, 2, q=3.0, type="notch", id="a"), 0, "user")

        assert (band.q, band.type, band.id) == (3.0, "notch", "a")

    def test_positional_id(self):
        assert normalize(Band(440, 2), 3, "target").id == "target-3"

    def test_returns_copy(self):
        original = Band(440, 2)
        normalize(original, 0, "user")

        assert original.q is None and original.type is None and original.id is None

    def test_normalize_bands(self):
        bands = normalize_bands([Band(100, 1), Band(200, 2, id="x"), Band(300, 3)], "user")

        assert [b.id for b in bands] == ["user-0", "x", "user-2"]


class TestBand:

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Band(100, 2).gain_db = 3

    def test_rejects_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown filter type"):
            Band(100, 2, type="bandpass")

    def test_from_dict(self):
        band = Band.from_dict({"freq": 250, "gainDb": -1.5, "q": 2, "type": "lowshelf", "id": 7})

        assert band == Band(250.0, -1.5, q=2.0, type="lowshelf", id="7")

    def test_from_dict_keeps_missing_fields_absent(self):
        band = Band.from_dict({"freq": 250, "gain_db": -1.5})

        assert not band.has_extended_fields

    def test_from_dict_missing_gain(self):
        with pytest.raises(ValueError, match="missing required field"):
            Band.from_dict({"freq": 250})

    def test_from_dict_non_numeric(self):
        with pytest.raises(ValueError, match="non-numeric"):
            Band.from_dict({"freq": "low", "gainDb": 1})

    def test_from_dict_records_explicit_nulls(self):
        band = Band.from_dict({"freq": 250, "gainDb": 1, "q": None})

        assert band.q is None
        assert band.has_extended_fields
        assert band.to_dict() == {"freq": 250.0, "gainDb": 1.0, "q": None}

    @pytest.mark.parametrize("q", [[1], {}, "wide"])
    def test_from_dict_bad_q(self, q):
        with pytest.raises(ValueError, match="non-numeric"):
            Band.from_dict({"freq": 250, "gainDb": 1, "q": q})

    def test_to_dict_round_trip(self):
        data = {"freq": 250.0, "gainDb": -1.5, "type": "lowshelf"}
        assert Band.from_dict(data).to_dict() == data


class TestEditing:

    def test_clamp_band(self):
        band = clamp_band(Band(5, 20, q=50))

        assert (band.freq, band.gain_db, band.q) == (20, 12, 10)

    def test_clamp_band_leaves_missing_q(self):
        assert clamp_band(Band(25000, -20)).q is None

    def test_update_band_clamps_changed_fields(self):
        band = update_band(Band(1000, 2, q=1.0), gain_db=-40, q=0.01)

        assert band.gain_db == -12
        assert band.q == 0.1
        assert band.freq == 1000

    def test_update_band_type(self):
        assert update_band(Band(1000, 2), type="highpass").type == "highpass"

    def test_update_band_rejects_unknown_field(self):
        with pytest.raises(TypeError):
            update_band(Band(1000, 2), gain=3)

    def test_drag_band_snaps_position(self):
        band = drag_band(Band(1000, 0, q=2.0, id="mid"), 1234.56, 3.149)

        assert band.freq == 1235
        assert band.gain_db == pytest.approx(3.1)
        assert (band.q, band.id) == (2.0, "mid")

    def test_drag_band_clamps_before_snapping(self):
        band = drag_band(Band(1000, 0), 25000.7, -13.26)

        assert band.freq == 20000
        assert band.gain_db == -12

    def test_update_bands_by_fallback_id(self):
        bands = [Band(100, 0), Band(1000, 0), Band(5000, 0, id="air")]

        updated = update_bands(bands, "user-1", freq=1200)
        updated = update_bands(updated, "air", gain_db=3)

        assert updated[1].freq == 1200
        assert updated[2].gain_db == 3
        assert bands[1].freq == 1000

    def test_update_bands_unknown_id(self):
        bands = [Band(100, 0)]
        assert update_bands(bands, "user-9", freq=200) == bands


@pytest.mark.parametrize("band, label", [
    (Band(1000, 2.0), "1.0kHz • +2.0dB • Q: 1.0"),
    (Band(250, -3.0, q=0.7), "250Hz • -3.0dB • Q: 0.7"),
    (Band(12500, 0, q=4), "12.5kHz • 0.0dB • Q: 4.0"),
])
def test_format_band(band, label):
    assert format_band(band) == label
