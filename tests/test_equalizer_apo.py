# tests/test_equalizer_apo.py

import json

import pytest

from eq_match_game.core.bands import Band
from eq_match_game.eq_control.equalizer_apo import EqualizerPreset, load_bands, save_bands


class TestEqualizerPreset:
    """Reading and writing band sets in the Equalizer APO text format."""

    def test_to_string(self):
        preset = EqualizerPreset.from_bands([
            Band(100, 2.0),
            Band(8000, -3.5, q=0.71, type="highshelf"),
        ])

        assert preset.to_string() == (
            "Preamp: 0.00 dB\n"
            "Filter 1: ON PK Fc 100.0 Hz Gain 2.0 dB Q 1.00\n"
            "Filter 2: ON HSC Fc 8000.0 Hz Gain -3.5 dB Q 0.71"
        )

    def test_parse_to_bands(self):
        preset = EqualizerPreset.parse(
            "Preamp: -3.00 dB\n"
            "Filter 1: ON LSC Fc 105.0 Hz Gain -1.3 dB Q 0.70\n"
            "Filter 2: ON NO Fc 3000.0 Hz Gain 6.0 dB Q 8.00\n"
        )

        assert preset.preamp == -3.0
        assert preset.to_bands() == [
            Band(105.0, -1.3, q=0.7, type="lowshelf"),
            Band(3000.0, 6.0, q=8.0, type="notch"),
        ]

    def test_disabled_filters_are_skipped(self):
        preset = EqualizerPreset.parse(
            "Preamp: 0.00 dB\n"
            "Filter 1: OFF PK Fc 100.0 Hz Gain 2.0 dB Q 1.00\n"
            "Filter 2: ON HP Fc 80.0 Hz Gain 0.0 dB Q 0.70"
        )

        assert len(preset.filters) == 2
        assert [b.type for b in preset.to_bands()] == ["highpass"]

    def test_malformed_lines_are_skipped(self, caplog):
        preset = EqualizerPreset.parse(
            "Preamp: 0.00 dB\n"
            "Filter 1: ON PK Fc abc Hz Gain 2.0 dB Q 1.00\n"
            "Filter 2: ON BP Fc 100.0 Hz Gain 2.0 dB Q 1.00\n"
            "Filter 3: ON LP Fc 9000.0 Hz Gain 0.0 dB Q 0.70"
        )

        assert [f["filter_code"] for f in preset.filters] == ["LP"]
        assert "Skipping preset line" in caplog.text

    @pytest.mark.parametrize("content", ["", "Filter 1: ON PK Fc 100 Hz Gain 2 dB Q 1", "Preamp: loud"])
    def test_invalid_header(self, content):
        with pytest.raises(ValueError):
            EqualizerPreset.parse(content)

    def test_remove_filter(self):
        preset = EqualizerPreset.from_bands([Band(100, 2), Band(200, 3)])
        preset.remove_filter(0)

        assert [b.freq for b in preset.to_bands()] == [200]
        with pytest.raises(ValueError):
            preset.remove_filter(5)

    def test_file_round_trip(self, tmp_path):
        bands = [Band(60, 4.0, q=0.5, type="lowshelf"), Band(2500, -2.0, q=3.0, type="peak")]
        path = tmp_path / "challenge.txt"

        EqualizerPreset.from_bands(bands).apply_to_file(path)

        assert EqualizerPreset.load_from_file(path).to_bands() == bands


class TestBandFiles:

    def test_json_list(self, tmp_path):
        path = tmp_path / "target.json"
        path.write_text(json.dumps([{"freq": 100, "gainDb": 2}, {"freq": 1000, "gainDb": -3}]))

        bands = load_bands(path)

        assert bands == [Band(100.0, 2.0), Band(1000.0, -3.0)]

    def test_json_object(self, tmp_path):
        path = tmp_path / "target.json"
        path.write_text(json.dumps({"bands": [{"freq": 100, "gainDb": 2, "id": "low"}]}))

        assert load_bands(path)[0].id == "low"

    def test_json_without_bands(self, tmp_path):
        path = tmp_path / "target.json"
        path.write_text(json.dumps({"name": "challenge"}))

        with pytest.raises(ValueError, match="list of bands"):
            load_bands(path)

    def test_save_json_keeps_optional_fields_absent(self, tmp_path):
        path = tmp_path / "user.json"
        bands = [Band(100.0, 2.0), Band(500.0, 1.0, q=2.0)]

        save_bands(path, bands)

        assert load_bands(path) == bands
        assert json.loads(path.read_text())["bands"][0] == {"freq": 100.0, "gainDb": 2.0}

    def test_save_preset(self, tmp_path):
        path = tmp_path / "user.txt"

        save_bands(path, [Band(100.0, 2.0)])

        assert load_bands(path) == [Band(100.0, 2.0, q=1.0, type="peak")]
