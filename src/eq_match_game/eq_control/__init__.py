from .equalizer_apo import EqualizerPreset, load_bands, save_bands

__all__ = ["EqualizerPreset", "load_bands", "save_bands"]
