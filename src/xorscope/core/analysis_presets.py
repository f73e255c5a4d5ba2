"""
Analysis Presets
Predefined key-length search settings for different ciphertext shapes

The reference estimator compares a single pair of samples taken from the very
start of the ciphertext. Averaging every sample pair that fits is steadier on
long inputs, and a narrower key range lets shorter ciphertexts be analysed.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class AnalysisPreset:
    """Complete analysis configuration preset"""
    name: str
    description: str

    # Key-length search
    min_key_len: int = 2
    max_key_len: int = 40
    sample_pairs: Optional[int] = 1  # None averages every pair that fits

    # ECB detection
    block_size: int = 16

    # Reporting
    top_candidates: int = 5


class PresetLibrary:
    """Library of predefined analysis presets"""

    @staticmethod
    def get_preset(name: str) -> Optional[AnalysisPreset]:
        """Get preset by name"""
        presets: Dict[str, AnalysisPreset] = {
            "reference": PresetLibrary.reference(),
            "averaged": PresetLibrary.averaged(),
            "short": PresetLibrary.short(),
        }
        return presets.get(name.lower())

    @staticmethod
    def list_presets() -> List[str]:
        """List all available preset names"""
        return ["reference", "averaged", "short"]

    @staticmethod
    def reference() -> AnalysisPreset:
        """Single sample pair from the start of the ciphertext, key lengths 2-40"""
        return AnalysisPreset(
            name="reference",
            description="Single leading sample pair per candidate, key lengths 2-40",
        )

    @staticmethod
    def averaged() -> AnalysisPreset:
        """Average every disjoint sample pair across the ciphertext"""
        return AnalysisPreset(
            name="averaged",
            description="All sample pairs averaged per candidate, key lengths 2-40",
            sample_pairs=None,
        )

    @staticmethod
    def short() -> AnalysisPreset:
        """Key lengths up to 16, usable from 128 bytes of ciphertext"""
        return AnalysisPreset(
            name="short",
            description="All sample pairs averaged, key lengths 2-16 (>= 128 bytes input)",
            max_key_len=16,
            sample_pairs=None,
        )
