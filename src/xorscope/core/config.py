"""
Analysis Configuration
Dataclass configuration for the analysis engine, loadable from presets or YAML
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from .analysis_presets import PresetLibrary
from .errors import ConfigError
from .key_length import MAX_KEY_LENGTH, MIN_KEY_LENGTH


@dataclass
class AnalysisConfig:
    """
    Configuration for the analysis engine

    Can be initialized from:
    1. Defaults: AnalysisConfig()
    2. Custom parameters: AnalysisConfig(max_key_len=16, sample_pairs=None)
    3. Preset + overrides: AnalysisConfig.from_preset("averaged", workers=4)
    4. YAML file: AnalysisConfig.from_yaml("analysis.yaml")
    """
    min_key_len: int = 2
    max_key_len: int = MAX_KEY_LENGTH
    sample_pairs: Optional[int] = 1  # None averages every sample pair that fits
    block_size: int = 16
    top_candidates: int = 5
    workers: int = 1  # > 1 breaks repeating-key columns on a thread pool

    # Name of the preset this config was built from, informational only
    preset: Optional[str] = None

    def __post_init__(self):
        """Validate settings"""
        if not MIN_KEY_LENGTH <= self.min_key_len <= self.max_key_len <= MAX_KEY_LENGTH:
            raise ConfigError(
                f"Key length range must satisfy {MIN_KEY_LENGTH} <= min_key_len <= "
                f"max_key_len <= {MAX_KEY_LENGTH}, got [{self.min_key_len}, {self.max_key_len}]"
            )
        if self.sample_pairs is not None and self.sample_pairs < 1:
            raise ConfigError(f"sample_pairs must be >= 1 or null, got {self.sample_pairs}")
        if self.block_size < 1:
            raise ConfigError(f"block_size must be >= 1, got {self.block_size}")
        if self.top_candidates < 1:
            raise ConfigError(f"top_candidates must be >= 1, got {self.top_candidates}")
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")

    @staticmethod
    def from_preset(preset_name: str, **overrides) -> 'AnalysisConfig':
        """
        Create config from preset with optional overrides

        Example:
            config = AnalysisConfig.from_preset("short", max_key_len=12)
        """
        preset = PresetLibrary.get_preset(preset_name)
        if not preset:
            raise ConfigError(f"Unknown preset: {preset_name}. Available: {PresetLibrary.list_presets()}")

        values = {
            'min_key_len': preset.min_key_len,
            'max_key_len': preset.max_key_len,
            'sample_pairs': preset.sample_pairs,
            'block_size': preset.block_size,
            'top_candidates': preset.top_candidates,
        }
        _reject_unknown(overrides)
        values.update(overrides)
        values['preset'] = preset.name
        return _build(values)

    @staticmethod
    def from_dict(data: Dict) -> 'AnalysisConfig':
        """Create config from a mapping, honouring an optional 'preset' key"""
        data = dict(data)
        preset_name = data.pop('preset', None)
        if preset_name:
            return AnalysisConfig.from_preset(preset_name, **data)

        _reject_unknown(data)
        return _build(data)

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> 'AnalysisConfig':
        """
        Load config from a YAML file

        Example file:
            preset: averaged
            max_key_len: 24
            workers: 4
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return AnalysisConfig()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return AnalysisConfig.from_dict(data)

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _reject_unknown(values: Dict):
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")


def _build(values: Dict) -> AnalysisConfig:
    try:
        return AnalysisConfig(**values)
    except TypeError as e:
        # Wrong value types, e.g. a string where a number is expected
        raise ConfigError(f"Invalid configuration: {e}") from e
