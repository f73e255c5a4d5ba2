#!/usr/bin/env python3
"""
Tests for AnalysisConfig and presets
"""

import pytest

from xorscope.core.analysis_presets import PresetLibrary
from xorscope.core.config import AnalysisConfig
from xorscope.core.errors import ConfigError


def test_defaults_match_reference_estimator():
    config = AnalysisConfig()
    assert (config.min_key_len, config.max_key_len, config.sample_pairs) == (2, 40, 1)
    assert config.block_size == 16


def test_every_listed_preset_loads():
    for name in PresetLibrary.list_presets():
        config = AnalysisConfig.from_preset(name)
        assert config.preset == name


def test_preset_with_overrides():
    config = AnalysisConfig.from_preset("short", max_key_len=12, workers=2)
    assert config.max_key_len == 12
    assert config.sample_pairs is None
    assert config.workers == 2


def test_preset_lookup_is_case_insensitive():
    assert PresetLibrary.get_preset("AVERAGED").sample_pairs is None


def test_unknown_preset():
    with pytest.raises(ConfigError):
        AnalysisConfig.from_preset("nonexistent")


@pytest.mark.parametrize("kwargs", [
    {"min_key_len": 0},
    {"max_key_len": 41},
    {"min_key_len": 10, "max_key_len": 5},
    {"sample_pairs": 0},
    {"block_size": 0},
    {"workers": 0},
    {"top_candidates": 0},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigError):
        AnalysisConfig(**kwargs)


def test_from_yaml_with_preset(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("preset: averaged\nmax_key_len: 24\nworkers: 4\n")
    config = AnalysisConfig.from_yaml(path)
    assert config.preset == "averaged"
    assert config.max_key_len == 24
    assert config.sample_pairs is None
    assert config.workers == 4


def test_from_yaml_without_preset(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("sample_pairs: null\nblock_size: 8\n")
    config = AnalysisConfig.from_yaml(path)
    assert config.sample_pairs is None
    assert config.block_size == 8
    assert config.preset is None


def test_from_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert AnalysisConfig.from_yaml(path) == AnalysisConfig()


@pytest.mark.parametrize("content", [
    "unknown_key: 1\n",
    "- just\n- a list\n",
    "max_key_len: [unclosed\n",
    "max_key_len: lots\n",
])
def test_from_yaml_rejects_bad_files(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        AnalysisConfig.from_yaml(path)


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        AnalysisConfig.from_yaml(tmp_path / "missing.yaml")


def test_to_dict_round_trip():
    config = AnalysisConfig.from_preset("short")
    assert AnalysisConfig.from_dict(config.to_dict()) == config
