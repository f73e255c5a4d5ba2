#!/usr/bin/env python3
"""
Tests for the frequency table and scoring
"""

import pickle

import pytest

from xorscope.core.errors import EmptyInputError
from xorscope.core.language_model import FrequencyTable, build_frequency_table, score_text


def test_build_divides_counts_by_total():
    table = build_frequency_table("aab")
    assert table["a"] == pytest.approx(2 / 3)
    assert table["b"] == pytest.approx(1 / 3)
    assert len(table) == 2


def test_frequencies_sum_to_one(table):
    assert sum(table.values()) == pytest.approx(1.0)
    assert all(value >= 0 for value in table.values())


def test_build_rejects_empty_text():
    with pytest.raises(EmptyInputError):
        build_frequency_table("")


def test_score_is_average_lookup():
    table = build_frequency_table("aab")
    assert score_text("ab", table) == pytest.approx(0.5)
    assert score_text("aa", table) == pytest.approx(2 / 3)


def test_unseen_characters_score_zero():
    table = build_frequency_table("aab")
    assert score_text("zz", table) == 0.0
    assert score_text("az", table) == pytest.approx(1 / 3)
    assert table.weight("z") == 0.0
    assert "z" not in table


def test_score_rejects_empty_text(table):
    with pytest.raises(EmptyInputError):
        score_text("", table)
    with pytest.raises(EmptyInputError):
        score_text(b"", table)


def test_bytes_and_text_score_the_same(table):
    sample = "It is a truth universally acknowledged"
    assert score_text(sample.encode("latin-1"), table) == score_text(sample, table)


def test_english_outscores_noise(table):
    english = score_text("my dear, you must know that the house is taken", table)
    noise = score_text(bytes(range(128, 176)), table)
    assert english > noise


def test_table_is_read_only(table):
    with pytest.raises(TypeError):
        table["e"] = 1.0


def test_byte_weights_match_lookups(table):
    weights = table.byte_weights()
    assert len(weights) == 256
    assert weights[ord("e")] == table["e"]
    assert weights[0] == 0.0


def test_most_common_is_sorted(table):
    top = table.most_common(3)
    assert top[0][0] == " "
    assert [freq for _, freq in top] == sorted((freq for _, freq in top), reverse=True)


def test_table_survives_pickling(table):
    restored = pickle.loads(pickle.dumps(table))
    assert isinstance(restored, FrequencyTable)
    assert restored == table
    assert restored.byte_weights() == table.byte_weights()
