#!/usr/bin/env python3
"""
Tests for the single-byte and repeating-key XOR breakers
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from xorscope.core.errors import (
    EmptyInputError, InsufficientInputError, InvalidLengthError, InvalidParameterError, XorscopeError,
)
from xorscope.core.language_model import build_frequency_table
from xorscope.core.xor_breaker import (
    XORBreaker, break_repeating_key, break_single_byte, rank_single_byte_keys, transpose,
)
from xorscope.core.xor_ops import repeating_xor, single_byte_xor

from conftest import COOKING_HEX


def test_break_single_byte_cryptopals_fixture(table):
    result = break_single_byte(bytes.fromhex(COOKING_HEX), table)
    assert result.key == 0x58
    assert result.plaintext == b"Cooking MC's like a pound of bacon"
    assert result.score > 0


@pytest.mark.parametrize("key", [0x00, 0x35, 0xA5, 0xFF])
def test_break_single_byte_recovers_known_key(table, key):
    plaintext = b"The quick brown fox jumps over the lazy dog near the riverbank."
    result = break_single_byte(single_byte_xor(plaintext, key), table)
    assert result.key == key
    assert result.plaintext == plaintext


def test_ties_go_to_lowest_key():
    # Every byte value equally likely: all 256 keys score the same
    uniform = build_frequency_table("".join(chr(i) for i in range(256)))
    assert break_single_byte(b"\x10\x20\x30", uniform).key == 0

    # 'a' and 'b' tie; 0x61 < 0x62
    assert break_single_byte(b"\x00", build_frequency_table("ab")).key == 0x61


def test_executor_does_not_change_winner(table):
    ciphertext = bytes.fromhex(COOKING_HEX)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = break_single_byte(ciphertext, table, executor=pool)
    assert parallel == break_single_byte(ciphertext, table)


def test_break_single_byte_rejects_empty(table):
    with pytest.raises(EmptyInputError):
        break_single_byte(b"", table)


def test_rank_single_byte_keys_orders_candidates(table):
    ciphertext = bytes.fromhex(COOKING_HEX)
    ranked = rank_single_byte_keys(ciphertext, table, top=3)
    assert len(ranked) == 3
    assert ranked[0] == break_single_byte(ciphertext, table)
    assert ranked[0].score >= ranked[1].score >= ranked[2].score


def test_transpose_strided_columns():
    assert transpose(b"abcdefg", 3) == [b"adg", b"be", b"cf"]
    assert transpose(b"abcdef", 3) == [b"ad", b"be", b"cf"]
    assert transpose(b"ab", 1) == [b"ab"]


def test_transpose_rejects_zero_length():
    with pytest.raises(InvalidParameterError) as excinfo:
        transpose(b"abc", 0)
    assert isinstance(excinfo.value, XorscopeError)
    assert isinstance(excinfo.value, ValueError)


def test_break_repeating_key_with_known_length(table, corpus_bytes):
    key = b"Terminator X: Bring the noise"
    result = break_repeating_key(repeating_xor(corpus_bytes, key), table, key_length=len(key))
    assert result.key == key
    assert result.plaintext == corpus_bytes
    assert len(result.column_scores) == len(key)
    assert result.key_length_candidates == []


@pytest.mark.parametrize("sample_pairs", [1, None])
def test_break_repeating_key_estimates_length(table, corpus_bytes, key_23, sample_pairs):
    ciphertext = repeating_xor(corpus_bytes, key_23)
    result = break_repeating_key(ciphertext, table, sample_pairs=sample_pairs)
    assert result.key_length == 23
    assert result.key == key_23
    assert result.plaintext == corpus_bytes
    assert result.key_length_candidates[0].key_length == 23


def test_break_repeating_key_short_last_columns(table, corpus_bytes, key_29):
    # 1171 bytes: the first 11 columns hold one more row than the other 18
    plaintext = corpus_bytes[:29 * 40 + 11]
    result = break_repeating_key(repeating_xor(plaintext, key_29), table)
    assert result.key == key_29
    assert result.plaintext == plaintext


def test_break_repeating_key_parallel_columns_keep_order(table, corpus_bytes, key_29):
    ciphertext = repeating_xor(corpus_bytes, key_29)
    with ThreadPoolExecutor(max_workers=4) as pool:
        result = break_repeating_key(ciphertext, table, executor=pool)
    assert result.key == key_29


def test_break_repeating_key_rejects_key_longer_than_ciphertext(table):
    with pytest.raises(InvalidLengthError, match="Key length 5 must be between 1 and the ciphertext length 3"):
        break_repeating_key(b"abc", table, key_length=5)


def test_break_repeating_key_rejects_known_length_on_empty_input(table):
    with pytest.raises(InvalidLengthError):
        break_repeating_key(b"", table, key_length=2)


def test_break_repeating_key_needs_enough_input(table):
    with pytest.raises(InsufficientInputError):
        break_repeating_key(b"\x01" * 100, table)


def test_xor_breaker_binds_settings(table, corpus_bytes, key_23):
    breaker = XORBreaker(table, sample_pairs=None)
    ciphertext = repeating_xor(corpus_bytes, key_23)

    assert breaker.guess_key_length(ciphertext, top=3)[0].key_length == 23
    assert breaker.break_repeating_key_xor(ciphertext).key == key_23
    assert breaker.break_single_byte_xor(bytes.fromhex(COOKING_HEX)).key == 0x58
