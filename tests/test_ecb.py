#!/usr/bin/env python3
"""
Tests for ECB detection and AES-ECB decryption
"""

import pytest

from xorscope.core.ecb import (
    AESBlockCipher, count_duplicate_blocks, decrypt_ecb, detect_ecb, iter_blocks,
)
from xorscope.core.errors import InvalidLengthError, InvalidParameterError

# FIPS-197 appendix C.1 (AES-128)
FIPS_KEY = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
FIPS_PLAINTEXT = bytes.fromhex("00112233445566778899aabbccddeeff")
FIPS_CIPHERTEXT = bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a")


def test_detects_repeated_block():
    block = bytes(range(16))
    ciphertext = block + bytes(range(16, 32)) + block
    assert detect_ecb(ciphertext, 16) is True
    assert count_duplicate_blocks(ciphertext, 16) == 1


def test_distinct_blocks_not_flagged():
    ciphertext = bytes(range(64))
    assert detect_ecb(ciphertext, 16) is False
    assert count_duplicate_blocks(ciphertext, 16) == 0


def test_block_size_matters():
    # Repeats at 8 bytes but not at 16
    ciphertext = b"AAAAAAAABBBBBBBBAAAAAAAACCCCCCCC"
    assert detect_ecb(ciphertext, 8) is True
    assert detect_ecb(ciphertext, 16) is False


def test_empty_ciphertext_has_no_duplicates():
    assert detect_ecb(b"", 16) is False


def test_length_must_be_block_multiple():
    with pytest.raises(InvalidLengthError):
        detect_ecb(b"\x00" * 20, 16)
    with pytest.raises(InvalidLengthError):
        count_duplicate_blocks(b"\x00" * 20, 16)


def test_block_size_must_be_positive():
    with pytest.raises(InvalidParameterError):
        detect_ecb(b"\x00" * 16, 0)


def test_iter_blocks_in_order():
    assert list(iter_blocks(b"abcdef", 2)) == [b"ab", b"cd", b"ef"]


def test_aes_block_cipher_known_answer():
    cipher = AESBlockCipher(FIPS_KEY)
    assert cipher.encrypt(FIPS_PLAINTEXT) == FIPS_CIPHERTEXT
    assert cipher.decrypt(FIPS_CIPHERTEXT) == FIPS_PLAINTEXT


def test_decrypt_ecb_round_trip_and_detection():
    cipher = AESBlockCipher(b"YELLOW SUBMARINE")
    plaintext = b"SIXTEEN BYTE MSG" * 3 + b"another 16 bytes"
    ciphertext = b"".join(cipher.encrypt(block) for block in iter_blocks(plaintext, 16))

    assert decrypt_ecb(ciphertext, cipher) == plaintext
    assert detect_ecb(ciphertext, 16) is True
    assert count_duplicate_blocks(ciphertext, 16) == 2


def test_decrypt_ecb_rejects_partial_block():
    with pytest.raises(InvalidLengthError):
        decrypt_ecb(b"\x00" * 17, AESBlockCipher(FIPS_KEY))


@pytest.mark.parametrize("key_size", [0, 15, 17, 33])
def test_aes_key_size_checked(key_size):
    with pytest.raises(InvalidLengthError):
        AESBlockCipher(b"k" * key_size)


def test_aes_block_size_checked():
    with pytest.raises(InvalidLengthError):
        AESBlockCipher(FIPS_KEY).decrypt(b"short")
