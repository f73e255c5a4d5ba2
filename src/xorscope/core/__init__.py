"""
Cryptanalysis core

- language_model.py: character-frequency table and scoring
- xor_ops.py: XOR transforms and Hamming distance
- xor_breaker.py: single-byte and repeating-key XOR breakers
- key_length.py: repeating-key length estimation
- ecb.py: ECB detection and decryption
"""

from .ecb import AESBlockCipher, count_duplicate_blocks, decrypt_ecb, detect_ecb
from .errors import (
    ConfigError, EmptyInputError, InputDecodingError, InsufficientInputError,
    InvalidLengthError, InvalidParameterError, XorscopeError,
)
from .key_length import KeyLengthCandidate, estimate_key_length, rank_key_lengths
from .language_model import FrequencyTable, build_frequency_table, score_text
from .xor_breaker import (
    RepeatingKeyResult, SingleByteResult, XORBreaker, break_repeating_key,
    break_single_byte, rank_single_byte_keys, transpose,
)
from .xor_ops import fixed_xor, hamming_distance, repeating_xor, single_byte_xor

__all__ = [
    # Language model
    'FrequencyTable',
    'build_frequency_table',
    'score_text',

    # XOR primitives
    'fixed_xor',
    'single_byte_xor',
    'repeating_xor',
    'hamming_distance',

    # Breakers
    'SingleByteResult',
    'RepeatingKeyResult',
    'KeyLengthCandidate',
    'XORBreaker',
    'break_single_byte',
    'rank_single_byte_keys',
    'estimate_key_length',
    'rank_key_lengths',
    'transpose',
    'break_repeating_key',

    # ECB
    'AESBlockCipher',
    'detect_ecb',
    'count_duplicate_blocks',
    'decrypt_ecb',

    # Errors
    'XorscopeError',
    'InvalidLengthError',
    'InvalidParameterError',
    'InsufficientInputError',
    'EmptyInputError',
    'InputDecodingError',
    'ConfigError',
]
