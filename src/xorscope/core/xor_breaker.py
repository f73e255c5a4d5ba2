"""
Single-byte and repeating-key XOR breakers using frequency analysis
"""

import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, List, Optional, Tuple

from .errors import EmptyInputError, InvalidLengthError, InvalidParameterError
from .key_length import MAX_KEY_LENGTH, KeyLengthCandidate, rank_key_lengths
from .language_model import FrequencyTable
from .xor_ops import repeating_xor, single_byte_xor

logger = logging.getLogger(__name__)


def _preview(data: bytes, limit: int = 60) -> str:
    return data[:limit].decode('utf-8', errors='replace')


@dataclass
class SingleByteResult:
    """Winning single-byte key with its plaintext and score"""
    key: int
    plaintext: bytes
    score: float

    def to_dict(self) -> Dict:
        return {
            'key': self.key,
            'key_hex': f"{self.key:02x}",
            'plaintext': self.plaintext.decode('utf-8', errors='replace'),
            'score': self.score,
        }


@dataclass
class RepeatingKeyResult:
    """Recovered repeating key, the plaintext it yields and how it was found"""
    key: bytes
    plaintext: bytes
    key_length: int
    column_scores: List[float] = field(default_factory=list)
    key_length_candidates: List[KeyLengthCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'key': self.key.decode('utf-8', errors='replace'),
            'key_hex': self.key.hex(),
            'key_length': self.key_length,
            'plaintext': self.plaintext.decode('utf-8', errors='replace'),
            'column_scores': self.column_scores,
            'key_length_candidates': [c.to_dict() for c in self.key_length_candidates],
        }


def _score_key(ciphertext: bytes, weights: Tuple[float, ...], key: int) -> Tuple[int, float]:
    # Same arithmetic as score_text() on the decrypted bytes
    return key, sum(weights[b ^ key] for b in ciphertext) / len(ciphertext)


def _score_all_keys(ciphertext: bytes, table: FrequencyTable,
                    executor: Optional[Executor] = None) -> List[Tuple[int, float]]:
    if not ciphertext:
        raise EmptyInputError("Cannot break single-byte XOR of empty ciphertext")

    scorer = partial(_score_key, bytes(ciphertext), table.byte_weights())
    mapper = executor.map if executor is not None else map
    return list(mapper(scorer, range(256)))


def break_single_byte(ciphertext: bytes, table: FrequencyTable,
                      executor: Optional[Executor] = None) -> SingleByteResult:
    """
    Brute-force the single-byte XOR key

    All 256 keys are scored; the highest score wins and ties go to the lowest
    key. The winner is chosen by an explicit (score, -key) reduction, so the
    result does not depend on the order an executor finishes in.

    Args:
        ciphertext: Non-empty ciphertext
        table: Frequency table of the expected plaintext language
        executor: Optional executor to score candidate keys in parallel

    Returns:
        SingleByteResult for the winning key

    Raises:
        EmptyInputError: ciphertext is empty
    """
    scored = _score_all_keys(ciphertext, table, executor)
    key, score = max(scored, key=lambda item: (item[1], -item[0]))
    plaintext = single_byte_xor(ciphertext, key)

    logger.debug("Single-byte key 0x%02x (score %.4f): %r", key, score, _preview(plaintext))
    return SingleByteResult(key=key, plaintext=plaintext, score=score)


def rank_single_byte_keys(ciphertext: bytes, table: FrequencyTable,
                          top: int = 5) -> List[SingleByteResult]:
    """Best `top` single-byte candidates, in the same order break_single_byte picks from"""
    scored = sorted(_score_all_keys(ciphertext, table), key=lambda item: (-item[1], item[0]))
    return [
        SingleByteResult(key=key, plaintext=single_byte_xor(ciphertext, key), score=score)
        for key, score in scored[:top]
    ]


def transpose(ciphertext: bytes, key_length: int) -> List[bytes]:
    """
    Split ciphertext into key_length columns

    Column c holds bytes c, c + key_length, c + 2 * key_length, ... so every
    byte in a column was XORed with the same key byte. Trailing columns are one
    byte shorter when the length is not a multiple of key_length.
    """
    if key_length < 1:
        raise InvalidParameterError(f"key_length must be >= 1, got {key_length}")
    return [bytes(ciphertext[col::key_length]) for col in range(key_length)]


def break_repeating_key(ciphertext: bytes,
                        table: FrequencyTable,
                        key_length: Optional[int] = None,
                        min_key_len: int = 2,
                        max_key_len: int = MAX_KEY_LENGTH,
                        sample_pairs: Optional[int] = 1,
                        executor: Optional[Executor] = None) -> RepeatingKeyResult:
    """
    Recover a repeating XOR key

    1. Estimate the key length (unless key_length is given)
    2. Transpose the ciphertext into one column per key position
    3. Break each column as single-byte XOR
    4. Concatenate the column keys in column order

    Args:
        ciphertext: Repeating-key XOR ciphertext
        table: Frequency table of the expected plaintext language
        key_length: Known key length; skips estimation
        min_key_len: Smallest key length to consider
        max_key_len: Largest key length to consider
        sample_pairs: Sample pairs averaged by the estimator, None for all
        executor: Optional executor to break columns in parallel

    Returns:
        RepeatingKeyResult with the key and decrypted plaintext

    Raises:
        InvalidLengthError: key_length longer than the ciphertext
        InsufficientInputError: too little ciphertext to estimate the key length
    """
    candidates: List[KeyLengthCandidate] = []
    if key_length is None:
        candidates = rank_key_lengths(ciphertext, min_key_len, max_key_len, sample_pairs)
        key_length = candidates[0].key_length
    elif not 1 <= key_length <= len(ciphertext):
        raise InvalidLengthError(
            f"Key length {key_length} must be between 1 and the ciphertext length {len(ciphertext)}"
        )

    columns = transpose(ciphertext, key_length)
    solver = partial(break_single_byte, table=table)
    mapper = executor.map if executor is not None else map
    # map() keeps column order regardless of completion order
    column_results = list(mapper(solver, columns))

    key = bytes(result.key for result in column_results)
    plaintext = repeating_xor(ciphertext, key)

    logger.debug("Repeating key (length %d): %r", key_length, key)
    return RepeatingKeyResult(
        key=key,
        plaintext=plaintext,
        key_length=key_length,
        column_scores=[result.score for result in column_results],
        key_length_candidates=candidates[:5],
    )


class XORBreaker:
    """Break single-byte and repeating-key XOR against a fixed frequency table"""

    def __init__(self, table: FrequencyTable,
                 min_key_len: int = 2,
                 max_key_len: int = MAX_KEY_LENGTH,
                 sample_pairs: Optional[int] = 1,
                 executor: Optional[Executor] = None):
        self.table = table
        self.min_key_len = min_key_len
        self.max_key_len = max_key_len
        self.sample_pairs = sample_pairs
        self.executor = executor

    def break_single_byte_xor(self, ciphertext: bytes) -> SingleByteResult:
        """Break single-byte XOR, return the winning candidate"""
        return break_single_byte(ciphertext, self.table, self.executor)

    def guess_key_length(self, ciphertext: bytes, top: int = 5) -> List[KeyLengthCandidate]:
        """Most probable key lengths, best first"""
        return rank_key_lengths(ciphertext, self.min_key_len, self.max_key_len,
                                self.sample_pairs)[:top]

    def break_repeating_key_xor(self, ciphertext: bytes,
                                key_length: Optional[int] = None) -> RepeatingKeyResult:
        """Break repeating-key XOR, estimating the key length unless given"""
        return break_repeating_key(
            ciphertext,
            self.table,
            key_length=key_length,
            min_key_len=self.min_key_len,
            max_key_len=self.max_key_len,
            sample_pairs=self.sample_pairs,
            executor=self.executor,
        )
