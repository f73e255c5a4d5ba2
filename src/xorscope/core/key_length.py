"""
Key-Length Estimator
Infers a repeating-key XOR key length from normalized Hamming distance

When the sample boundary falls on a whole number of key periods, the key
cancels out of ciphertext ^ ciphertext and what remains is plaintext ^
plaintext, which for natural language has fewer set bits than the noise left
by a misaligned key.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import InsufficientInputError, InvalidParameterError
from .xor_ops import hamming_distance

logger = logging.getLogger(__name__)

# Candidate key lengths are bounded to keep the search tractable
MIN_KEY_LENGTH = 1
MAX_KEY_LENGTH = 40

# Each sample spans this many key periods
BLOCKS_PER_SAMPLE = 4


@dataclass(frozen=True)
class KeyLengthCandidate:
    """Candidate key length with its normalized distance (lower is better)"""
    key_length: int
    distance: float

    def to_dict(self) -> Dict:
        return {'key_length': self.key_length, 'distance': round(self.distance, 4)}


def required_length(max_key_len: int = MAX_KEY_LENGTH) -> int:
    """Minimum ciphertext length that gives the largest candidate one full sample pair"""
    return max_key_len * BLOCKS_PER_SAMPLE * 2


def _check_bounds(min_key_len: int, max_key_len: int):
    if not MIN_KEY_LENGTH <= min_key_len <= max_key_len <= MAX_KEY_LENGTH:
        raise InvalidParameterError(
            f"Key length range must satisfy {MIN_KEY_LENGTH} <= min <= max <= "
            f"{MAX_KEY_LENGTH}, got [{min_key_len}, {max_key_len}]"
        )


def normalized_distance(ciphertext: bytes, key_length: int, sample_pairs: Optional[int] = 1) -> float:
    """
    Mean Hamming distance between consecutive sample pairs, divided by key_length

    Pair j compares bytes [2j*4k, (2j+1)*4k) with [(2j+1)*4k, (2j+2)*4k).
    With sample_pairs=1 only the pair at the very start is used.

    Args:
        ciphertext: Ciphertext holding at least one full pair
        key_length: Candidate key length k
        sample_pairs: Number of pairs to average, None for every pair that fits
    """
    sample = key_length * BLOCKS_PER_SAMPLE
    available = len(ciphertext) // (2 * sample)
    if available < 1:
        raise InsufficientInputError(
            f"Need {2 * sample} bytes to sample key length {key_length}, got {len(ciphertext)}",
            required=2 * sample,
            actual=len(ciphertext),
        )

    pairs = available if sample_pairs is None else min(sample_pairs, available)
    total = 0
    for j in range(pairs):
        start = 2 * j * sample
        total += hamming_distance(
            ciphertext[start:start + sample],
            ciphertext[start + sample:start + 2 * sample],
        )
    return total / pairs / key_length


def rank_key_lengths(ciphertext: bytes,
                     min_key_len: int = 2,
                     max_key_len: int = MAX_KEY_LENGTH,
                     sample_pairs: Optional[int] = 1) -> List[KeyLengthCandidate]:
    """
    Score every candidate key length, best first

    Candidates are ordered by (distance, key_length) so equal distances favour
    the shorter key.

    Raises:
        InvalidParameterError: key length bounds outside [1, 40] or sample_pairs < 1
        InsufficientInputError: ciphertext shorter than 8 * max_key_len bytes
    """
    _check_bounds(min_key_len, max_key_len)
    if sample_pairs is not None and sample_pairs < 1:
        raise InvalidParameterError(f"sample_pairs must be >= 1 or None, got {sample_pairs}")

    needed = required_length(max_key_len)
    if len(ciphertext) < needed:
        raise InsufficientInputError(
            f"Key-length search up to {max_key_len} needs at least {needed} bytes "
            f"of ciphertext, got {len(ciphertext)}",
            required=needed,
            actual=len(ciphertext),
        )

    candidates = [
        KeyLengthCandidate(k, normalized_distance(ciphertext, k, sample_pairs))
        for k in range(min_key_len, max_key_len + 1)
    ]
    candidates.sort(key=lambda c: (c.distance, c.key_length))

    logger.debug("Key length ranking (top 5): %s",
                 [(c.key_length, round(c.distance, 3)) for c in candidates[:5]])
    return candidates


def estimate_key_length(ciphertext: bytes,
                        min_key_len: int = 2,
                        max_key_len: int = MAX_KEY_LENGTH,
                        sample_pairs: Optional[int] = 1) -> int:
    """
    Most likely repeating-key length

    Args:
        ciphertext: Repeating-key XOR ciphertext, at least 8 * max_key_len bytes
        min_key_len: Smallest candidate (default 2)
        max_key_len: Largest candidate (default 40); lower it for short inputs
        sample_pairs: Sample pairs averaged per candidate, None for all

    Returns:
        Key length with the lowest normalized distance
    """
    return rank_key_lengths(ciphertext, min_key_len, max_key_len, sample_pairs)[0].key_length
