"""
Core Analysis Engine
Orchestrates the breakers and the ECB detector over one or many ciphertexts
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .config import AnalysisConfig
from .ecb import AESBlockCipher, count_duplicate_blocks, decrypt_ecb, detect_ecb
from .errors import EmptyInputError
from .key_length import KeyLengthCandidate, rank_key_lengths
from .language_model import FrequencyTable, build_frequency_table
from .xor_breaker import (
    RepeatingKeyResult, SingleByteResult, break_repeating_key, break_single_byte,
    rank_single_byte_keys,
)
from ..utils.corpus import load_corpus

logger = logging.getLogger(__name__)


@dataclass
class BatchSingleByteResult:
    """Ciphertext in a batch that most looks like single-byte XOR of the language"""
    index: int
    result: SingleByteResult
    candidates: int = 0

    def to_dict(self) -> Dict:
        return {'index': self.index, 'candidates': self.candidates, **self.result.to_dict()}


@dataclass
class ECBScanResult:
    """ECB verdict for one ciphertext"""
    index: int
    ciphertext_length: int
    duplicate_blocks: int
    is_ecb: bool

    def to_dict(self) -> Dict:
        return {
            'index': self.index,
            'ciphertext_length': self.ciphertext_length,
            'duplicate_blocks': self.duplicate_blocks,
            'is_ecb': self.is_ecb,
        }


@dataclass
class AnalysisReport:
    """Everything one engine run produced, for reports and JSON/YAML export"""
    mode: str
    source: str = ""
    single_byte: List[SingleByteResult] = field(default_factory=list)
    batch_single_byte: Optional[BatchSingleByteResult] = None
    key_lengths: List[KeyLengthCandidate] = field(default_factory=list)
    repeating_key: Optional[RepeatingKeyResult] = None
    ecb_scans: List[ECBScanResult] = field(default_factory=list)
    decrypted: Optional[bytes] = None

    def to_dict(self) -> Dict:
        data: Dict = {'mode': self.mode, 'source': self.source}
        if self.single_byte:
            data['single_byte'] = [r.to_dict() for r in self.single_byte]
        if self.batch_single_byte:
            data['batch_single_byte'] = self.batch_single_byte.to_dict()
        if self.key_lengths:
            data['key_lengths'] = [c.to_dict() for c in self.key_lengths]
        if self.repeating_key:
            data['repeating_key'] = self.repeating_key.to_dict()
        if self.ecb_scans:
            data['ecb'] = [s.to_dict() for s in self.ecb_scans]
        if self.decrypted is not None:
            data['decrypted'] = self.decrypted.decode('utf-8', errors='replace')
        return data


class XorscopeEngine:
    """
    Main analysis engine

    Holds one frequency table (built once, read-only afterwards) and an
    AnalysisConfig, and runs:
    1. Single-byte XOR breaking, for one ciphertext or the best of a batch
    2. Key-length ranking for repeating-key XOR
    3. Repeating-key XOR breaking
    4. ECB detection over a batch, and AES-ECB decryption with a known key
    """

    def __init__(self, table: Optional[FrequencyTable], config: Optional[AnalysisConfig] = None):
        """
        Initialize engine

        Args:
            table: Frequency table of the expected plaintext language (None for
                   structural analyses only: key lengths, ECB)
            config: Analysis configuration (defaults to AnalysisConfig())
        """
        self.table = table
        self.config = config if config is not None else AnalysisConfig()

    @classmethod
    def from_corpus(cls, corpus_path: Optional[Union[str, Path]] = None,
                    config: Optional[AnalysisConfig] = None) -> 'XorscopeEngine':
        """Build an engine from a corpus file, or the bundled English sample"""
        table = build_frequency_table(load_corpus(corpus_path))
        logger.info("Frequency table built: %d distinct characters", len(table))
        return cls(table, config)

    def break_single_byte(self, ciphertext: bytes) -> List[SingleByteResult]:
        """Best single-byte candidates for one ciphertext, winner first"""
        results = rank_single_byte_keys(ciphertext, self.table, self.config.top_candidates)
        logger.info("Single-byte XOR: key 0x%02x, score %.4f", results[0].key, results[0].score)
        return results

    def find_single_byte_ciphertext(self, ciphertexts: Sequence[bytes]) -> BatchSingleByteResult:
        """
        Find the ciphertext in a batch that was single-byte XOR encrypted

        Each ciphertext is broken on its own; the one whose best plaintext
        scores highest wins, ties going to the earliest.

        Raises:
            EmptyInputError: batch is empty or contains an empty ciphertext
        """
        if not ciphertexts:
            raise EmptyInputError("No ciphertexts to search")

        results = [break_single_byte(ciphertext, self.table) for ciphertext in ciphertexts]
        index = max(range(len(results)), key=lambda i: (results[i].score, -i))

        logger.info("Best single-byte candidate: #%d of %d (key 0x%02x)",
                    index, len(results), results[index].key)
        return BatchSingleByteResult(index=index, result=results[index], candidates=len(results))

    def rank_key_lengths(self, ciphertext: bytes) -> List[KeyLengthCandidate]:
        """Most probable repeating-key lengths, best first"""
        candidates = rank_key_lengths(
            ciphertext,
            self.config.min_key_len,
            self.config.max_key_len,
            self.config.sample_pairs,
        )
        logger.info("Estimated key length: %d", candidates[0].key_length)
        return candidates[:self.config.top_candidates]

    def break_repeating_key(self, ciphertext: bytes, key_length: Optional[int] = None) -> RepeatingKeyResult:
        """Recover a repeating XOR key, estimating its length unless given"""
        kwargs = dict(
            key_length=key_length,
            min_key_len=self.config.min_key_len,
            max_key_len=self.config.max_key_len,
            sample_pairs=self.config.sample_pairs,
        )

        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                result = break_repeating_key(ciphertext, self.table, executor=pool, **kwargs)
        else:
            result = break_repeating_key(ciphertext, self.table, **kwargs)

        logger.info("Repeating-key XOR: key length %d, key %r", result.key_length, result.key)
        return result

    def scan_ecb(self, ciphertexts: Sequence[bytes]) -> List[ECBScanResult]:
        """ECB verdict for every ciphertext in a batch"""
        block_size = self.config.block_size
        scans = []
        for index, ciphertext in enumerate(ciphertexts):
            is_ecb = detect_ecb(ciphertext, block_size)
            duplicates = count_duplicate_blocks(ciphertext, block_size) if is_ecb else 0
            scans.append(ECBScanResult(index, len(ciphertext), duplicates, is_ecb))
            if is_ecb:
                logger.info("Ciphertext #%d looks ECB encrypted (%d repeated blocks)", index, duplicates)
        return scans

    def decrypt_aes_ecb(self, ciphertext: bytes, key: bytes) -> bytes:
        """Decrypt AES-ECB ciphertext with a known key (padding left in place)"""
        return decrypt_ecb(ciphertext, AESBlockCipher(key))
