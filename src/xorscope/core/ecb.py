"""
ECB Detection and Decryption
Detects Electronic Codebook mode from repeated ciphertext blocks and decrypts
ECB ciphertext through a pluggable block cipher

ECB encrypts every block independently, so equal plaintext blocks become equal
ciphertext blocks. A duplicate block is a cheap structural signal that needs no
language model.
"""

import logging
from typing import Iterator, Protocol

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import InvalidLengthError, InvalidParameterError

logger = logging.getLogger(__name__)

AES_BLOCK_SIZE = 16


class BlockCipher(Protocol):
    """Anything that decrypts one fixed-size block at a time"""
    block_size: int

    def decrypt(self, block: bytes) -> bytes:
        ...


def _check_block_multiple(data: bytes, block_size: int, operation: str):
    if block_size < 1:
        raise InvalidParameterError(f"{operation}: block size must be >= 1, got {block_size}")
    if len(data) % block_size != 0:
        raise InvalidLengthError(
            f"{operation}: length {len(data)} is not a multiple of block size {block_size}"
        )


def iter_blocks(data: bytes, block_size: int) -> Iterator[bytes]:
    """Yield consecutive non-overlapping blocks"""
    for offset in range(0, len(data), block_size):
        yield bytes(data[offset:offset + block_size])


def detect_ecb(ciphertext: bytes, block_size: int = AES_BLOCK_SIZE) -> bool:
    """
    Check ciphertext for a repeated block

    Args:
        ciphertext: Ciphertext whose length is a multiple of block_size
        block_size: Cipher block size in bytes (16 for AES)

    Returns:
        True as soon as a block equals an earlier block, False otherwise

    Raises:
        InvalidLengthError: length is not a multiple of block_size
    """
    _check_block_multiple(ciphertext, block_size, "detect_ecb")

    seen = set()
    for block in iter_blocks(ciphertext, block_size):
        if block in seen:
            return True
        seen.add(block)
    return False


def count_duplicate_blocks(ciphertext: bytes, block_size: int = AES_BLOCK_SIZE) -> int:
    """Number of blocks that repeat an earlier block"""
    _check_block_multiple(ciphertext, block_size, "count_duplicate_blocks")

    blocks = list(iter_blocks(ciphertext, block_size))
    return len(blocks) - len(set(blocks))


def decrypt_ecb(ciphertext: bytes, cipher: BlockCipher) -> bytes:
    """
    Decrypt ciphertext in ECB mode, one block at a time

    Padding is left in place; stripping it is up to the caller.
    """
    _check_block_multiple(ciphertext, cipher.block_size, "decrypt_ecb")
    return b"".join(cipher.decrypt(block) for block in iter_blocks(ciphertext, cipher.block_size))


class AESBlockCipher:
    """Raw AES block transform backed by the cryptography package"""

    block_size = AES_BLOCK_SIZE

    def __init__(self, key: bytes):
        if len(key) not in (16, 24, 32):
            raise InvalidLengthError(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        self._cipher = Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())
        logger.debug("AES-%d block cipher ready", len(key) * 8)

    def _check_block(self, block: bytes):
        if len(block) != self.block_size:
            raise InvalidLengthError(f"AES block must be {self.block_size} bytes, got {len(block)}")

    def decrypt(self, block: bytes) -> bytes:
        self._check_block(block)
        decryptor = self._cipher.decryptor()
        return decryptor.update(block) + decryptor.finalize()

    def encrypt(self, block: bytes) -> bytes:
        self._check_block(block)
        encryptor = self._cipher.encryptor()
        return encryptor.update(block) + encryptor.finalize()
