"""
XOR Primitives
Byte-wise XOR transforms and bit-level Hamming distance
"""

from itertools import cycle

from .errors import EmptyInputError, InvalidLengthError, InvalidParameterError


def fixed_xor(a: bytes, b: bytes) -> bytes:
    """XOR two equal-length buffers"""
    if len(a) != len(b):
        raise InvalidLengthError(f"fixed_xor: mismatched lengths ({len(a)} != {len(b)})")
    return bytes(x ^ y for x, y in zip(a, b))


def single_byte_xor(data: bytes, key: int) -> bytes:
    """XOR every byte of data with a single key byte"""
    if not 0 <= key <= 255:
        raise InvalidParameterError(f"Single-byte key out of range: {key}")
    return bytes(b ^ key for b in data)


def repeating_xor(data: bytes, key: bytes) -> bytes:
    """
    XOR data with a cyclically repeated key

    Byte i of the output is data[i] ^ key[i % len(key)]. Encryption and
    decryption are the same operation.

    Args:
        data: Plaintext or ciphertext
        key: One or more key bytes

    Returns:
        Transformed bytes, same length as data
    """
    if not key:
        raise EmptyInputError("repeating_xor: key must not be empty")
    return bytes(b ^ k for b, k in zip(data, cycle(key)))


def hamming_distance(a: bytes, b: bytes) -> int:
    """Count differing bits between two equal-length byte strings"""
    if len(a) != len(b):
        raise InvalidLengthError(
            f"hamming_distance: mismatched lengths ({len(a)} != {len(b)})"
        )
    return sum(bin(x ^ y).count('1') for x, y in zip(a, b))
