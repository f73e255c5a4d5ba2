"""
Input Decoding
Turns hex/base64/raw input into ciphertext bytes before analysis
"""

import base64
import binascii
from typing import List, Union

from ..core.errors import InputDecodingError

ENCODINGS = ("hex", "base64", "raw")


def decode_input(data: Union[str, bytes], encoding: str = "hex") -> bytes:
    """
    Decode input text into ciphertext bytes

    Whitespace (including newlines) is ignored for hex and base64.

    Args:
        data: Encoded input
        encoding: 'hex', 'base64' or 'raw'

    Returns:
        Decoded ciphertext

    Raises:
        InputDecodingError: input is not valid for the encoding
    """
    if encoding not in ENCODINGS:
        raise InputDecodingError(f"Unknown encoding: {encoding}. Available: {list(ENCODINGS)}")

    if encoding == "raw":
        if not isinstance(data, str):
            return bytes(data)
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InputDecodingError(f"Raw input must only hold characters U+0000-U+00FF: {e}") from e

    if isinstance(data, bytes):
        data = data.decode("ascii", errors="replace")
    compact = "".join(data.split())

    try:
        if encoding == "hex":
            return bytes.fromhex(compact)
        return base64.b64decode(compact, validate=True)
    except (ValueError, binascii.Error) as e:
        raise InputDecodingError(f"Invalid {encoding} input: {e}") from e


def decode_lines(data: Union[str, bytes], encoding: str = "hex") -> List[bytes]:
    """
    Decode each line as its own ciphertext

    Hex and base64 lines that are blank are skipped. Raw input is split on
    b"\\n" only, so every other byte (whitespace included) stays in its
    ciphertext; only empty fragments are dropped.
    """
    if encoding == "raw":
        raw = decode_input(data, "raw")
        return [line for line in raw.split(b"\n") if line]

    if isinstance(data, bytes):
        data = data.decode("ascii", errors="replace")
    return [decode_input(line, encoding) for line in data.splitlines() if line.strip()]
