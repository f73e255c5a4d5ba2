"""
Shared fixtures: bundled corpus, frequency table and known keys
"""

import sys
from pathlib import Path

import pytest

# Run against src/ without installation
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from xorscope.core.language_model import build_frequency_table  # noqa: E402
from xorscope.utils.corpus import load_corpus  # noqa: E402


# Random-byte keys whose first harmonic lies beyond the 40-byte search range
KEY_23 = bytes.fromhex("8f3ac1d4e7b2095f6e13a8c44d9b2071f5e63c8a915bd2")
KEY_29 = bytes.fromhex("5e17a9c3f08b2d64e1974ac6381fb25d0e9ad3716ca44b82f13e59c07b")

# Cryptopals set 1 fixtures
COOKING_HEX = "1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736"
ICE_PLAINTEXT = b"Burning 'em, if you ain't quick and nimble\nI go crazy when I hear a cymbal"
ICE_HEX = (
    "0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324272765"
    "272a282b2f20430a652e2c652a3124333a653e2b2027630c692b20283165286326302e27282f"
)


@pytest.fixture(scope="session")
def corpus():
    return load_corpus()


@pytest.fixture(scope="session")
def corpus_bytes(corpus):
    return corpus.encode("utf-8")


@pytest.fixture(scope="session")
def table(corpus):
    return build_frequency_table(corpus)


@pytest.fixture
def key_23():
    return KEY_23


@pytest.fixture
def key_29():
    return KEY_29
