"""
Language Model
Unigram character-frequency table built from reference text, used to rank
candidate plaintexts by how much they look like the reference language

A weak discriminator is enough here: a wrong XOR key turns natural language
into near-uniform byte noise, which lands on characters the table has rarely
or never seen.
"""

from collections import Counter
from collections.abc import Mapping
from typing import Dict, Iterator, List, Tuple, Union

from .errors import EmptyInputError


class FrequencyTable(Mapping):
    """
    Immutable mapping of character -> relative frequency

    Values are non-negative and sum to 1.0 over the characters observed in the
    training text. Unseen characters weigh 0.0 when scoring.
    """

    def __init__(self, frequencies: Dict[str, float]):
        self._frequencies = dict(frequencies)
        # Weight of every byte value under the latin-1 byte->char mapping
        self._byte_weights = tuple(self._frequencies.get(chr(b), 0.0) for b in range(256))

    def __getitem__(self, char: str) -> float:
        return self._frequencies[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._frequencies)

    def __len__(self) -> int:
        return len(self._frequencies)

    def __repr__(self) -> str:
        return f"FrequencyTable({len(self)} characters)"

    def weight(self, char: str) -> float:
        """Frequency of char, 0.0 if it never occurred in the training text"""
        return self._frequencies.get(char, 0.0)

    def byte_weights(self) -> Tuple[float, ...]:
        """Weights indexed by byte value (0-255)"""
        return self._byte_weights

    def most_common(self, n: int = 10) -> List[Tuple[str, float]]:
        """Return the n most frequent characters with their frequencies"""
        return sorted(self._frequencies.items(), key=lambda item: (-item[1], item[0]))[:n]


def build_frequency_table(text: str) -> FrequencyTable:
    """
    Build a frequency table from reference text

    Args:
        text: Natural-language sample (e.g. a novel)

    Returns:
        FrequencyTable whose values are count / total character count

    Raises:
        EmptyInputError: text is empty
    """
    if not text:
        raise EmptyInputError("Cannot build a frequency table from empty text")

    counts = Counter(text)
    total = len(text)
    return FrequencyTable({char: count / total for char, count in counts.items()})


def score_text(text: Union[str, bytes], table: FrequencyTable) -> float:
    """
    Average per-character frequency of text under table

    Bytes are read one character per byte (latin-1), so the denominator is
    always the input length.

    Raises:
        EmptyInputError: text is empty
    """
    if not text:
        raise EmptyInputError("Cannot score empty text")

    if isinstance(text, (bytes, bytearray)):
        weights = table.byte_weights()
        return sum(weights[b] for b in text) / len(text)

    return sum(table.weight(char) for char in text) / len(text)
