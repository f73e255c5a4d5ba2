"""
Corpus Loader
Reads reference text for building frequency tables
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional, Union

from ..core.errors import EmptyInputError

logger = logging.getLogger(__name__)

DEFAULT_CORPUS = "english_corpus.txt"


def load_corpus(path: Optional[Union[str, Path]] = None) -> str:
    """
    Load reference text

    Args:
        path: UTF-8 text file to read; None loads the bundled English sample

    Returns:
        Corpus text

    Raises:
        FileNotFoundError: path does not exist
        EmptyInputError: the file is empty
    """
    if path is None:
        text = resources.files("xorscope.data").joinpath(DEFAULT_CORPUS).read_text(encoding="utf-8")
        source = f"bundled {DEFAULT_CORPUS}"
    else:
        corpus_path = Path(path)
        if not corpus_path.exists():
            raise FileNotFoundError(f"Corpus file not found: {path}")
        text = corpus_path.read_text(encoding="utf-8", errors="replace")
        source = str(corpus_path)

    if not text:
        raise EmptyInputError(f"Corpus is empty: {source}")

    logger.debug("Loaded corpus from %s (%d characters)", source, len(text))
    return text
