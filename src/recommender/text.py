"""Text normalization shared by query parsing and corpus indexing."""

import re
from typing import List

# Anything that is neither a word character nor whitespace
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


def strip_punctuation(text: str) -> str:
    """Replace punctuation with spaces and collapse whitespace."""
    return " ".join(PUNCTUATION_PATTERN.sub(" ", text).split())


def tokenize(text: str) -> List[str]:
    """Split text into lower-case word tokens.

    Short tokens are kept; length filtering is up to the caller.

    Example:
        >>> tokenize("Wireless, Mouse!")
        ['wireless', 'mouse']
    """
    return PUNCTUATION_PATTERN.sub(" ", text.lower()).split()
