"""
Text normalization and tokenization for the hashing embedder.
"""
import re
from typing import List, Optional

MIN_TOKEN_LENGTH = 3

_NON_ALNUM = re.compile(r'[^a-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')


def preprocess_text(text: Optional[str]) -> str:
    """Lowercase, blank out punctuation and collapse whitespace."""
    if not text:
        return ""
    text = _NON_ALNUM.sub(' ', text.lower())
    return _WHITESPACE.sub(' ', text).strip()


def tokenize(text: str) -> List[str]:
    """Split preprocessed text on spaces, keeping tokens of 3+ characters."""
    return [token for token in text.split(' ') if len(token) >= MIN_TOKEN_LENGTH]


def normalize_tokens(text: Optional[str]) -> List[str]:
    """
    Turn raw text into the token sequence fed to the embedder.

    Args:
        text: Raw text, may be None or empty

    Returns:
        Ordered list of tokens (possibly empty)
    """
    return tokenize(preprocess_text(text))
