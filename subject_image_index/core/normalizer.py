"""Text normalization for subject names and queries."""

import re
from typing import List


class TextNormalizer:
    """Handles case folding and tokenization of subject names."""

    def __init__(self) -> None:
        """Initialize the normalizer."""
        self.whitespace_regex = re.compile(r"\s+")

    def normalize(self, text: str) -> str:
        """
        Normalize text for matching.

        Only simple lowercasing is applied; no Unicode decomposition or
        collation, so matching stays defined over code points.

        Args:
            text: Input text to normalize

        Returns:
            Normalized text
        """
        if not text:
            return ""
        return text.lower()

    def split(self, text: str) -> List[str]:
        """Split text on runs of whitespace, dropping empty pieces."""
        if not text:
            return []
        return [token for token in self.whitespace_regex.split(text) if token]

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize a name into lowercase index tokens.

        Args:
            text: Subject name

        Returns:
            List of lowercase tokens, in order of appearance
        """
        return [self.normalize(token) for token in self.split(text)]
