"""Text normalization utilities for consistent word processing."""

import re
from typing import List


class TextNormalizer:
    """Lowercases, strips punctuation and splits text into index tokens."""

    def __init__(self, min_token_length: int = 3) -> None:
        """
        Initialize the normalizer.

        Args:
            min_token_length: Shortest token kept by ``tokenize``
        """
        self.min_token_length = min_token_length

        # Compile regex patterns for performance
        self.non_word_regex = re.compile(r"[^\w\s]")
        self.whitespace_regex = re.compile(r"\s+")

    def normalize(self, text: str) -> str:
        """
        Normalize text for consistent processing.

        Args:
            text: Input text to normalize

        Returns:
            Lowercased text with punctuation replaced by spaces
        """
        if not text:
            return ""
        return self.non_word_regex.sub(" ", text.lower())

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into words.

        Duplicates are kept and order follows the input text.

        Args:
            text: Input text

        Returns:
            List of tokens at least ``min_token_length`` characters long
        """
        if not text:
            return []

        normalized = self.normalize(text)
        return [
            token
            for token in self.whitespace_regex.split(normalized)
            if len(token) >= self.min_token_length
        ]

    def cache_key(self, query: str) -> str:
        """Key under which a query's results are cached."""
        return query.lower().strip()
