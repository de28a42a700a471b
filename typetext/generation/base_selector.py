"""Base class for word selectors.

A word selector produces practice words one at a time. Selectors are
composed by wrapping: each wrapping stage owns exactly one inner selector
and delegates to it unless it decides to override the draw.
"""

from abc import ABC, abstractmethod
from typing import List


class WordSelector(ABC):
    """Something that provides new words."""

    @abstractmethod
    def new_word(self) -> str:
        """Return a new word."""
        ...

    def new_words(self, num_words: int, preserve_whitespace: bool = False) -> List[str]:
        """Return a batch of words from ``num_words`` draws.

        Args:
            num_words: Number of draws to make.
            preserve_whitespace: Keep a drawn unit that contains spaces as a
                single element instead of splitting it into words.

        Returns:
            The drawn words, in draw order.
        """
        words: List[str] = []
        for _ in range(num_words):
            word = self.new_word()
            if preserve_whitespace:
                words.append(word)
            else:
                words.extend(word.split())
        return words
