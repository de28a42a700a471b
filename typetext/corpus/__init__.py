"""Corpus loading and the weighted trie built from it."""

from .loader import WordStream, iter_words
from .trie import (
    WeightedTrie,
    TrieNode,
    TrieError,
    MissingNodeError,
    EmptyTrieError,
)

__all__ = [
    "WordStream",
    "iter_words",
    "WeightedTrie",
    "TrieNode",
    "TrieError",
    "MissingNodeError",
    "EmptyTrieError",
]
