"""Word selector pipeline producing practice text."""

from .base_selector import WordSelector
from .selectors import (
    RawWordSelector,
    NumberGeneratingWordSelector,
    PunctuatedWordSelector,
)
from .punctuation import PunctuationKind, PunctuationRule, PUNCTUATION
from .factory import create_word_selector, create_word_selector_from_config

__all__ = [
    "WordSelector",
    "RawWordSelector",
    "NumberGeneratingWordSelector",
    "PunctuatedWordSelector",
    "PunctuationKind",
    "PunctuationRule",
    "PUNCTUATION",
    "create_word_selector",
    "create_word_selector_from_config",
]
