"""Word selector stages: raw corpus draws, numerals and punctuation."""

import random
import time
from pathlib import Path
from typing import Iterable, Optional, Union

from ..corpus.loader import WordStream
from ..corpus.trie import WeightedTrie
from ..utils.logging import get_logger, log_trie_build
from .base_selector import WordSelector
from .punctuation import PUNCTUATION

logger = get_logger(__name__)


def _check_chance(name: str, chance: float) -> float:
    if not 0.0 <= chance <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {chance}")
    return chance


class RawWordSelector(WordSelector):
    """Draws words straight from a compressed weighted trie.

    Words are drawn with probability proportional to how often they occur
    in the corpus.
    """

    def __init__(self, trie: WeightedTrie, rng: Optional[random.Random] = None):
        """Initialize from an already built trie.

        Args:
            trie: A trie to sample from, normally compressed.
            rng: Source of randomness; a fresh OS-seeded one if omitted.
        """
        self.trie = trie
        self.rng = rng or random.Random()

    @classmethod
    def from_iter(
        cls,
        words: Iterable[str],
        rng: Optional[random.Random] = None
    ) -> "RawWordSelector":
        """Build and compress a trie from a stream of words.

        Any exception raised by ``words`` while it is consumed (for example
        an ``OSError`` from the underlying file) aborts construction and
        propagates unchanged.
        """
        started = time.perf_counter()

        trie = WeightedTrie.from_words(words)
        compressed = trie.compress()

        log_trie_build(
            logger,
            num_words=compressed.num_words(),
            nodes_before=len(trie),
            nodes_after=len(compressed),
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        return cls(compressed, rng=rng)

    @classmethod
    def from_path(
        cls,
        word_list_path: Union[str, Path],
        rng: Optional[random.Random] = None
    ) -> "RawWordSelector":
        """Build from a word list file, one or more words per line."""
        with WordStream.from_path(word_list_path) as stream:
            return cls.from_iter(stream, rng=rng)

    @classmethod
    def from_string(cls, word_list: str, rng: Optional[random.Random] = None) -> "RawWordSelector":
        """Build from the contents of a word list."""
        return cls.from_iter(WordStream.from_string(word_list), rng=rng)

    def new_word(self) -> str:
        """Sample a word; the case is kept as stored in the trie.

        Raises:
            EmptyTrieError: If the corpus had no words.
        """
        # sample() raises EmptyTrieError before the modulo when the trie is empty
        return self.trie.sample(self.rng.randrange(max(self.trie.num_words(), 1)))


class NumberGeneratingWordSelector(WordSelector):
    """Wraps another selector, replacing some draws with random numerals."""

    def __init__(
        self,
        selector: WordSelector,
        number_chance: float,
        number_max: int,
        rng: Optional[random.Random] = None
    ):
        """Initialize the numeral stage.

        Args:
            selector: Inner selector used for non-numeral draws.
            number_chance: Per-draw probability of producing a numeral.
            number_max: Exclusive upper bound of generated numbers.
            rng: Source of randomness.

        Raises:
            ValueError: If the chance is outside [0, 1] or the bound is not positive.
        """
        if number_max <= 0:
            raise ValueError(f"number_max must be positive, got {number_max}")

        self.selector = selector
        self.number_chance = _check_chance("number_chance", number_chance)
        self.number_max = number_max
        self.rng = rng or random.Random()

        logger.debug(
            "Numeral stage enabled",
            extra_data={"number_chance": number_chance, "number_max": number_max}
        )

    def new_word(self) -> str:
        if self.rng.random() < self.number_chance:
            return str(self.rng.randrange(self.number_max))
        return self.selector.new_word()


class PunctuatedWordSelector(WordSelector):
    """Wraps another selector, adding punctuation to some of its words.

    The first word is capitalized, as is every word following a
    sentence-ending mark.
    """

    def __init__(
        self,
        selector: WordSelector,
        punctuation_chance: float,
        rng: Optional[random.Random] = None
    ):
        """Initialize the punctuation stage.

        Args:
            selector: Inner selector providing the words.
            punctuation_chance: Per-draw probability of punctuating a word.
            rng: Source of randomness.

        Raises:
            ValueError: If the chance is outside [0, 1].
        """
        self.selector = selector
        self.punctuation_chance = _check_chance("punctuation_chance", punctuation_chance)
        self.next_is_capital = True
        self.rng = rng or random.Random()

        logger.debug(
            "Punctuation stage enabled",
            extra_data={"punctuation_chance": punctuation_chance}
        )

    def new_word(self) -> str:
        word = self.selector.new_word()

        will_punctuate = self.rng.random() < self.punctuation_chance
        if not (will_punctuate or self.next_is_capital):
            return word

        chars = list(word)
        if self.next_is_capital and chars:
            # some characters expand to several when uppercased
            chars[0:1] = list(chars[0].upper())
            self.next_is_capital = False

        if will_punctuate:
            rule = self.rng.choice(PUNCTUATION)
            rule.apply(chars)
            if rule.capitalizes_next:
                self.next_is_capital = True

        return "".join(chars)
