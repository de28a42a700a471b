"""Factory for assembling the word selector pipeline from configuration.

The raw stage is always built first. The numeral stage, when enabled,
wraps it, and the punctuation stage, when enabled, wraps whichever stage
is outermost so far, so numerals can be punctuated and capitalized.
"""

import random
import sys
from typing import Iterable, Optional

from ..config import Config, SelectorConfig
from ..corpus.loader import WordStream
from ..utils.logging import get_logger
from .base_selector import WordSelector
from .selectors import (
    NumberGeneratingWordSelector,
    PunctuatedWordSelector,
    RawWordSelector,
)

logger = get_logger(__name__)


def create_word_selector(
    words: Iterable[str],
    config: Optional[SelectorConfig] = None,
    rng: Optional[random.Random] = None,
) -> WordSelector:
    """Create the selector pipeline around a stream of corpus words.

    Args:
        words: Corpus words, already tokenized.
        config: Which stages to enable and their parameters.
        rng: Randomness shared by every stage; OS-seeded if omitted.

    Returns:
        The outermost selector of the pipeline.

    Raises:
        OSError: If reading the corpus fails.
        ValueError: If a stage parameter is out of range.
    """
    config = config or SelectorConfig()
    rng = rng or random.Random()

    selector: WordSelector = RawWordSelector.from_iter(words, rng=rng)

    if config.numbers:
        selector = NumberGeneratingWordSelector(
            selector,
            number_chance=config.number_chance,
            number_max=config.number_max,
            rng=rng,
        )

    if config.punctuation:
        selector = PunctuatedWordSelector(
            selector,
            punctuation_chance=config.punctuation_chance,
            rng=rng,
        )

    return selector


def open_word_stream(config: Config) -> WordStream:
    """Open the configured word source, reading stdin when no file is set."""
    if config.corpus.wordlist_file:
        return WordStream.from_path(
            config.corpus.wordlist_file, quote_mode=config.corpus.quote_mode
        )
    return WordStream(sys.stdin, quote_mode=config.corpus.quote_mode, name="<stdin>")


def create_word_selector_from_config(
    config: Config,
    rng: Optional[random.Random] = None,
) -> WordSelector:
    """Open the configured corpus and build the selector pipeline from it."""
    stream = open_word_stream(config)
    logger.info(f"Loading words from {config.text_name()}")

    try:
        return create_word_selector(stream, config.selector, rng=rng)
    finally:
        if stream.source is not sys.stdin:
            stream.close()
