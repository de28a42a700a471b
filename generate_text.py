#!/usr/bin/env python3
"""Simple script to print one batch of practice text."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from typetext.config import Config, load_config
from typetext.corpus import EmptyTrieError
from typetext.generation import create_word_selector_from_config
from typetext.utils.logging import setup_logging, set_session_id

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python generate_text.py <word_list|config.json> [num_words]")
        print("Example: python generate_text.py words/top250.txt 30")
        sys.exit(1)

    source = sys.argv[1]
    if source.endswith(".json"):
        config = load_config(source)
    else:
        config = Config()
        config.corpus.wordlist_file = source

    if len(sys.argv) > 2:
        config.num_words = int(sys.argv[2])

    setup_logging(level=config.log_level, json_format=config.log_json)
    set_session_id()

    selector = create_word_selector_from_config(config)
    try:
        words = selector.new_words(
            config.num_words,
            preserve_whitespace=config.selector.preserve_whitespace,
        )
    except EmptyTrieError:
        print(f"No words found in {config.text_name()}")
        sys.exit(1)

    print(" ".join(words))
