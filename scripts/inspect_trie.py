#!/usr/bin/env python3
"""Print the weighted trie built from a word list, before and after compression.

Every word of the input is inserted, both tries are listed node by node,
and then every rank of the compressed trie is sampled once, so the output
ends with the whole corpus in rank order.

Usage:
    # Read words from stdin
    cat words.txt | python scripts/inspect_trie.py

    # Read words from a file, skipping the rank listing
    python scripts/inspect_trie.py words.txt --no-samples
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from typetext.corpus import TrieError, WeightedTrie, WordStream
from typetext.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def inspect(stream: WordStream, show_samples: bool = True) -> None:
    """Build, compress and print the trie for one word stream."""
    trie = WeightedTrie.from_words(stream)
    print(f"Uncompressed:\n{trie}")

    compressed = trie.compress()
    print(f"Compressed:\n{compressed}")

    if show_samples:
        for rank in range(compressed.num_words()):
            print(compressed.sample(rank))


def main():
    parser = argparse.ArgumentParser(
        description="Inspect the weighted trie built from a word list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Word list file (default: stdin)",
    )
    parser.add_argument(
        "--no-samples",
        action="store_true",
        help="Do not print the word for every rank",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    if args.input:
        stream = WordStream.from_path(args.input)
    else:
        stream = WordStream(sys.stdin, name="<stdin>")

    try:
        inspect(stream, show_samples=not args.no_samples)
    except TrieError as e:
        logger.error(f"Trie inspection failed: {e}")
        sys.exit(1)
    finally:
        if args.input:
            stream.close()


if __name__ == "__main__":
    main()
