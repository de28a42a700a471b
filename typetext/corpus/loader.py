"""Corpus ingestion: turn line-oriented text sources into word streams."""

import io
from pathlib import Path
from typing import Iterable, Iterator, TextIO, Union

from ..utils.logging import get_logger

logger = get_logger(__name__)


def iter_words(
    lines: Iterable[str],
    quote_mode: bool = False,
    lowercase: bool = True
) -> Iterator[str]:
    """Tokenize lines into corpus words.

    Args:
        lines: Lines of text (trailing newlines are allowed).
        quote_mode: If True, every non-blank line is a single unit and
            keeps its case and inner whitespace.
        lowercase: Lower-case each line before splitting (ignored in
            quote mode).

    Yields:
        Non-empty word strings in source order.
    """
    for line in lines:
        if quote_mode:
            line = line.rstrip("\r\n")
            if line.strip():
                yield line
            continue

        if lowercase:
            line = line.lower()
        yield from line.split()


class WordStream:
    """A readable text source plus the tokenization mode applied to it.

    Reading happens lazily while iterating, so I/O errors surface to
    whoever consumes the stream.
    """

    def __init__(self, source: TextIO, quote_mode: bool = False, name: str = "<stream>"):
        """Initialize word stream.

        Args:
            source: Any text file object yielding lines.
            quote_mode: Treat each line as one unit instead of splitting it.
            name: Description of the source, used in log messages.
        """
        self.source = source
        self.quote_mode = quote_mode
        self.name = name

    @classmethod
    def from_path(cls, path: Union[str, Path], quote_mode: bool = False) -> "WordStream":
        """Open a word list file.

        Raises:
            OSError: If the file cannot be opened.
        """
        path = Path(path)
        logger.debug(f"Opening word list {path}")
        return cls(open(path, encoding="utf-8"), quote_mode=quote_mode, name=str(path))

    @classmethod
    def from_string(cls, text: str, quote_mode: bool = False) -> "WordStream":
        """Wrap the full contents of a word list."""
        return cls(io.StringIO(text), quote_mode=quote_mode, name="<string>")

    def close(self) -> None:
        self.source.close()

    def __enter__(self) -> "WordStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        return iter_words(self.source, quote_mode=self.quote_mode)
