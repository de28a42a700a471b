"""Punctuation rules applied to practice words."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class PunctuationKind(Enum):
    """How a punctuation rule attaches to a word."""
    CAPITALIZING = "capitalizing"  # ends a sentence, next word is capitalized
    ENDING = "ending"
    STARTING = "starting"
    SURROUNDING = "surrounding"


@dataclass(frozen=True)
class PunctuationRule:
    """A single punctuation rule.

    ``closing`` is only used by surrounding rules.
    """
    kind: PunctuationKind
    mark: str
    closing: str = ""

    @property
    def capitalizes_next(self) -> bool:
        return self.kind is PunctuationKind.CAPITALIZING

    def apply(self, chars: List[str]) -> None:
        """Attach the rule's mark(s) to a word given as a list of characters."""
        if self.kind is PunctuationKind.STARTING:
            chars.insert(0, self.mark)
        elif self.kind is PunctuationKind.SURROUNDING:
            chars.insert(0, self.mark)
            chars.append(self.closing)
        else:
            chars.append(self.mark)


def _rules(kind: PunctuationKind, marks: str) -> List[PunctuationRule]:
    return [PunctuationRule(kind, mark) for mark in marks]


def _pairs(pairs: List[Tuple[str, str]]) -> List[PunctuationRule]:
    return [PunctuationRule(PunctuationKind.SURROUNDING, o, c) for o, c in pairs]


PUNCTUATION: Tuple[PunctuationRule, ...] = tuple(
    _rules(PunctuationKind.CAPITALIZING, "!?.")
    + _rules(PunctuationKind.ENDING, ",:;")
    + _rules(PunctuationKind.STARTING, ":@#$%^&*~/\\_-=+")
    + _pairs([
        ("'", "'"),
        ('"', '"'),
        ("(", ")"),
        ("{", "}"),
        ("<", ">"),
        ("[", "]"),
        ("%", "%"),
        ("^", "$"),
        ("*", "*"),
        ("`", "`"),
        ("/", "/"),
        ("|", "|"),
    ])
)
