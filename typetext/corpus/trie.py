"""Frequency-weighted prefix tree used to sample practice words.

Nodes live in a flat arena (a list) and refer to their children by index,
with index 0 reserved for the root. Each node's ``count`` is the number of
inserted words whose insertion path passed through it, so a word inserted
k times is k times as likely to be drawn by :meth:`WeightedTrie.sample`.

A trie is built with repeated :meth:`WeightedTrie.insert` calls and then
compressed once with :meth:`WeightedTrie.compress`, which collapses chains
of pass-through nodes into multi-character edges while keeping every
count intact.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..utils.logging import get_logger

logger = get_logger(__name__)

ROOT = 0


class TrieError(Exception):
    """Base class for trie failures."""
    pass


class MissingNodeError(TrieError):
    """Raised when an arena index does not resolve to a node."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Could not get node at index {index}")


class EmptyTrieError(TrieError):
    """Raised when sampling from a trie that holds no words."""

    def __init__(self):
        super().__init__("Cannot sample from an empty trie")


@dataclass
class TrieNode:
    """A single arena slot: child edges keyed by prefix fragment, plus a weight."""
    children: Dict[str, int] = field(default_factory=dict)
    count: int = 0

    def copy(self) -> "TrieNode":
        return TrieNode(children=dict(self.children), count=self.count)

    @property
    def num_children(self) -> int:
        return len(self.children)


class WeightedTrie:
    """Arena-based weighted trie over corpus words."""

    def __init__(self, nodes: Optional[List[TrieNode]] = None):
        self._nodes: List[TrieNode] = nodes if nodes is not None else [TrieNode()]

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WeightedTrie":
        """Build an uncompressed trie by inserting every word in order."""
        trie = cls()
        for word in words:
            trie.insert(word)
        return trie

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> TrieNode:
        """Return the node stored at ``index``.

        Raises:
            MissingNodeError: If the index is outside the arena.
        """
        if not 0 <= index < len(self._nodes):
            raise MissingNodeError(index)
        return self._nodes[index]

    def _add_node(self, parent_index: int, prefix: str) -> int:
        parent = self.node(parent_index)

        existing = parent.children.get(prefix)
        if existing is not None:
            return existing

        index = len(self._nodes)
        parent.children[prefix] = index
        self._nodes.append(TrieNode())
        return index

    def insert(self, word: str) -> "WeightedTrie":
        """Insert one occurrence of ``word``.

        Every node on the path before the last character gains one count;
        the node reached by the last character gains one more, recording
        that a word ends there.

        Raises:
            ValueError: If ``word`` is empty.
        """
        if not word:
            raise ValueError("Cannot insert an empty word")

        node_index = ROOT
        for char in word:
            node = self.node(node_index)
            node.count += 1

            child_index = node.children.get(char)
            if child_index is None:
                child_index = self._add_node(node_index, char)
            node_index = child_index

        self.node(node_index).count += 1
        return self

    def num_words(self) -> int:
        """Total weighted word population (the root's count)."""
        return self.node(ROOT).count

    def terminal_count(self, index: int) -> int:
        """Number of inserted words ending exactly at the node at ``index``."""
        node = self.node(index)
        return node.count - sum(self.node(c).count for c in node.children.values())

    def _edge_info(self) -> Tuple[List[str], List[int]]:
        """Incoming edge label and parent index for every node."""
        prefixes = [""] * len(self._nodes)
        parents = [ROOT] * len(self._nodes)

        for index, node in enumerate(self._nodes):
            for cprefix, cindex in node.children.items():
                parents[cindex] = index
                prefixes[cindex] = cprefix

        return prefixes, parents

    def compress(self) -> "WeightedTrie":
        """Return a new trie with pass-through chains merged into single edges.

        A non-root node with exactly one child and the same count as that
        child has no word ending at it, so it is replaced by the child and
        its incoming edge label is extended with the child's label. Nodes
        with a terminal share are kept even when they have a single child.
        The walk uses an explicit stack so deep corpora cannot exhaust the
        interpreter's recursion limit.
        """
        prefixes, parents = self._edge_info()
        new_nodes = [self.node(ROOT).copy()]
        stack = [ROOT]

        while stack:
            index = stack.pop()
            current = new_nodes[index]

            if index != ROOT and current.num_children == 1:
                ((cprefix, cindex),) = current.children.items()
                child = self.node(cindex)

                if current.count == child.count:
                    prefix = prefixes[index]
                    merged = prefix + cprefix
                    parent = new_nodes[parents[index]]
                    # sibling order, and so rank order, must not change
                    parent.children = {
                        (merged if key == prefix else key): value
                        for key, value in parent.children.items()
                    }
                    prefixes[index] = merged

                    new_nodes[index] = child.copy()
                    stack.append(index)
                    continue

            # keep this node and give each child a fresh slot in the new arena
            for cprefix, cindex in list(current.children.items()):
                new_index = len(new_nodes)
                current.children[cprefix] = new_index
                new_nodes.append(self.node(cindex).copy())

                stack.append(new_index)
                parents[new_index] = index
                prefixes[new_index] = cprefix

        logger.debug(
            f"Compressed trie from {len(self._nodes)} to {len(new_nodes)} nodes",
            extra_data={"num_words": self.num_words()}
        )
        return WeightedTrie(new_nodes)

    def sample(self, id: int) -> str:
        """Map an integer rank to a word.

        ``id`` is reduced modulo :meth:`num_words`, so any integer is a
        valid rank. Ranks are partitioned between children in proportion
        to their counts; the rank is only reduced when skipping siblings,
        never when descending.

        Raises:
            EmptyTrieError: If the trie holds no words.
        """
        node = self.node(ROOT)
        if node.count == 0:
            raise EmptyTrieError()

        id %= node.count
        word = ""

        while True:
            for prefix, index in node.children.items():
                child = self.node(index)
                if id < child.count:
                    word += prefix
                    node = child
                    break
                id -= child.count
            else:
                # rank falls in this node's terminal share
                return word

    def iter_preorder(self) -> Iterator[Tuple[str, int, int]]:
        """Yield ``(accumulated_prefix, index, depth)`` for every reachable node."""
        stack = [("", ROOT, 0)]

        while stack:
            prefix, index, depth = stack.pop()
            node = self.node(index)

            for cprefix, cindex in reversed(list(node.children.items())):
                stack.append((prefix + cprefix, cindex, depth + 1))

            yield prefix, index, depth

    def render(self) -> str:
        """Human-readable listing of every node, for inspection only."""
        lines = []
        for prefix, index, depth in self.iter_preorder():
            label = "root" if index == ROOT else prefix
            count = self.node(index).count
            lines.append(f"{'    ' * depth}{label} (count={count}, index={index})")
        lines.append(f"Num. nodes = {len(self._nodes)}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"WeightedTrie(num_words={self.num_words()}, nodes={len(self._nodes)})"
