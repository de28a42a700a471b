"""Unit tests for the weighted trie."""

from collections import Counter

import pytest

from typetext.corpus.trie import (
    WeightedTrie,
    TrieNode,
    TrieError,
    MissingNodeError,
    EmptyTrieError,
)


CORPUS = (
    "the quick brown fox jumps over the lazy dog then the dog sleeps "
    "there they theory thermal a an and ant anteater antelope"
).split()


def exhaustive_samples(trie: WeightedTrie) -> Counter:
    return Counter(trie.sample(rank) for rank in range(trie.num_words()))


def weighted_paths(trie: WeightedTrie) -> Counter:
    """Multiset of (accumulated prefix, count) for every node where a word ends."""
    return Counter(
        (prefix, trie.node(index).count)
        for prefix, index, _ in trie.iter_preorder()
        if index != 0 and trie.terminal_count(index) > 0
    )


def assert_weights_conserved(trie: WeightedTrie) -> None:
    for _, index, _ in trie.iter_preorder():
        node = trie.node(index)
        children_total = sum(trie.node(c).count for c in node.children.values())
        assert node.count == children_total + trie.terminal_count(index)
        assert trie.terminal_count(index) >= 0


class TestInsert:
    """Test building the trie."""

    def test_empty_trie(self):
        """Test a fresh trie has only the root and no words."""
        trie = WeightedTrie()
        assert trie.num_words() == 0
        assert len(trie) == 1

    def test_counts_along_path(self):
        """Test each insertion increments every node on its path."""
        trie = WeightedTrie.from_words(["cat", "car", "cat"])

        assert trie.num_words() == 3
        c = trie.node(trie.node(0).children["c"])
        a = trie.node(c.children["a"])
        assert c.count == 3
        assert a.count == 3
        assert trie.node(a.children["t"]).count == 2
        assert trie.node(a.children["r"]).count == 1

    def test_prefix_word_gets_terminal_share(self):
        """Test a word that is a prefix of another keeps its own weight."""
        trie = WeightedTrie.from_words(["an", "ant"])

        n = trie.node(trie.node(trie.node(0).children["a"]).children["n"])
        assert n.count == 2
        assert trie.node(n.children["t"]).count == 1

    def test_duplicates_do_not_add_nodes(self):
        """Test re-inserting a word only changes counts."""
        trie = WeightedTrie.from_words(["dog"])
        size = len(trie)
        trie.insert("dog")

        assert len(trie) == size
        assert trie.num_words() == 2

    def test_insert_returns_self(self):
        """Test insert can be chained."""
        trie = WeightedTrie()
        assert trie.insert("a").insert("b") is trie
        assert trie.num_words() == 2

    def test_insert_empty_word(self):
        """Test empty words are rejected."""
        with pytest.raises(ValueError):
            WeightedTrie().insert("")

    def test_weights_conserved(self):
        """Test every node's count equals children plus terminal words."""
        assert_weights_conserved(WeightedTrie.from_words(CORPUS))


class TestCompress:
    """Test the radix collapse."""

    def test_end_to_end_scenario(self):
        """Test the c-a chain merges and the leaves stay distinct."""
        compressed = WeightedTrie.from_words(["cat", "car", "cat"]).compress()

        root = compressed.node(0)
        assert list(root.children) == ["ca"]
        ca = compressed.node(root.children["ca"])
        assert ca.count == 3
        assert compressed.node(ca.children["t"]).count == 2
        assert compressed.node(ca.children["r"]).count == 1
        assert len(compressed) == 4

        assert compressed.sample(0) == "cat"
        assert compressed.sample(1) == "cat"
        assert compressed.sample(2) == "car"

    def test_weights_conserved(self):
        """Test compression keeps the weight invariant."""
        compressed = WeightedTrie.from_words(CORPUS).compress()
        assert_weights_conserved(compressed)
        assert compressed.num_words() == len(CORPUS)

    def test_preserves_sampling_distribution(self):
        """Test exhaustive sampling yields the same multiset of words."""
        trie = WeightedTrie.from_words(CORPUS)
        compressed = trie.compress()

        assert exhaustive_samples(compressed) == exhaustive_samples(trie)
        assert exhaustive_samples(compressed) == Counter(CORPUS)

    def test_preserves_rank_order(self):
        """Test each rank maps to the same word before and after compression."""
        trie = WeightedTrie.from_words(CORPUS)
        compressed = trie.compress()

        for rank in range(trie.num_words()):
            assert compressed.sample(rank) == trie.sample(rank)

    def test_reduces_nodes(self):
        """Test pass-through chains are removed."""
        trie = WeightedTrie.from_words(["anteater"])
        compressed = trie.compress()

        assert len(trie) == 9
        assert len(compressed) == 2
        assert list(compressed.node(0).children) == ["anteater"]

    def test_keeps_node_with_terminal_share(self):
        """Test a single-child node where a word ends is not collapsed."""
        compressed = WeightedTrie.from_words(["an", "ant"]).compress()

        root = compressed.node(0)
        assert list(root.children) == ["an"]
        an = compressed.node(root.children["an"])
        assert an.count == 2
        assert list(an.children) == ["t"]

    def test_idempotent(self):
        """Test compressing twice gives an equivalent tree."""
        once = WeightedTrie.from_words(CORPUS).compress()
        twice = once.compress()

        assert len(twice) == len(once)
        assert weighted_paths(twice) == weighted_paths(once)

    def test_original_unchanged(self):
        """Test compression builds a new trie."""
        trie = WeightedTrie.from_words(CORPUS)
        size = len(trie)
        trie.compress()

        assert len(trie) == size
        assert_weights_conserved(trie)

    def test_compress_empty(self):
        """Test compressing an empty trie."""
        compressed = WeightedTrie().compress()
        assert compressed.num_words() == 0
        assert len(compressed) == 1

    def test_deep_chain_does_not_recurse(self):
        """Test very long words compress without hitting the recursion limit."""
        word = "ab" * 5000
        compressed = WeightedTrie.from_words([word, word[:-1]]).compress()

        assert exhaustive_samples(compressed) == Counter([word, word[:-1]])
        assert len(compressed) == 3


class TestSample:
    """Test weighted sampling by rank."""

    def test_frequency_weighting(self):
        """Test ranks are partitioned by insertion count."""
        trie = WeightedTrie.from_words(["a"] + ["b"] * 9).compress()

        assert trie.sample(0) == "a"
        for rank in range(1, 10):
            assert trie.sample(rank) == "b"
        assert trie.sample(10) == trie.sample(0)

    def test_modulo_wraparound(self):
        """Test rank id and id + n always agree."""
        trie = WeightedTrie.from_words(CORPUS).compress()
        n = trie.num_words()

        for rank in range(n):
            assert trie.sample(rank) == trie.sample(rank + n)
            assert trie.sample(rank) == trie.sample(rank + 7 * n)

    def test_sample_empty(self):
        """Test sampling an empty trie fails distinctly."""
        with pytest.raises(EmptyTrieError, match="empty trie"):
            WeightedTrie().sample(0)

    def test_empty_trie_error_is_trie_error(self):
        """Test error hierarchy."""
        assert issubclass(EmptyTrieError, TrieError)
        assert issubclass(MissingNodeError, TrieError)
        assert not issubclass(EmptyTrieError, MissingNodeError)

    def test_uncompressed_sampling(self):
        """Test sampling works on an uncompressed trie too."""
        trie = WeightedTrie.from_words(["cat", "car", "cat"])
        assert [trie.sample(i) for i in range(3)] == ["cat", "cat", "car"]

    def test_missing_node(self):
        """Test a dangling child index surfaces as a typed error."""
        trie = WeightedTrie([TrieNode(children={"x": 5}, count=1)])

        with pytest.raises(MissingNodeError) as exc_info:
            trie.sample(0)
        assert exc_info.value.index == 5
        assert "index 5" in str(exc_info.value)


class TestRender:
    """Test the diagnostic listing."""

    def test_render_compressed(self):
        """Test nodes are listed in pre-order with prefix, count and index."""
        compressed = WeightedTrie.from_words(["cat", "car", "cat"]).compress()

        assert str(compressed) == (
            "root (count=3, index=0)\n"
            "    ca (count=3, index=1)\n"
            "        cat (count=2, index=2)\n"
            "        car (count=1, index=3)\n"
            "Num. nodes = 4\n"
        )

    def test_render_empty(self):
        """Test the listing of an empty trie."""
        assert WeightedTrie().render() == "root (count=0, index=0)\nNum. nodes = 1\n"

    def test_preorder_depths(self):
        """Test depth increases by one per level."""
        trie = WeightedTrie.from_words(["ab"])
        assert [(p, d) for p, _, d in trie.iter_preorder()] == [("", 0), ("a", 1), ("ab", 2)]
