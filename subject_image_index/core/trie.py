"""Character trie mapping token prefixes to subject ids."""

from typing import Dict, Iterator, List, Optional


class TrieNode:
    """
    A single node in the prefix trie.

    children: char -> TrieNode
    record_ids: ids of every record with a token passing through this node,
        kept as an insertion-ordered set (dict keys)
    """

    __slots__ = ("children", "record_ids")

    def __init__(self) -> None:
        self.children: Dict[str, "TrieNode"] = {}
        self.record_ids: Dict[int, None] = {}

    def child(self, char: str) -> Optional["TrieNode"]:
        """Return the direct child for ``char``, or None if absent."""
        return self.children.get(char)


class PrefixTrie:
    """
    Prefix trie where every node holds the ids reachable through it.

    A node at depth k holds every record having any token with that k-length
    prefix, so a prefix lookup is a single walk with no subtree collection.
    """

    def __init__(self) -> None:
        """Initialize an empty trie."""
        self._root = TrieNode()
        self._node_count = 1

    def insert(self, token: str, record_id: int) -> None:
        """
        Insert a (token, record id) pair.

        The id is recorded on the root and on every node along the token's
        path. Inserting the same pair twice is a no-op.

        Args:
            token: Lowercase token
            record_id: Id of the record owning the token
        """
        if not token:
            return

        node = self._root
        node.record_ids[record_id] = None
        for char in token:
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
                self._node_count += 1
            node = child
            node.record_ids[record_id] = None

    def search_prefix(self, prefix: str) -> List[int]:
        """
        Return ids of every record with a token starting with ``prefix``.

        Args:
            prefix: Lowercase prefix; empty returns every indexed record

        Returns:
            Deduplicated ids in insertion order, or an empty list when no
            token has this prefix
        """
        node = self._find(prefix)
        if node is None:
            return []
        return list(node.record_ids)

    def has_prefix(self, prefix: str) -> bool:
        """Return True if any indexed token starts with ``prefix``."""
        node = self._find(prefix)
        return node is not None and bool(node.record_ids)

    def _find(self, prefix: str) -> Optional[TrieNode]:
        node = self._root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, str) and self.has_prefix(prefix)

    def __len__(self) -> int:
        """Number of distinct record ids indexed."""
        return len(self._root.record_ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._root.record_ids)

    @property
    def node_count(self) -> int:
        """Total number of nodes, root included."""
        return self._node_count
