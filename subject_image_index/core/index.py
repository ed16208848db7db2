"""Token index and index building for subject name search."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import structlog

from .normalizer import TextNormalizer
from .store import RecordStore
from .trie import PrefixTrie

logger = structlog.get_logger(__name__)


class TokenIndex:
    """Maps lowercase name tokens to the ids of records containing them."""

    def __init__(self) -> None:
        """Initialize the token index."""
        # token -> insertion-ordered set of record ids
        self._index: Dict[str, Dict[int, None]] = {}
        self._stats = {
            "total_tokens": 0,
            "total_postings": 0,
            "last_updated": None
        }

    def add(self, token: str, record_id: int) -> None:
        """
        Add a record id under a token.

        Args:
            token: Lowercase token
            record_id: Id of the record containing the token
        """
        if not token:
            return

        postings = self._index.setdefault(token, {})
        if record_id not in postings:
            postings[record_id] = None
            self._stats["total_postings"] += 1

        self._stats["total_tokens"] = len(self._index)
        self._stats["last_updated"] = time.time()

    def get(self, token: str) -> List[int]:
        """Get ids of records containing ``token``, in insertion order."""
        return list(self._index.get(token, ()))

    def tokens(self) -> List[str]:
        """Get all distinct tokens in insertion order."""
        return list(self._index.keys())

    def items(self) -> Iterator[Tuple[str, List[int]]]:
        """Iterate over (token, record ids) pairs in insertion order."""
        for token, postings in self._index.items():
            yield token, list(postings)

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        return self._stats.copy()

    def __contains__(self, token: object) -> bool:
        return token in self._index

    def __len__(self) -> int:
        return len(self._index)


@dataclass(frozen=True)
class IndexSnapshot:
    """One generation of loaded records and the indexes derived from them."""

    store: RecordStore
    token_index: TokenIndex
    trie: PrefixTrie
    built_at: float = field(default_factory=time.time)
    build_time_ms: float = 0.0

    def get_stats(self) -> Dict[str, Any]:
        """Get combined statistics for this generation."""
        return {
            "total_records": len(self.store),
            "indexed_records": len(self.trie),
            "trie_nodes": self.trie.node_count,
            "token_index": self.token_index.get_stats(),
            "built_at": self.built_at,
            "build_time_ms": self.build_time_ms,
        }


class IndexBuilder:
    """Derives the prefix trie and token index from a record store."""

    def __init__(self, normalizer: Optional[TextNormalizer] = None) -> None:
        """
        Initialize the builder.

        Args:
            normalizer: Tokenizer for names (a default one is created if None)
        """
        self.normalizer = normalizer or TextNormalizer()

    def build(self, store: RecordStore) -> IndexSnapshot:
        """
        Build fresh indexes for every record in ``store``.

        Records whose name has no tokens stay in the store but are not
        indexed. Nothing is shared with earlier snapshots.

        Args:
            store: Records to index, processed in load order

        Returns:
            A new IndexSnapshot
        """
        start_time = time.time()
        token_index = TokenIndex()
        trie = PrefixTrie()

        for record in store:
            for token in self.normalizer.tokenize(record.name):
                token_index.add(token, record.id)
                trie.insert(token, record.id)

        build_time_ms = (time.time() - start_time) * 1000
        logger.debug(
            "Indexes built",
            total_records=len(store),
            total_tokens=len(token_index),
            trie_nodes=trie.node_count,
            build_time_ms=round(build_time_ms, 3),
        )

        return IndexSnapshot(
            store=store,
            token_index=token_index,
            trie=trie,
            build_time_ms=build_time_ms,
        )
