"""Main search engine implementation."""

import threading
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import structlog

from ..models.record import SubjectRecord
from ..models.response import SearchHit
from .distance import edit_distance
from .errors import NotLoadedError
from .index import IndexBuilder, IndexSnapshot
from .normalizer import TextNormalizer
from .store import RecordLike, RecordStore

logger = structlog.get_logger(__name__)

DEFAULT_LIMIT = 10


class SearchEngine:
    """Subject lookup by id and by name (trie prefix match, then fuzzy fallback)."""

    def __init__(self, max_edit_distance: int = 1) -> None:
        """
        Initialize the search engine.

        Args:
            max_edit_distance: Largest edit distance admitted by the fuzzy fallback
        """
        if max_edit_distance < 0:
            raise ValueError("max_edit_distance must be non-negative")
        self.max_edit_distance = max_edit_distance
        self.normalizer = TextNormalizer()
        self.builder = IndexBuilder(self.normalizer)

        # Replaced wholesale on every load; readers take one reference per call.
        self._snapshot: Optional[IndexSnapshot] = None
        self._load_lock = threading.Lock()

        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_loads": 0,
            "total_queries": 0,
            "prefix_only_queries": 0,
            "fuzzy_fallback_queries": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
            "total_id_lookups": 0
        }

    @property
    def is_loaded(self) -> bool:
        """Whether a dataset has been loaded successfully."""
        return self._snapshot is not None

    @property
    def snapshot(self) -> IndexSnapshot:
        """The current generation of records and indexes."""
        return self._require_snapshot()

    def _require_snapshot(self) -> IndexSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise NotLoadedError()
        return snapshot

    def load(self, records: Iterable[RecordLike]) -> List[SubjectRecord]:
        """
        Replace the loaded records and rebuild every index.

        The new records are validated and indexed before anything is swapped
        in, so a failed load leaves the previous dataset fully intact.

        Args:
            records: Mappings or SubjectRecord instances, in load order

        Returns:
            The stored records

        Raises:
            EmptyDatasetError: If ``records`` is empty
            MalformedRecordError: If a record lacks a usable ``id`` or ``name``
        """
        start_time = time.time()
        with self._load_lock:
            store = RecordStore.from_rows(records)
            snapshot = self.builder.build(store)
            self._snapshot = snapshot
            self._stats["total_loads"] += 1

        logger.info(
            "Subject records loaded",
            total_records=len(store),
            indexed_records=len(snapshot.trie),
            total_tokens=len(snapshot.token_index),
            load_time_ms=round((time.time() - start_time) * 1000, 3),
        )
        return store.records

    def load_csv(
        self,
        filepath: Union[str, Path],
        encoding: Optional[str] = None,
        delimiter: Optional[str] = None
    ) -> List[SubjectRecord]:
        """
        Load records from a delimited text file.

        Args:
            filepath: Path to the file; the first line holds column names
            encoding: File encoding (defaults to the loader's UTF-16LE)
            delimiter: Field delimiter (defaults to ``,``)

        Returns:
            The stored records
        """
        from ..loader import read_subject_rows

        rows = read_subject_rows(filepath, encoding=encoding, delimiter=delimiter)
        logger.info("Subject file parsed", filepath=str(filepath), total_rows=len(rows))
        return self.load(rows)

    def get_images_by_subject_ids(self, subject_ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """
        Get ``{id, image_id}`` pairs for the given subject ids.

        Args:
            subject_ids: Id-like values; unknown ids are omitted

        Returns:
            Matches in load order

        Raises:
            NotLoadedError: If nothing has been loaded
        """
        snapshot = self._require_snapshot()
        self._stats["total_id_lookups"] += 1
        return snapshot.store.get_images_by_ids(subject_ids)

    def search_by_name(
        self,
        query: str,
        limit: Optional[int] = DEFAULT_LIMIT
    ) -> List[SubjectRecord]:
        """
        Search subjects by name.

        Prefix matches come first. The fuzzy fallback only runs when they do
        not fill ``limit``.

        Args:
            query: Name or name prefix, matched case-insensitively
            limit: Maximum number of results; None or <= 0 means no limit

        Returns:
            Matching records in the order they were admitted

        Raises:
            NotLoadedError: If nothing has been loaded
        """
        return [hit.record for hit in self.search_by_name_detailed(query, limit)]

    def search_by_name_detailed(
        self,
        query: str,
        limit: Optional[int] = DEFAULT_LIMIT
    ) -> List[SearchHit]:
        """
        Search subjects by name, reporting how each result was admitted.

        Args:
            query: Name or name prefix, matched case-insensitively
            limit: Maximum number of results; None or <= 0 means no limit

        Returns:
            List of SearchHit objects in admission order
        """
        snapshot = self._require_snapshot()
        start_time = time.time()

        cap = limit if limit is not None and limit > 0 else None
        normalized_query = self.normalizer.normalize(query or "")
        hits: Dict[int, SearchHit] = {}

        def is_full() -> bool:
            return cap is not None and len(hits) >= cap

        # Phase 1: prefix matches from the trie
        for record_id in snapshot.trie.search_prefix(normalized_query):
            if is_full():
                break
            if record_id not in hits:
                hits[record_id] = SearchHit(
                    record=snapshot.store.get(record_id),
                    match_type="prefix"
                )

        used_fuzzy = not is_full()

        # Phase 2: edit-distance fallback over every distinct token
        if used_fuzzy:
            hits.update(self._fuzzy_hits(snapshot, normalized_query, hits, cap))

        execution_time = (time.time() - start_time) * 1000
        self._record_query(used_fuzzy, bool(hits), execution_time)
        logger.debug(
            "Name search completed",
            query=normalized_query,
            limit=cap,
            total_results=len(hits),
            fuzzy_fallback=used_fuzzy,
            execution_time_ms=round(execution_time, 3),
        )
        return list(hits.values())

    def _fuzzy_hits(
        self,
        snapshot: IndexSnapshot,
        normalized_query: str,
        admitted: Dict[int, SearchHit],
        cap: Optional[int]
    ) -> Dict[int, SearchHit]:
        new_hits: Dict[int, SearchHit] = {}
        for token, record_ids in snapshot.token_index.items():
            if cap is not None and len(admitted) + len(new_hits) >= cap:
                break

            distance = edit_distance(
                self.normalizer.normalize(token), normalized_query, self.max_edit_distance
            )
            if distance > self.max_edit_distance:
                continue

            for record_id in record_ids:
                if cap is not None and len(admitted) + len(new_hits) >= cap:
                    break
                if record_id in admitted or record_id in new_hits:
                    continue
                new_hits[record_id] = SearchHit(
                    record=snapshot.store.get(record_id),
                    match_type="fuzzy",
                    matched_token=token,
                    edit_distance=distance
                )
        return new_hits

    def _record_query(self, used_fuzzy: bool, found: bool, execution_time: float) -> None:
        self._stats["total_queries"] += 1
        self._stats["total_execution_time"] += execution_time
        if used_fuzzy:
            self._stats["fuzzy_fallback_queries"] += 1
        else:
            self._stats["prefix_only_queries"] += 1
        if not found:
            self._stats["no_matches"] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["fuzzy_fallback_rate"] = (
                stats["fuzzy_fallback_queries"] / stats["total_queries"]
            )
            stats["no_match_rate"] = stats["no_matches"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["fuzzy_fallback_rate"] = 0.0
            stats["no_match_rate"] = 0.0

        snapshot = self._snapshot
        stats["loaded"] = snapshot is not None
        stats["index_stats"] = snapshot.get_stats() if snapshot is not None else None
        return stats

    def clear(self) -> None:
        """Drop the loaded dataset and reset statistics."""
        with self._load_lock:
            self._snapshot = None
            self._stats = self._empty_stats()
