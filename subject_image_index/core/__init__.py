"""Core lookup and name search functionality."""

from .distance import edit_distance, within_distance
from .engine import SearchEngine
from .errors import (
    SubjectIndexError,
    EmptyDatasetError,
    NotLoadedError,
    MalformedRecordError,
    DuplicateRecordError,
)
from .index import IndexBuilder, IndexSnapshot, TokenIndex
from .normalizer import TextNormalizer
from .store import RecordStore
from .trie import PrefixTrie

__all__ = [
    "SearchEngine",
    "RecordStore",
    "IndexBuilder",
    "IndexSnapshot",
    "TokenIndex",
    "PrefixTrie",
    "TextNormalizer",
    "edit_distance",
    "within_distance",
    "SubjectIndexError",
    "EmptyDatasetError",
    "NotLoadedError",
    "MalformedRecordError",
    "DuplicateRecordError",
]
