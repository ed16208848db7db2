"""
Subject Image Index - in-memory lookup of subject images by id and by name.

Name search combines trie-based prefix completion with a typo-tolerant
edit-distance fallback.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .core.errors import EmptyDatasetError, NotLoadedError, MalformedRecordError
from .models.record import SubjectRecord

__all__ = [
    "SearchEngine",
    "SubjectRecord",
    "EmptyDatasetError",
    "NotLoadedError",
    "MalformedRecordError",
]
