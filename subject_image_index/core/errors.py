"""Error kinds raised by the subject index."""

from typing import Optional


class SubjectIndexError(Exception):
    """Base class for every error raised by the subject index."""


class EmptyDatasetError(SubjectIndexError):
    """Raised when a load supplies no data records."""

    def __init__(self, message: str = "Invalid dataset: no data rows available.") -> None:
        super().__init__(message)


class NotLoadedError(SubjectIndexError):
    """Raised when a lookup or search runs before any successful load."""

    def __init__(self, message: str = "No data loaded. Please load a dataset first.") -> None:
        super().__init__(message)


class MalformedRecordError(SubjectIndexError):
    """Raised when a record is missing a usable ``id`` or ``name``."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.position = position
        if position is not None:
            message = f"Record {position}: {message}"
        super().__init__(message)


class DuplicateRecordError(MalformedRecordError):
    """Raised when two records in one load share the same ``id``."""

    def __init__(self, record_id: int, position: Optional[int] = None) -> None:
        self.record_id = record_id
        super().__init__(f"duplicate subject id {record_id}", position)
