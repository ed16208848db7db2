"""Record store: the single owner of loaded subject records."""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from ..models.record import SubjectRecord, coerce_subject_id
from .errors import DuplicateRecordError, EmptyDatasetError, MalformedRecordError

RecordLike = Union[SubjectRecord, Mapping[str, Any]]


class RecordStore:
    """Holds loaded records in load order, keyed by id."""

    def __init__(self, records: Iterable[SubjectRecord] = ()) -> None:
        """
        Initialize the store.

        Args:
            records: Already validated records, in load order
        """
        self._records: Tuple[SubjectRecord, ...] = tuple(records)
        self._by_id: Dict[int, SubjectRecord] = {}
        for position, record in enumerate(self._records):
            if record.id in self._by_id:
                raise DuplicateRecordError(record.id, position)
            self._by_id[record.id] = record

    @classmethod
    def from_rows(cls, rows: Iterable[RecordLike]) -> "RecordStore":
        """
        Validate raw rows and build a store from them.

        Args:
            rows: Mappings (e.g. parsed CSV rows) or SubjectRecord instances

        Returns:
            A new RecordStore

        Raises:
            EmptyDatasetError: If no rows are supplied
            MalformedRecordError: If a row lacks a usable ``id`` or ``name``
        """
        records = [cls._coerce(row, position) for position, row in enumerate(rows)]
        if not records:
            raise EmptyDatasetError()
        return cls(records)

    @staticmethod
    def _coerce(row: RecordLike, position: int) -> SubjectRecord:
        if isinstance(row, SubjectRecord):
            return row
        if not isinstance(row, Mapping):
            raise MalformedRecordError(
                f"expected a mapping, got {type(row).__name__}", position
            )
        try:
            return SubjectRecord.model_validate(dict(row))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedRecordError(problems, position) from e

    @property
    def records(self) -> List[SubjectRecord]:
        """All records in load order."""
        return list(self._records)

    def get(self, record_id: int) -> Optional[SubjectRecord]:
        """Get a record by id, or None if unknown."""
        return self._by_id.get(record_id)

    def get_images_by_ids(self, ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """
        Look up ``{id, image_id}`` pairs for a set of ids.

        Ids are coerced like record ids, so ``1``, ``"1"`` and ``1.0`` are the
        same id. Values that are not integral numbers match nothing.
        Results follow load order, not the order of ``ids``. Unknown ids are
        omitted.

        Args:
            ids: Id-like values

        Returns:
            List of ``{"id": int, "image_id": str}`` dicts
        """
        wanted = set()
        for record_id in ids:
            try:
                key = coerce_subject_id(record_id)
            except ValueError:
                continue
            if isinstance(key, int) and not isinstance(key, bool):
                wanted.add(key)
        if not wanted:
            return []
        return [
            record.image_ref()
            for record in self._records
            if record.id in wanted
        ]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._by_id

    def __iter__(self) -> Iterator[SubjectRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
