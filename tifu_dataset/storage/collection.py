"""Ordered in-memory collections of TIFU records."""

import logging
from dataclasses import asdict, fields
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar, Union

import pandas as pd

from tifu_dataset.errors import BoundsError, DatasetIOError, ParseError, SchemaError
from tifu_dataset.models.decoder import decode_record_from_string
from tifu_dataset.models.records import LongRecord, RawRecord, ShortRecord

logger = logging.getLogger(__name__)

E = TypeVar("E", RawRecord, ShortRecord, LongRecord)


class RecordKind(str, Enum):
    """Which view of a dataset line a collection holds."""

    RAW = "raw"
    SHORT = "short"
    LONG = "long"


_BUILDERS: Dict[RecordKind, Callable[[RawRecord], object]] = {
    RecordKind.RAW: lambda raw: raw,
    RecordKind.SHORT: ShortRecord.from_raw,
    RecordKind.LONG: LongRecord.from_raw,
}


class RecordCollection(Generic[E]):
    """
    An append-only-at-the-end sequence of records.

    Iteration walks a snapshot of the records, so iterating never moves a
    shared cursor and a copy can be consumed without touching the original.
    """

    def __init__(self, records: Optional[Iterable[E]] = None):
        self._records: List[E] = list(records) if records is not None else []

    def append(self, record: E) -> None:
        """Add a record at the end."""
        self._records.append(record)

    def remove_last(self) -> Optional[E]:
        """
        Remove and return the most recently appended record.

        Returns:
            The removed record, or None if the collection is empty
        """
        if not self._records:
            return None
        return self._records.pop()

    def extend(self, records: Iterable[E]) -> None:
        """Append every record of ``records``, keeping their order."""
        self._records.extend(records)

    def get(self, index: int) -> E:
        """
        Return the record at ``index``.

        Raises:
            BoundsError: If ``index`` is negative or not below ``count()``
        """
        if index < 0 or index >= len(self._records):
            raise BoundsError(index, len(self._records))
        return self._records[index]

    def __getitem__(self, index: int) -> E:
        return self.get(index)

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def is_empty(self) -> bool:
        return not self._records

    def iterate(self) -> Iterator[E]:
        """Yield records in append order."""
        return iter(tuple(self._records))

    def __iter__(self) -> Iterator[E]:
        return self.iterate()

    def copy(self) -> "RecordCollection[E]":
        return RecordCollection(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordCollection):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"<RecordCollection(count={len(self._records)})>"

    def to_dataframe(self) -> pd.DataFrame:
        """
        Build a DataFrame with one row per record.

        Columns follow the record's field order. Tokenized fields stay as
        tuples in object columns.
        """
        if not self._records:
            return pd.DataFrame()

        columns = [f.name for f in fields(self._records[0])]
        return pd.DataFrame([asdict(record) for record in self._records], columns=columns)

    @classmethod
    def load_from_file(
        cls,
        path: Union[str, Path],
        kind: RecordKind = RecordKind.RAW,
        limit: Optional[int] = None,
    ) -> "RecordCollection":
        """
        Load records from a newline-delimited JSON file.

        Args:
            path: Path of the dataset file
            kind: Which record view to build from each line
            limit: Stop after this many records; None or negative reads everything

        Returns:
            A new collection with the loaded records

        Raises:
            DatasetIOError: If the file cannot be opened or read
            ParseError: If a line is not UTF-8 or not valid JSON
            SchemaError: If a line does not hold a valid record
        """
        kind = RecordKind(kind)
        build = _BUILDERS[kind]
        path = Path(path)
        collection = cls()

        if limit is not None and limit < 0:
            limit = None

        logger.info(f"Loading {kind.value} records from {path} (limit={limit})")

        try:
            with open(path, "rb") as file:
                for line_number, raw_line in enumerate(file, start=1):
                    if limit is not None and len(collection) >= limit:
                        break

                    try:
                        line = raw_line.decode("utf-8")
                    except UnicodeDecodeError as e:
                        logger.error(f"Line {line_number} of {path} is not valid UTF-8")
                        raise ParseError(f"invalid UTF-8: {e}", line_number=line_number) from e

                    try:
                        raw = decode_record_from_string(line)
                    except ParseError as e:
                        logger.error(f"Line {line_number} of {path} is not valid JSON: {e}")
                        raise ParseError(e.message, line_number=line_number) from e
                    except SchemaError as e:
                        logger.error(f"Line {line_number} of {path} failed validation: {e}")
                        raise SchemaError(
                            e.field, index=e.index, line_number=line_number, message=e.message
                        ) from e

                    collection.append(build(raw))
        except OSError as e:
            logger.error(f"Failed to read dataset file {path}: {e}")
            raise DatasetIOError(f"cannot read {path}: {e}", path=str(path)) from e

        logger.info(f"Loaded {len(collection)} {kind.value} records from {path}")
        return collection
