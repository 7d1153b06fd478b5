"""Record collections and dataset file loading."""

from tifu_dataset.storage.collection import RecordCollection, RecordKind
from tifu_dataset.storage.loader import (
    DatasetLoader,
    load_long_records,
    load_raw_records,
    load_short_records,
)

__all__ = [
    "RecordCollection",
    "RecordKind",
    "DatasetLoader",
    "load_raw_records",
    "load_short_records",
    "load_long_records",
]
