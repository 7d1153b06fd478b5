"""Entry points for loading the TIFU dataset file into record collections."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from tifu_dataset.paths import tifu_dataset_file_path
from tifu_dataset.storage.collection import RecordCollection, RecordKind

logger = logging.getLogger(__name__)


class DatasetLoader:
    """Loads one dataset file as raw, short or long records."""

    def __init__(self, path: Union[str, Path], kind: RecordKind = RecordKind.RAW):
        """
        Initialize the loader.

        Args:
            path: Path of the newline-delimited JSON dataset file
            kind: Which record view to build
        """
        self.path = Path(path)
        self.kind = RecordKind(kind)

    def load(self, limit: Optional[int] = None) -> RecordCollection:
        """Load up to ``limit`` records (all of them when ``limit`` is None or negative)."""
        return RecordCollection.load_from_file(self.path, kind=self.kind, limit=limit)

    def load_all(self) -> RecordCollection:
        """Load every record in the file."""
        return self.load(limit=None)

    async def aload(self, limit: Optional[int] = None) -> RecordCollection:
        """
        Load records in a worker thread.

        The load is the same as ``load``; the event loop stays free while the
        file is read, and any load error is raised to the awaiting caller.
        """
        logger.debug(f"Delegating load of {self.path} to a worker thread")
        return await asyncio.to_thread(self.load, limit)


def _resolve(path: Optional[Union[str, Path]]) -> Path:
    return Path(path) if path is not None else tifu_dataset_file_path()


def load_raw_records(
    path: Optional[Union[str, Path]] = None, limit: Optional[int] = None
) -> RecordCollection:
    """Load raw records from ``path`` (default: the dataset file under $DATA_DIR)."""
    return DatasetLoader(_resolve(path), RecordKind.RAW).load(limit)


def load_short_records(
    path: Optional[Union[str, Path]] = None, limit: Optional[int] = None
) -> RecordCollection:
    return DatasetLoader(_resolve(path), RecordKind.SHORT).load(limit)


def load_long_records(
    path: Optional[Union[str, Path]] = None, limit: Optional[int] = None
) -> RecordCollection:
    return DatasetLoader(_resolve(path), RecordKind.LONG).load(limit)
