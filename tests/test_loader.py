"""Tests for the dataset loader entry points."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from tifu_dataset.errors import DatasetIOError, SchemaError
from tifu_dataset.models.records import LongRecord, RawRecord, ShortRecord
from tifu_dataset.paths import TIFU_DATASET_FILE
from tifu_dataset.storage.collection import RecordKind
from tifu_dataset.storage.loader import (
    DatasetLoader,
    load_long_records,
    load_raw_records,
    load_short_records,
)

from tests.sample_records import ENTRY_WITH_TLDR, VALID_ENTRY, make_entry, write_jsonl


class TestDatasetLoader(unittest.TestCase):
    """Test cases for DatasetLoader."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.data_path = write_jsonl(
            Path(self.temp_dir.name) / TIFU_DATASET_FILE,
            [VALID_ENTRY, ENTRY_WITH_TLDR, make_entry(id="third")],
        )

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load_all(self):
        collection = DatasetLoader(self.data_path).load_all()
        self.assertEqual(collection.count(), 3)

    def test_load_up_to_n(self):
        collection = DatasetLoader(self.data_path, RecordKind.SHORT).load(2)

        self.assertEqual(collection.count(), 2)
        self.assertIsInstance(collection[0], ShortRecord)

    def test_helpers_pick_the_record_view(self):
        self.assertIsInstance(load_raw_records(self.data_path)[0], RawRecord)
        self.assertIsInstance(load_short_records(self.data_path)[0], ShortRecord)
        self.assertIsInstance(load_long_records(self.data_path, limit=1)[0], LongRecord)

    def test_helpers_default_to_data_dir(self):
        with patch.dict("os.environ", {"DATA_DIR": self.temp_dir.name}):
            collection = load_raw_records(limit=-1)

        self.assertEqual(collection.count(), 3)


class TestDatasetLoaderAsync(unittest.IsolatedAsyncioTestCase):
    """Test cases for DatasetLoader.aload."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.data_path = Path(self.temp_dir.name) / "tifu.json"

    def tearDown(self):
        self.temp_dir.cleanup()

    async def test_aload_matches_load(self):
        write_jsonl(self.data_path, [VALID_ENTRY, ENTRY_WITH_TLDR])
        loader = DatasetLoader(self.data_path, RecordKind.LONG)

        collection = await loader.aload()

        self.assertEqual(collection, loader.load())

    async def test_aload_propagates_schema_errors(self):
        write_jsonl(self.data_path, [make_entry(selftext=None)])

        with self.assertRaises(SchemaError):
            await DatasetLoader(self.data_path).aload()

    async def test_aload_propagates_io_errors(self):
        with self.assertRaises(DatasetIOError):
            await DatasetLoader(self.data_path).aload(limit=1)


if __name__ == "__main__":
    unittest.main()
