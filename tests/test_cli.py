"""Tests for the CLI module."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from tifu_dataset.cli import app, collect_stats
from tifu_dataset.errors import FetchError
from tifu_dataset.paths import TIFU_DATASET_FILE
from tifu_dataset.storage.collection import RecordCollection

from tests.sample_records import ENTRY_WITH_TLDR, VALID_ENTRY, make_entry, write_jsonl


class TestCli(unittest.TestCase):
    """Test cases for the CLI interface."""

    def setUp(self):
        """Set up test environment."""
        self.runner = CliRunner()

        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self.temp_dir.name, "config.yaml")
        self.data_path = write_jsonl(
            Path(self.temp_dir.name) / TIFU_DATASET_FILE,
            [VALID_ENTRY, ENTRY_WITH_TLDR],
        )

        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(f"""
data_dir: {self.temp_dir.name}
log_level: ERROR
download:
  show_progress: false
""")

    def tearDown(self):
        """Clean up test environment."""
        self.temp_dir.cleanup()

    def _json_lines(self, output):
        return [json.loads(line) for line in output.splitlines() if line.strip()]

    def test_show_command(self):
        """Test printing every raw record."""
        result = self.runner.invoke(app, ["show", "--config", self.config_path])

        self.assertEqual(result.exit_code, 0)
        records = self._json_lines(result.stdout)
        self.assertEqual([r["id"] for r in records], [VALID_ENTRY["id"], ENTRY_WITH_TLDR["id"]])

    def test_show_command_long_view_at_index(self):
        """Test printing one long record."""
        result = self.runner.invoke(app, [
            "show",
            "--config", self.config_path,
            "--kind", "long",
            "--index", "1",
        ])

        self.assertEqual(result.exit_code, 0)
        record = json.loads(result.stdout)
        self.assertEqual(record["summary"], ENTRY_WITH_TLDR["tldr"])
        self.assertEqual(record["source"], ENTRY_WITH_TLDR["selftext_without_tldr"])

    def test_show_command_with_limit(self):
        """Test the --limit option."""
        result = self.runner.invoke(app, ["show", "--config", self.config_path, "-k", "short", "-n", "1"])

        self.assertEqual(result.exit_code, 0)
        records = self._json_lines(result.stdout)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["summary"], VALID_ENTRY["trimmed_title"])

    def test_show_command_index_out_of_bounds(self):
        """Test that a bad index exits with an error."""
        result = self.runner.invoke(app, ["show", "--config", self.config_path, "--index", "5"])

        self.assertEqual(result.exit_code, 1)

    def test_show_command_invalid_dataset(self):
        """Test that a schema error exits with an error."""
        write_jsonl(self.data_path, [make_entry(ups="many")])

        result = self.runner.invoke(app, ["show", "--config", self.config_path])

        self.assertEqual(result.exit_code, 1)

    def test_stats_command(self):
        """Test the stats command writing to a file."""
        output_path = os.path.join(self.temp_dir.name, "stats.json")

        result = self.runner.invoke(app, ["stats", "--config", self.config_path, "--output", output_path])

        self.assertEqual(result.exit_code, 0)
        with open(output_path, "r", encoding="utf-8") as f:
            stats = json.load(f)

        self.assertEqual(stats["count"], 2)
        self.assertEqual(stats["with_tldr"], 1)
        self.assertEqual(stats["score"]["max"], 50.0)
        self.assertIn("timestamp", stats)

    def test_validate_command(self):
        """Test the validate command with a valid config."""
        result = self.runner.invoke(app, ["validate", "--config", self.config_path])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Configuration OK", result.output)

    def test_validate_command_with_errors(self):
        """Test the validate command with an invalid config."""
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("dataset_url: ftp://example.com/tifu.zip\ndownload:\n  chunk_size: 0\n")

        result = self.runner.invoke(app, ["validate", "--config", self.config_path])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Configuration error", result.output)

    @patch("tifu_dataset.cli.DatasetFetcher")
    def test_fetch_command(self, mock_fetcher_cls):
        """Test the fetch command."""
        mock_fetcher = MagicMock()
        mock_fetcher.ensure_dataset.return_value = self.data_path
        mock_fetcher_cls.return_value = mock_fetcher

        result = self.runner.invoke(app, ["fetch", "--config", self.config_path, "--force"])

        self.assertEqual(result.exit_code, 0)
        mock_fetcher.ensure_dataset.assert_called_once_with(force=True)
        self.assertIn("TIFU dataset available at", result.stdout)

    @patch("tifu_dataset.cli.DatasetFetcher")
    def test_fetch_command_failure(self, mock_fetcher_cls):
        """Test the fetch command when the download fails."""
        mock_fetcher_cls.return_value.ensure_dataset.side_effect = FetchError("boom", status_code=503)

        result = self.runner.invoke(app, ["fetch", "--config", self.config_path])

        self.assertEqual(result.exit_code, 1)


class TestCollectStats(unittest.TestCase):
    """Test cases for collect_stats."""

    def test_empty_collection(self):
        stats = collect_stats(RecordCollection())

        self.assertEqual(stats["count"], 0)
        self.assertNotIn("score", stats)


if __name__ == "__main__":
    unittest.main()
