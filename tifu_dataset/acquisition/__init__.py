"""Dataset download and extraction."""

from tifu_dataset.acquisition.fetcher import DatasetFetcher, extract_dataset, write_dataset

__all__ = ["DatasetFetcher", "extract_dataset", "write_dataset"]
