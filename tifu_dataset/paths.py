"""Default locations of the TIFU dataset."""

import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_DATA_DIR = "data"
TIFU_DATASET_FILE = "tifu_all_tokenized_and_filtered.json"
TIFU_DATASET_URL = (
    "https://github.com/chritchens/mmn_dataset/raw/master/data/tifu_all_tokenized_and_filtered.zip"
)


def data_dir_from_env() -> str:
    """Return $DATA_DIR, or DEFAULT_DATA_DIR when it is unset or empty."""
    return os.getenv("DATA_DIR") or DEFAULT_DATA_DIR


def data_dir_path(data_dir: Optional[Union[str, Path]] = None) -> Path:
    return Path(data_dir if data_dir is not None else data_dir_from_env())


def tifu_dataset_file_path(data_dir: Optional[Union[str, Path]] = None) -> Path:
    return data_dir_path(data_dir) / TIFU_DATASET_FILE
