"""Download and unpack the TIFU dataset archive."""

import io
import logging
import zipfile
from pathlib import Path
from typing import Union

import requests
import tqdm

from tifu_dataset.config import Config
from tifu_dataset.errors import FetchError

logger = logging.getLogger(__name__)


class DatasetFetcher:
    """Makes sure the TIFU dataset file exists in the configured data directory."""

    def __init__(self, config: Config):
        """
        Initialize the fetcher.

        Args:
            config: Application configuration (data dir, URL, download settings)
        """
        self.config = config

    def ensure_dataset(self, force: bool = False) -> Path:
        """
        Return the dataset file path, downloading the dataset first if needed.

        Args:
            force: Download again even if the file already exists

        Returns:
            Path of the dataset file

        Raises:
            FetchError: If the archive cannot be downloaded or extracted
        """
        data_dir = self.config.data_dir_path
        dataset_path = self.config.dataset_file_path

        logger.info(f"Data directory: {data_dir}; dataset file: {dataset_path}")

        if data_dir.is_dir():
            if dataset_path.is_file() and not force:
                logger.info("The TIFU dataset already exists, skipping download")
                return dataset_path
        else:
            logger.info(f"Creating data directory {data_dir}")
            data_dir.mkdir(parents=True, exist_ok=True)

        archive = self.fetch_archive()
        dataset = extract_dataset(archive, self.config.dataset_file)
        return write_dataset(dataset, dataset_path)

    def fetch_archive(self) -> bytes:
        """
        Download the dataset archive.

        Returns:
            The raw bytes of the ZIP archive

        Raises:
            FetchError: On any transport or HTTP error
        """
        url = self.config.dataset_url
        download = self.config.download
        logger.info(f"Fetching the TIFU dataset archive from {url}")

        try:
            response = requests.get(
                url,
                stream=True,
                allow_redirects=True,
                timeout=download.timeout_sec,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(f"Failed to fetch {url}: {e}", status_code=status) from e
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        total = int(response.headers.get("Content-Length", 0)) or None
        buffer = io.BytesIO()

        try:
            with tqdm.tqdm(
                total=total,
                unit="B",
                unit_scale=True,
                desc="TIFU dataset archive",
                disable=not download.show_progress,
            ) as pbar:
                for chunk in response.iter_content(chunk_size=download.chunk_size):
                    if not chunk:
                        continue
                    buffer.write(chunk)
                    pbar.update(len(chunk))
        except requests.RequestException as e:
            raise FetchError(f"Download of {url} was interrupted: {e}") from e
        finally:
            response.close()

        logger.info(f"Fetched {buffer.tell()} bytes")
        return buffer.getvalue()


def extract_dataset(archive: bytes, member: str) -> bytes:
    """
    Read one entry out of a ZIP archive held in memory.

    Raises:
        FetchError: If the archive is corrupt or has no such entry
    """
    logger.info(f"Extracting {member} from the dataset archive")
    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as zip_archive:
            return zip_archive.read(member)
    except KeyError as e:
        raise FetchError(f"Archive has no entry named {member}") from e
    except zipfile.BadZipFile as e:
        raise FetchError(f"Invalid dataset archive: {e}") from e


def write_dataset(data: bytes, path: Union[str, Path]) -> Path:
    path = Path(path)
    logger.info(f"Writing the TIFU dataset into '{path}'")
    path.write_bytes(data)
    return path
