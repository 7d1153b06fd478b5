"""Fetch, decode and load the Reddit TIFU summarization dataset."""

from tifu_dataset.errors import (
    BoundsError,
    DatasetError,
    DatasetIOError,
    FetchError,
    ParseError,
    SchemaError,
)
from tifu_dataset.models import (
    LongRecord,
    RawRecord,
    ShortRecord,
    decode_record,
    decode_record_from_bytes,
    decode_record_from_string,
    encode_record_to_bytes,
    encode_record_to_string,
)
from tifu_dataset.storage import (
    DatasetLoader,
    RecordCollection,
    RecordKind,
    load_long_records,
    load_raw_records,
    load_short_records,
)

__version__ = "0.1.0"
