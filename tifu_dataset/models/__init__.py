"""Record types and the JSON decoder for TIFU dataset lines."""

from tifu_dataset.models.decoder import (
    decode_record,
    decode_record_from_bytes,
    decode_record_from_string,
    encode_record_to_bytes,
    encode_record_to_string,
)
from tifu_dataset.models.records import LongRecord, RawRecord, ShortRecord

__all__ = [
    "RawRecord",
    "ShortRecord",
    "LongRecord",
    "decode_record",
    "decode_record_from_string",
    "decode_record_from_bytes",
    "encode_record_to_string",
    "encode_record_to_bytes",
]
