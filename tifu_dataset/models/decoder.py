"""
Decoding and encoding of TIFU dataset records.

The decoder checks one parsed JSON object field by field. Required fields
must be present with the right JSON type; a missing field, an explicit
``null`` and a value of the wrong type all fail with a ``SchemaError`` that
names the field. Optional fields are looser, see ``decode_record``.
"""

import json
import math
from typing import Any, Dict, Optional, Union

from tifu_dataset.errors import ParseError, SchemaError
from tifu_dataset.models.records import LongRecord, RawRecord, ShortRecord, Tokens

AnyRecord = Union[RawRecord, ShortRecord, LongRecord]

U64_MAX = 2**64 - 1

STRING_FIELDS = (
    "permalink",
    "title",
    "url",
    "selftext",
    "trimmed_title",
    "selftext_without_tldr",
    "id",
)
INTEGER_FIELDS = ("num_comments", "ups", "score")
FLOAT_FIELDS = ("created_utc", "upvote_ratio")

# Tokenized arrays that may only be absent while selftext_without_tldr_tokenized is null.
COUPLED_TOKEN_FIELDS = ("title_tokenized", "trimmed_title_tokenized")
SOURCE_TOKENS_FIELD = "selftext_without_tldr_tokenized"


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_text(value: Any) -> bool:
    """True for strings that are encodable as UTF-8 (no lone surrogates)."""
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _decode_tokens(value: list, field: str) -> Tokens:
    for index, token in enumerate(value):
        if not _is_text(token):
            raise SchemaError(field, index=index)
    return tuple(value)


def _decode_string(obj: Dict[str, Any], field: str) -> str:
    value = obj.get(field)
    if not _is_text(value):
        raise SchemaError(field)
    return value


def _decode_unsigned(obj: Dict[str, Any], field: str) -> int:
    value = obj.get(field)
    if not _is_integer(value) or value < 0 or value > U64_MAX:
        raise SchemaError(field)
    return value


def _decode_float(obj: Dict[str, Any], field: str) -> float:
    value = obj.get(field)
    if not _is_number(value):
        raise SchemaError(field)
    try:
        value = float(value)
    except OverflowError as e:
        raise SchemaError(field) from e
    if not math.isfinite(value):
        raise SchemaError(field)
    return value


def _decode_optional_string(obj: Dict[str, Any], field: str) -> Optional[str]:
    value = obj.get(field)
    if not isinstance(value, str):
        return None
    if not _is_text(value):
        raise SchemaError(field)
    return value


def decode_record(value: Any) -> RawRecord:
    """
    Build a RawRecord from a parsed JSON value.

    Rules:
      * string, integer and float fields are required. Integers must be
        non-negative JSON integers; floats accept integer input.
      * ``selftext_without_tldr_tokenized`` may be absent or null (empty
        tuple), any other non-array value fails.
      * ``title_tokenized`` and ``trimmed_title_tokenized`` may be absent or
        non-array only while ``selftext_without_tldr_tokenized`` is absent
        or null; they default to an empty tuple.
      * ``tldr``, ``tldr_tokenized`` and ``selftext_html`` are kept only when
        they have the expected type, otherwise they become None.
      * A non-string element in any tokenized array fails with its index.
      * Strings holding lone surrogates (``"\\ud800"``) fail, even in
        optional fields, since they cannot be written back as UTF-8.

    Args:
        value: Result of ``json.loads`` for one dataset line

    Returns:
        The decoded record

    Raises:
        SchemaError: If a field is missing or has the wrong type
    """
    if not isinstance(value, dict):
        raise SchemaError("record", message="invalid record: expected a JSON object")

    source_tokens_missing = value.get(SOURCE_TOKENS_FIELD) is None

    decoded: Dict[str, Any] = {}

    for field in COUPLED_TOKEN_FIELDS:
        tokens = value.get(field)
        if isinstance(tokens, list):
            decoded[field] = _decode_tokens(tokens, field)
        elif not source_tokens_missing:
            raise SchemaError(field)
        else:
            decoded[field] = ()

    source_tokens = value.get(SOURCE_TOKENS_FIELD)
    if isinstance(source_tokens, list):
        decoded[SOURCE_TOKENS_FIELD] = _decode_tokens(source_tokens, SOURCE_TOKENS_FIELD)
    elif source_tokens is not None:
        raise SchemaError(SOURCE_TOKENS_FIELD)
    else:
        decoded[SOURCE_TOKENS_FIELD] = ()

    tldr_tokens = value.get("tldr_tokenized")
    if isinstance(tldr_tokens, list):
        decoded["tldr_tokenized"] = _decode_tokens(tldr_tokens, "tldr_tokenized")
    else:
        decoded["tldr_tokenized"] = None

    for field in STRING_FIELDS:
        decoded[field] = _decode_string(value, field)

    for field in INTEGER_FIELDS:
        decoded[field] = _decode_unsigned(value, field)

    for field in FLOAT_FIELDS:
        decoded[field] = _decode_float(value, field)

    decoded["tldr"] = _decode_optional_string(value, "tldr")
    decoded["selftext_html"] = _decode_optional_string(value, "selftext_html")

    return RawRecord(**decoded)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseError(f"malformed JSON: {e}") from e
    except RecursionError as e:
        raise ParseError("malformed JSON: nesting too deep") from e


def decode_record_from_string(text: str) -> RawRecord:
    """Parse one JSON document and decode it into a RawRecord."""
    return decode_record(_parse_json(text))


def decode_record_from_bytes(data: bytes) -> RawRecord:
    """Decode UTF-8 bytes holding one JSON document into a RawRecord."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"invalid UTF-8: {e}") from e
    return decode_record(_parse_json(text))


def encode_record_to_string(record: AnyRecord) -> str:
    """Serialize a record to a single line of JSON."""
    return json.dumps(record.to_dict(), ensure_ascii=False)


def encode_record_to_bytes(record: AnyRecord) -> bytes:
    """Serialize a record to UTF-8 encoded JSON."""
    return encode_record_to_string(record).encode("utf-8")
