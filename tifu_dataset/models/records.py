"""Record types for the TIFU dataset and the short/long training views."""

import functools
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

Tokens = Tuple[str, ...]


def _to_json_ready(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def _none_first(value: Any) -> Tuple[bool, Any]:
    # None sorts before any value of the same field.
    return (value is not None, value if value is not None else ())


@functools.total_ordering
class _Record:
    """Behaviour shared by the record dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as a JSON-ready dict, keys in field order."""
        return {f.name: _to_json_ready(getattr(self, f.name)) for f in fields(self)}

    def _sort_key(self) -> Tuple:
        return tuple(_none_first(getattr(self, f.name)) for f in fields(self))

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._sort_key() < other._sort_key()


@dataclass(frozen=True)
class RawRecord(_Record):
    """
    One validated line of the TIFU dataset file.

    Tokenized fields are tuples so a record can be hashed and shared
    without copying. Build instances from JSON with
    ``tifu_dataset.models.decoder.decode_record``.
    """

    id: str = ""
    title: str = ""
    trimmed_title: str = ""
    url: str = ""
    permalink: str = ""
    selftext: str = ""
    selftext_without_tldr: str = ""
    num_comments: int = 0
    ups: int = 0
    score: int = 0
    created_utc: float = 0.0
    upvote_ratio: float = 0.0
    title_tokenized: Tokens = ()
    trimmed_title_tokenized: Tokens = ()
    selftext_without_tldr_tokenized: Tokens = ()
    tldr: Optional[str] = None
    tldr_tokenized: Optional[Tokens] = None
    selftext_html: Optional[str] = None


@dataclass(frozen=True)
class ShortRecord(_Record):
    """Trimmed title as the summary, post body without the TL;DR as the source."""

    id: str = ""
    summary: str = ""
    summary_tokenized: Tokens = ()
    source: str = ""
    source_tokenized: Tokens = ()

    @classmethod
    def from_raw(cls, raw: RawRecord) -> "ShortRecord":
        return cls(
            id=raw.id,
            summary=raw.trimmed_title,
            summary_tokenized=tuple(raw.trimmed_title_tokenized),
            source=raw.selftext_without_tldr,
            source_tokenized=tuple(raw.selftext_without_tldr_tokenized),
        )


@dataclass(frozen=True)
class LongRecord(_Record):
    """The author's TL;DR as the summary, post body without the TL;DR as the source."""

    id: str = ""
    summary: Optional[str] = None
    summary_tokenized: Optional[Tokens] = None
    source: str = ""
    source_tokenized: Tokens = ()

    @classmethod
    def from_raw(cls, raw: RawRecord) -> "LongRecord":
        summary_tokenized = None
        if raw.tldr_tokenized is not None:
            summary_tokenized = tuple(raw.tldr_tokenized)

        return cls(
            id=raw.id,
            summary=raw.tldr,
            summary_tokenized=summary_tokenized,
            source=raw.selftext_without_tldr,
            source_tokenized=tuple(raw.selftext_without_tldr_tokenized),
        )
