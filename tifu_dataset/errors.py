"""Exception hierarchy for the TIFU dataset toolkit."""

from typing import Optional


class DatasetError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ParseError(DatasetError):
    """Input is not valid JSON, or not valid UTF-8 text."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class SchemaError(DatasetError):
    """
    A record field is missing or has the wrong JSON type.

    The offending field name is kept in ``field``; for tokenized arrays the
    position of the bad element is kept in ``index``.
    """

    def __init__(
        self,
        field: str,
        index: Optional[int] = None,
        line_number: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.field = field
        self.index = index
        self.line_number = line_number

        if message is None:
            if index is None:
                message = f"invalid {field} field"
            else:
                message = f"invalid {field} field element at index: {index}"
        if line_number is not None:
            message = f"line {line_number}: {message}"

        super().__init__(message)


class DatasetIOError(DatasetError):
    """The dataset file cannot be opened or read."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class BoundsError(DatasetError, IndexError):
    """Indexed access past the end of a record collection."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"index {index} out of range for collection of length {length}")


class FetchError(DatasetError):
    """The dataset archive could not be downloaded or extracted."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
