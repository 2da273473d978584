"""
Error taxonomy for OMF decoding and rendering.

Every error raised while reading or rendering a record derives from OmfError.
The reader stamps the failing record's ordinal, type and stream offset onto
the error before it propagates, so callers can report where decoding stopped.
"""

from typing import Optional


class OmfError(Exception):
    """Base class for all OMF decode/render failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.ordinal: Optional[int] = None
        self.record_type: Optional[int] = None
        self.offset: Optional[int] = None

    def locate(self, ordinal: int, record_type: Optional[int], offset: int) -> 'OmfError':
        """Attach the position of the failing record (first caller wins)."""
        if self.ordinal is None:
            self.ordinal = ordinal
            self.record_type = record_type
            self.offset = offset
        return self

    def describe(self) -> str:
        """Human readable message including the record position when known."""
        if self.ordinal is None:
            return self.message
        if self.record_type is None:
            where = f"record #{self.ordinal} at offset 0x{self.offset:X}"
        else:
            where = (f"record #{self.ordinal} (type {self.record_type:02X}h "
                     f"at offset 0x{self.offset:X})")
        return f"{where}: {self.message}"

    def __str__(self) -> str:
        return self.describe()


class TruncatedRecordError(OmfError, EOFError):
    """The stream ended in the middle of a record."""
    pass


class LengthMismatchError(OmfError):
    """A record payload does not fill its declared length exactly."""
    pass


class RecordValueError(OmfError, ValueError):
    """A bit field decoded to a value outside its enumeration."""
    pass


class RecordTextError(OmfError, ValueError):
    """A length-prefixed string is not valid text."""
    pass


class UnresolvedIndexError(OmfError, IndexError):
    """A name/segment/group index is zero or not yet defined."""

    def __init__(self, table: str, index: int, size: int):
        if index == 0:
            message = f"{table} index 0 does not refer to an entry"
        else:
            message = f"{table} index {index} not defined (table has {size} entries)"
        super().__init__(message)
        self.table = table
        self.index = index
        self.size = size
