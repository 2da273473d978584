"""
Binary stream reader for OMF record streams.

This module provides a BinaryStream class that reads little-endian integers,
raw byte blocks and length-prefixed strings from a byte stream. Unlike a plain
file read, every method insists on getting all the bytes it asked for, so a
stream that ends early surfaces as TruncatedRecordError instead of a short
result.
"""

import struct
from io import BytesIO
from typing import BinaryIO, Optional, Union

from ..errors import RecordTextError, TruncatedRecordError


class BinaryStream:
    """
    Binary stream reader over bytes or any readable binary file object.

    Attributes:
        encoding: Text encoding used by read_pstring
    """

    def __init__(self, data: Union[bytes, bytearray, BinaryIO], encoding: str = 'utf-8'):
        """
        Initialize a BinaryStream.

        Args:
            data: Either raw bytes or a binary stream (file, BytesIO)
            encoding: Text encoding for length-prefixed strings
        """
        if isinstance(data, (bytes, bytearray)):
            self._stream = BytesIO(bytes(data))
        else:
            self._stream = data

        self.encoding = encoding

    # ========== Position and Length ==========

    @property
    def position(self) -> int:
        """Get current stream position."""
        return self._stream.tell()

    @position.setter
    def position(self, value: int) -> None:
        """Set stream position."""
        self._stream.seek(value)

    @property
    def length(self) -> int:
        """Get stream length."""
        current = self._stream.tell()
        self._stream.seek(0, 2)  # Seek to end
        length = self._stream.tell()
        self._stream.seek(current)  # Restore position
        return length

    @property
    def remaining(self) -> int:
        """Number of bytes left after the current position."""
        return self.length - self.position

    # ========== Primitive Readers ==========

    def read_bytes(self, count: int) -> bytes:
        """
        Read exactly count raw bytes.

        Raises:
            TruncatedRecordError: If the stream holds fewer than count bytes
        """
        if count < 0:
            raise ValueError(f"negative read length {count}")
        data = self._stream.read(count)
        if len(data) != count:
            raise TruncatedRecordError(
                f"unexpected end of data: wanted {count} bytes, got {len(data)}"
            )
        return data

    def try_read_byte(self) -> Optional[int]:
        """
        Read an unsigned byte, or None at a clean end of stream.

        Only a read that returns no data at all counts as end of stream;
        errors raised by the underlying file propagate unchanged.
        """
        b = self._stream.read(1)
        if not b:
            return None
        return b[0]

    def read_byte(self) -> int:
        """Read an unsigned byte."""
        return struct.unpack('<B', self.read_bytes(1))[0]

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit little-endian integer."""
        return struct.unpack('<H', self.read_bytes(2))[0]

    # ========== String Readers ==========

    def read_pstring(self) -> str:
        """
        Read a length-prefixed string: one length byte, then that many bytes.

        Returns:
            The decoded string

        Raises:
            TruncatedRecordError: If the stream ends inside the string
            RecordTextError: If the bytes are not valid in self.encoding
        """
        length = self.read_byte()
        raw = self.read_bytes(length)
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise RecordTextError(
                f"invalid {self.encoding} text in string {raw!r}: {e.reason}"
            ) from e

    # ========== Utility Methods ==========

    def dispose(self) -> None:
        """Close the stream."""
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.dispose()
