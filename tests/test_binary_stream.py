"""
Tests for the BinaryStream byte cursor.
"""

from io import BytesIO

import pytest

from omf_dumper_py.errors import RecordTextError, TruncatedRecordError
from omf_dumper_py.io.binary_stream import BinaryStream


def test_reads_little_endian_integers():
    stream = BinaryStream(b'\x7f\x34\x12')
    assert stream.read_byte() == 0x7F
    assert stream.read_uint16() == 0x1234
    assert stream.remaining == 0


def test_read_pstring():
    stream = BinaryStream(b'\x04TEST\x00')
    assert stream.read_pstring() == "TEST"
    assert stream.position == 5


def test_empty_pstring():
    stream = BinaryStream(b'\x00')
    assert stream.read_pstring() == ""


def test_short_read_raises_truncated():
    stream = BinaryStream(b'\x01')
    with pytest.raises(TruncatedRecordError):
        stream.read_uint16()


def test_pstring_longer_than_data_raises_truncated():
    stream = BinaryStream(b'\x05ABC')
    with pytest.raises(TruncatedRecordError):
        stream.read_pstring()


def test_invalid_text_raises_text_error():
    stream = BinaryStream(b'\x02\xff\xfe')
    with pytest.raises(RecordTextError) as excinfo:
        stream.read_pstring()
    assert isinstance(excinfo.value, ValueError)


def test_encoding_is_configurable():
    stream = BinaryStream(b'\x02\xe9t', encoding='latin-1')
    assert stream.read_pstring() == "ét"


def test_try_read_byte_distinguishes_end_of_stream():
    stream = BinaryStream(BytesIO(b'\x80'))
    assert stream.try_read_byte() == 0x80
    assert stream.try_read_byte() is None


def test_truncated_error_is_eof_error():
    with pytest.raises(EOFError):
        BinaryStream(b'').read_byte()


def test_context_manager_closes_file_object():
    source = BytesIO(b'\x01\x02')
    with BinaryStream(source) as stream:
        assert stream.read_uint16() == 0x0201
    assert source.closed
