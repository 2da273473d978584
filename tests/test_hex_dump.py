"""
Tests for hex dump formatting.
"""

import pytest

from omf_dumper_py.output.hex_dump import hex_dump_lines


def test_grouped_rows_with_ascii():
    data = bytes(range(0x41, 0x41 + 18))
    lines = hex_dump_lines(data)
    assert lines[0] == "Length: 18 (0x12) bytes"
    assert lines[1] == "0000:   41 42 43 44 45 46 47 48  49 4a 4b 4c 4d 4e 4f 50   ABCDEFGHIJKLMNOP"
    assert lines[2].startswith("0010:   51 52 ")
    assert lines[2].endswith("   QR")
    # ASCII column lines up across full and partial rows
    assert len(lines[2]) == len(lines[1]) - 14


def test_non_printable_bytes_shown_as_dots():
    lines = hex_dump_lines(b'\x00A\xff', show_title=False)
    assert lines == ["0000:   00 41 ff" + " " * 40 + "   .A."]


def test_empty_data_has_only_title():
    assert hex_dump_lines(b'') == ["Length: 0 (0x0) bytes"]


def test_invalid_width():
    with pytest.raises(ValueError):
        hex_dump_lines(b'\x00', bytes_per_line=0)
