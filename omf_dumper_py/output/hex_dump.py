"""
Hex dump formatting for opaque record payloads.
"""

from typing import List


def hex_dump_lines(
    data: bytes,
    bytes_per_line: int = 16,
    group_size: int = 8,
    show_ascii: bool = True,
    show_title: bool = True,
) -> List[str]:
    """
    Format bytes as a grouped hex dump.

    Args:
        data: Bytes to dump
        bytes_per_line: Bytes shown per row
        group_size: An extra space separates every group_size bytes
            (0 disables grouping)
        show_ascii: Append a printable-ASCII column
        show_title: Start with a "Length: N (0xN) bytes" line

    Returns:
        Lines of the dump, without trailing newlines

    Example:
        >>> hex_dump_lines(b'AB\\x00', bytes_per_line=4, group_size=2)
        ['Length: 3 (0x3) bytes', '0000:   41 42  00      AB.']
    """
    if bytes_per_line <= 0:
        raise ValueError("bytes_per_line must be positive")

    lines = []
    if show_title:
        lines.append(f"Length: {len(data)} (0x{len(data):x}) bytes")

    for row in range(0, len(data), bytes_per_line):
        chunk = data[row:row + bytes_per_line]
        cells = []
        for i in range(bytes_per_line):
            if group_size and i and i % group_size == 0:
                cells.append('')
            cells.append(f'{chunk[i]:02x}' if i < len(chunk) else '  ')
        line = f'{row:04x}:   ' + ' '.join(cells)
        if show_ascii:
            ascii_repr = ''.join(chr(b) if 32 <= b < 127 else '.' for b in chunk)
            line += '   ' + ascii_repr
        else:
            line = line.rstrip()
        lines.append(line)

    return lines
