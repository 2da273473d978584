"""
Helpers that assemble OMF records byte by byte for the tests.
"""

import struct


def pstring(s):
    raw = s.encode('utf-8') if isinstance(s, str) else s
    return bytes([len(raw)]) + raw


def record(tag, payload=b'', checksum=0):
    """Frame a payload as one record; the length covers payload + checksum."""
    return bytes([tag]) + struct.pack('<H', len(payload) + 1) + payload + bytes([checksum])


def theadr(name):
    return record(0x80, pstring(name))


def coment(flags, comment_class, data=b''):
    return record(0x88, bytes([flags, comment_class]) + data)


def modend(attr, start=None):
    payload = bytes([attr])
    if start is not None:
        end_data, frame_datum, target_datum, displacement = start
        payload += struct.pack('<BBBH', end_data, frame_datum, target_datum, displacement)
    return record(0x8A, payload)


def extdef(*entries):
    return record(0x8C, b''.join(pstring(name) + bytes([t]) for name, t in entries))


def pubdef(group, segment, entries, frame=None):
    payload = bytes([group, segment])
    if segment == 0:
        payload += struct.pack('<H', frame or 0)
    for name, offset, type_index in entries:
        payload += pstring(name) + struct.pack('<HB', offset, type_index)
    return record(0x90, payload)


def lnames(*names):
    return record(0x96, b''.join(pstring(n) for n in names))


def segdef(acbp, length, name, class_name, overlay, absolute=None):
    payload = bytes([acbp])
    if absolute is not None:
        payload += struct.pack('<HB', *absolute)
    payload += struct.pack('<HBBB', length, name, class_name, overlay)
    return record(0x98, payload)


def grpdef(name, *segments):
    return record(0x9A, bytes([name]) + b''.join(bytes([0xFF, s]) for s in segments))


def ledata(segment, offset, data):
    return record(0xA0, struct.pack('<BH', segment, offset) + data)


# Relocatable, paragraph aligned, public combination
ACBP_PARA_PUBLIC = 0x68


def sample_module():
    """A small but complete module: header, names, segment, group, publics, data, end."""
    return b''.join([
        theadr("TEST"),
        lnames("", "_TEXT", "CODE", "DGROUP"),
        segdef(ACBP_PARA_PUBLIC, 0x10, 2, 3, 1),
        grpdef(4, 1),
        pubdef(1, 1, [("_main", 0x0004, 0)]),
        ledata(1, 0x0000, b'\x90\xc3'),
        modend(0x80),
    ])
