"""
Tests for the JSON dump document.
"""

import json

from omf_dumper_py.cli import dump_json
from omf_dumper_py.config import Config

from omf_builders import ACBP_PARA_PUBLIC, grpdef, lnames, sample_module, segdef


def test_sample_module_document():
    doc = dump_json(sample_module(), Config())
    data = json.loads(doc.to_json())

    assert data["Error"] is None
    assert [r["Name"] for r in data["Records"]] == [
        "THEADR", "LNAMES", "SEGDEF", "GRPDEF", "PUBDEF", "LEDATA", "MODEND",
    ]
    assert data["Names"] == ["", "_TEXT", "CODE", "DGROUP"]

    segment = data["Segments"][0]
    assert segment["Name"] == "_TEXT"
    assert segment["ClassName"] == "CODE"
    assert segment["Alignment"] == "relocatable, paragraph aligned"
    assert segment["Length"] == 0x10

    assert data["Groups"][0]["Name"] == "DGROUP"
    assert data["Groups"][0]["Segments"][0]["SegmentName"] == "_TEXT"

    pubdef = data["Records"][4]
    assert pubdef["Fields"]["BaseGroup"] == "DGROUP"
    assert pubdef["Fields"]["BaseSegment"] == "_TEXT"
    assert pubdef["Fields"]["BaseFrame"] is None
    assert pubdef["Fields"]["Names"] == [{"Name": "_main", "Offset": 4, "TypeIndex": 0}]

    ledata = data["Records"][5]
    assert ledata["Fields"]["Data"] == "90c3"
    assert ledata["Text"][1] == "Logical Enumerated Data - _TEXT (1) offset 0000h"


def test_error_keeps_earlier_records():
    data = lnames("CODE") + b'\x80\x05\x00\x04TE'
    doc = dump_json(data, Config())
    assert len(doc.Records) == 1
    assert doc.Error.startswith("record #1 (type 80h")
    assert doc.Names == ["CODE"]


def test_render_failure_is_reported_with_position():
    data = lnames("DGROUP") + grpdef(1, 1) + segdef(ACBP_PARA_PUBLIC, 0, 1, 1, 1)
    doc = dump_json(data, Config())
    assert len(doc.Records) == 1
    assert doc.Error.startswith("record #1 (type 9Ah at offset 0xB): segment index 1")
