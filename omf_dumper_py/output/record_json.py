"""
JSON output structures.

These structures define the JSON document produced by `omf-dumper --json`
and by the HTTP service.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
import json

from ..errors import OmfError
from ..omf.module_state import ModuleState, ModuleView
from ..omf.structures import (
    ALIGNMENT_NAMES,
    COMBINATION_NAMES,
    Comment,
    ExternalNames,
    GroupDefinition,
    GroupInfo,
    ListOfNames,
    LogicalEnumeratedData,
    ModuleEnd,
    OmfRecord,
    PublicNames,
    SegmentDefinition,
    SegmentInfo,
    TranslatorHeader,
    UnknownRecord,
)


def _try_name(view: ModuleView, index: int) -> Optional[str]:
    """Resolve a name index, or None when it is not defined."""
    if 0 < index <= view.names_count:
        return view.resolve_name(index)
    return None


def _try_segment_name(view: ModuleView, index: int) -> Optional[str]:
    if 0 < index <= view.segments_count:
        return _try_name(view, view.resolve_segment(index).segment_name_index)
    return None


def _try_group_name(view: ModuleView, index: int) -> Optional[str]:
    if 0 < index <= view.groups_count:
        return _try_name(view, view.resolve_group(index).group_name_index)
    return None


def segment_to_dict(segment: SegmentInfo, view: ModuleView) -> Dict[str, Any]:
    attrs = segment.attributes
    absolute = None
    if attrs.absolute_address is not None:
        absolute = {
            "FrameNumber": attrs.absolute_address.frame_number,
            "Offset": attrs.absolute_address.offset,
        }
    return {
        "Name": _try_name(view, segment.segment_name_index),
        "NameIndex": segment.segment_name_index,
        "ClassName": _try_name(view, segment.class_name_index),
        "ClassNameIndex": segment.class_name_index,
        "OverlayName": _try_name(view, segment.overlay_name_index),
        "OverlayNameIndex": segment.overlay_name_index,
        "Alignment": ALIGNMENT_NAMES[attrs.alignment],
        "Combination": COMBINATION_NAMES[attrs.combination],
        "Big": attrs.big,
        "Use32": attrs.use32,
        "AbsoluteAddress": absolute,
        "Length": segment.segment_length,
    }


def group_to_dict(group: GroupInfo, view: ModuleView) -> Dict[str, Any]:
    return {
        "Name": _try_name(view, group.group_name_index),
        "NameIndex": group.group_name_index,
        "Segments": [
            {
                "Index": c.index,
                "SegmentIndex": c.segment_definition,
                "SegmentName": _try_segment_name(view, c.segment_definition),
            }
            for c in group.components
        ],
    }


def record_fields(record: OmfRecord) -> Dict[str, Any]:
    """Type specific fields of a record, with indices resolved where possible."""
    data = record.data
    view = record.view if record.view is not None else ModuleState().view()

    if isinstance(data, TranslatorHeader):
        return {"Name": data.name}
    if isinstance(data, Comment):
        return {
            "NoPurge": data.comment_type.no_purge,
            "NoList": data.comment_type.no_list,
            "Class": data.comment_class,
            "Bytes": data.comment_bytes.hex(),
        }
    if isinstance(data, ModuleEnd):
        start = None
        if data.start is not None:
            start = {
                "EndData": data.start.end_data,
                "FrameDatum": data.start.frame_datum,
                "TargetDatum": data.start.target_datum,
                "TargetDisplacement": data.start.target_displacement,
            }
        return {"Main": data.main, "Start": start}
    if isinstance(data, ExternalNames):
        return {"Names": [{"Name": n.name, "TypeIndex": n.type_index} for n in data.names]}
    if isinstance(data, PublicNames):
        return {
            "BaseGroupIndex": data.base_group_index,
            "BaseGroup": _try_group_name(view, data.base_group_index),
            "BaseSegmentIndex": data.base_segment_index,
            "BaseSegment": _try_segment_name(view, data.base_segment_index),
            "BaseFrame": data.base_frame if data.base_segment_index == 0 else None,
            "Names": [
                {"Name": n.name, "Offset": n.public_offset, "TypeIndex": n.type_index}
                for n in data.names
            ],
        }
    if isinstance(data, ListOfNames):
        return {"Names": list(data.names)}
    if isinstance(data, SegmentDefinition):
        return segment_to_dict(data.segment, view)
    if isinstance(data, GroupDefinition):
        return group_to_dict(data.group, view)
    if isinstance(data, LogicalEnumeratedData):
        return {
            "SegmentIndex": data.segment_index,
            "SegmentName": _try_segment_name(view, data.segment_index),
            "Offset": data.enumerated_data_offset,
            "Data": data.data.hex(),
        }
    if isinstance(data, UnknownRecord):
        return {"Data": data.data.hex()}
    raise TypeError(f"Unsupported record payload {type(data).__name__}")


@dataclass
class RecordJson:
    """One decoded record."""
    Ordinal: int = 0
    Offset: int = 0
    Type: int = 0
    Name: str = ""
    Length: int = 0
    Checksum: int = 0
    Fields: Dict[str, Any] = field(default_factory=dict)
    Text: List[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: OmfRecord, text: List[str]) -> 'RecordJson':
        return cls(
            Ordinal=record.ordinal,
            Offset=record.offset,
            Type=record.record_type,
            Name=record.type_name,
            Length=record.record_length,
            Checksum=record.checksum,
            Fields=record_fields(record),
            Text=list(text),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Ordinal": self.Ordinal,
            "Offset": self.Offset,
            "Type": self.Type,
            "Name": self.Name,
            "Length": self.Length,
            "Checksum": self.Checksum,
            "Fields": self.Fields,
            "Text": self.Text
        }


@dataclass
class DumpJson:
    """
    Complete dump of an OMF module.

    Holds every record decoded (up to the failure, if any), the final
    module tables, and the error message when decoding stopped early.
    """
    Records: List[RecordJson] = field(default_factory=list)
    Names: List[str] = field(default_factory=list)
    Segments: List[Dict[str, Any]] = field(default_factory=list)
    Groups: List[Dict[str, Any]] = field(default_factory=list)
    Error: Optional[str] = None

    def set_tables(self, tables: ModuleState) -> None:
        """Copy the module tables into the document."""
        view = tables.view()
        self.Names = list(tables.names)
        self.Segments = [segment_to_dict(s, view) for s in tables.segments]
        self.Groups = [group_to_dict(g, view) for g in tables.groups]

    def set_error(self, error: OmfError) -> None:
        self.Error = error.describe()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Records": [r.to_dict() for r in self.Records],
            "Names": self.Names,
            "Segments": self.Segments,
            "Groups": self.Groups,
            "Error": self.Error
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: str) -> None:
        """Save to file."""
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
