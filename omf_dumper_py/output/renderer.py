"""
OMF record renderer - turns decoded records into text blocks.

Rendering is a pure function of the record and its module view: indices are
resolved through the view captured when the record was decoded, so a record
renders the same no matter what was decoded after it. A reference to a name,
segment or group that was not yet defined raises UnresolvedIndexError.
"""

from typing import TYPE_CHECKING, List, Optional

from ..omf.module_state import ModuleState, ModuleView
from ..omf.structures import (
    ALIGNMENT_NAMES,
    COMBINATION_NAMES,
    Comment,
    ExternalNames,
    GroupDefinition,
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
from .hex_dump import hex_dump_lines

if TYPE_CHECKING:
    from ..config import Config


class RecordRenderer:
    """
    Renders OmfRecord objects as lists of text lines.

    Numbers that denote addresses, offsets or lengths are shown in hex;
    counts and ordinals in decimal.
    """

    def __init__(self, config: Optional['Config'] = None):
        """
        Initialize the renderer.

        Args:
            config: Hex dump options are taken from here (defaults otherwise)
        """
        if config is None:
            self.bytes_per_line = 16
            self.group_size = 8
            self.show_ascii = True
            self.show_title = True
        else:
            self.bytes_per_line = config.hex_bytes_per_line
            self.group_size = config.hex_group_size
            self.show_ascii = config.hex_show_ascii
            self.show_title = config.hex_show_title

    def render(self, record: OmfRecord) -> List[str]:
        """
        Render one record.

        Raises:
            UnresolvedIndexError: If the record refers to an undefined entry
        """
        view = record.view
        if view is None:
            view = ModuleState().view()

        lines = [f"Record type {record.record_type:02X}h length {record.record_length}"]
        data = record.data

        if isinstance(data, TranslatorHeader):
            lines.append("Translator Header:")
            lines.append(f"    Name: {data.name}")
        elif isinstance(data, Comment):
            lines.append(
                "Comment - "
                f"{'no purge ' if data.comment_type.no_purge else ''}"
                f"{'no list ' if data.comment_type.no_list else ''}"
                f"class {data.comment_class:02X}"
            )
            lines.extend(self._dump(data.comment_bytes))
        elif isinstance(data, ModuleEnd):
            lines.append(f"Module End{' (MAIN)' if data.main else ''}")
            if data.start is not None:
                s = data.start
                lines.append(
                    f"    End data: {s.end_data:02X}, frame: {s.frame_datum:02X}, "
                    f"target: {s.target_datum:02X}, displacement: {s.target_displacement:04X}"
                )
        elif isinstance(data, ExternalNames):
            lines.append("External Names Definition")
            for i, ext in enumerate(data.names):
                lines.append(f"    {i:<4} {ext.name} type {ext.type_index}")
        elif isinstance(data, PublicNames):
            lines.extend(self._render_public_names(data, view))
        elif isinstance(data, ListOfNames):
            lines.append("List of Names")
            for i, name in enumerate(data.names, start=1):
                lines.append(f"    {i:<4} {name}")
        elif isinstance(data, SegmentDefinition):
            lines.extend(self._render_segment(data.segment, view))
        elif isinstance(data, GroupDefinition):
            group = data.group
            lines.append(
                f"Group Definition - {view.resolve_name(group.group_name_index)} "
                f"({group.group_name_index})"
            )
            lines.append("    Segments:")
            for i, component in enumerate(group.components):
                lines.append(
                    f"        {i:<4} {view.segment_name(component.segment_definition)} "
                    f"({component.segment_definition})"
                )
        elif isinstance(data, LogicalEnumeratedData):
            lines.append(
                f"Logical Enumerated Data - {view.segment_name(data.segment_index)} "
                f"({data.segment_index}) offset {data.enumerated_data_offset:04X}h"
            )
            lines.extend(self._dump(data.data))
        elif isinstance(data, UnknownRecord):
            lines.append("Unknown Data")
            lines.extend(self._dump(data.data))
        else:
            raise TypeError(f"Unsupported record payload {type(data).__name__}")

        return lines

    def render_text(self, record: OmfRecord) -> str:
        """Render one record as a newline-joined block."""
        return '\n'.join(self.render(record))

    def _dump(self, data: bytes) -> List[str]:
        return hex_dump_lines(
            data,
            bytes_per_line=self.bytes_per_line,
            group_size=self.group_size,
            show_ascii=self.show_ascii,
            show_title=self.show_title,
        )

    def _render_public_names(self, data: PublicNames, view: ModuleView) -> List[str]:
        lines = ["Public Names Definition"]
        if data.base_group_index == 0 and data.base_segment_index == 0:
            lines.append(f"    Base Frame: {data.base_frame:04X}")
        else:
            if data.base_group_index == 0:
                lines.append("    Base Group: None")
            else:
                lines.append(
                    f"    Base Group: {view.group_name(data.base_group_index)} "
                    f"({data.base_group_index})"
                )
            if data.base_segment_index == 0:
                # Group-relative names with no segment carry an explicit frame
                lines.append(f"    Base Frame: {data.base_frame:04X}")
            else:
                lines.append(
                    f"    Base Segment: {view.segment_name(data.base_segment_index)} "
                    f"({data.base_segment_index})"
                )
        lines.append("    Names:")
        for pub in data.names:
            lines.append(f"        {pub.name} offset {pub.public_offset:04X} type {pub.type_index}")
        return lines

    def _render_segment(self, segment: SegmentInfo, view: ModuleView) -> List[str]:
        attrs = segment.attributes
        lines = [
            f"Segment Definition - {view.resolve_name(segment.segment_name_index)} "
            f"({segment.segment_name_index})",
            f"    Attributes: {ALIGNMENT_NAMES[attrs.alignment]}; "
            f"{COMBINATION_NAMES[attrs.combination]} combination"
            f"{'; BIG' if attrs.big else ''}{'; USE32' if attrs.use32 else ''}",
        ]
        if attrs.absolute_address is not None:
            lines.append(
                f"    Absolute frame: {attrs.absolute_address.frame_number:04X} "
                f"offset {attrs.absolute_address.offset:02X}"
            )
        lines.append(f"    Segment length: {segment.segment_length:04X}")
        lines.append(
            f"    Class name: {view.resolve_name(segment.class_name_index)} "
            f"({segment.class_name_index})"
        )
        lines.append(
            f"    Overlay name: {view.resolve_name(segment.overlay_name_index)} "
            f"({segment.overlay_name_index})"
        )
        return lines


def render_record(record: OmfRecord, config: Optional['Config'] = None) -> List[str]:
    """Render a single record with a one-off renderer."""
    return RecordRenderer(config).render(record)


def render_module_tables(tables: ModuleState) -> List[str]:
    """
    Render the accumulated names, segments and groups tables.

    Segment and group names that cannot be resolved are shown as '?'.
    """
    view = tables.view()
    lines = [f"Names ({len(tables.names)}):"]
    for i, name in enumerate(tables.names, start=1):
        lines.append(f"    {i:<4} {name}")

    lines.append(f"Segments ({len(tables.segments)}):")
    for i, seg in enumerate(tables.segments, start=1):
        name = _name_or_placeholder(view, seg.segment_name_index)
        lines.append(
            f"    {i:<4} {name} length {seg.segment_length:04X} "
            f"class {_name_or_placeholder(view, seg.class_name_index)}"
        )

    lines.append(f"Groups ({len(tables.groups)}):")
    for i, group in enumerate(tables.groups, start=1):
        members = ', '.join(
            _segment_name_or_placeholder(view, c.segment_definition) for c in group.components
        )
        lines.append(f"    {i:<4} {_name_or_placeholder(view, group.group_name_index)}: {members}")
    return lines


def _name_or_placeholder(view: ModuleView, index: int) -> str:
    if 0 < index <= view.names_count:
        return view.resolve_name(index)
    return '?'


def _segment_name_or_placeholder(view: ModuleView, index: int) -> str:
    if 0 < index <= view.segments_count:
        return _name_or_placeholder(view, view.resolve_segment(index).segment_name_index)
    return '?'
