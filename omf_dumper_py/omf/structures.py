"""
OMF (Object Module Format) record structures.

These dataclasses represent the records found in relocatable OMF object
files. Each supported record type has its own payload class; any other type
is carried as UnknownRecord. Payloads and records are frozen so they can be
shared freely once the reader has produced them.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from .module_state import ModuleView


# Record types
THEADR = 0x80   # Translator header
COMENT = 0x88   # Comment
MODEND = 0x8A   # Module end
EXTDEF = 0x8C   # External names definition
PUBDEF = 0x90   # Public names definition
LNAMES = 0x96   # List of names
SEGDEF = 0x98   # Segment definition
GRPDEF = 0x9A   # Group definition
LEDATA = 0xA0   # Logical enumerated data

RECORD_NAMES = {
    THEADR: "THEADR",
    COMENT: "COMENT",
    MODEND: "MODEND",
    EXTDEF: "EXTDEF",
    PUBDEF: "PUBDEF",
    LNAMES: "LNAMES",
    SEGDEF: "SEGDEF",
    GRPDEF: "GRPDEF",
    LEDATA: "LEDATA",
}

# Comment type flags
COMMENT_NO_PURGE = 0x80
COMMENT_NO_LIST = 0x40

# Module end attribute flags
MODEND_MAIN = 0x80
MODEND_START = 0x40

# Segment attribute (ACBP) byte layout
SEGDEF_BIG = 0x02
SEGDEF_USE32 = 0x01


class SegmentAlignment(IntEnum):
    """Segment alignment, bits 7-5 of the SEGDEF attribute byte."""
    ABSOLUTE_SEGMENT = 0
    RELOCATABLE_BYTE_ALIGNED = 1
    RELOCATABLE_WORD_ALIGNED = 2
    RELOCATABLE_PARAGRAPH_ALIGNED = 3
    RELOCATABLE_PAGE_ALIGNED = 4
    RELOCATABLE_DWORD_ALIGNED = 5


ALIGNMENT_NAMES = {
    SegmentAlignment.ABSOLUTE_SEGMENT: "absolute segment",
    SegmentAlignment.RELOCATABLE_BYTE_ALIGNED: "relocatable, byte aligned",
    SegmentAlignment.RELOCATABLE_WORD_ALIGNED: "relocatable, word aligned",
    SegmentAlignment.RELOCATABLE_PARAGRAPH_ALIGNED: "relocatable, paragraph aligned",
    SegmentAlignment.RELOCATABLE_PAGE_ALIGNED: "relocatable, page aligned",
    SegmentAlignment.RELOCATABLE_DWORD_ALIGNED: "relocatable, double word aligned",
}


class SegmentCombination(IntEnum):
    """Segment combination, bits 3-2 of the SEGDEF attribute byte."""
    PRIVATE = 0
    PUBLIC = 2
    PUBLIC2 = 4
    STACK = 5
    COMMON = 6
    PUBLIC3 = 7


COMBINATION_NAMES = {
    SegmentCombination.PRIVATE: "private",
    SegmentCombination.PUBLIC: "public",
    SegmentCombination.PUBLIC2: "public",
    SegmentCombination.STACK: "stack",
    SegmentCombination.COMMON: "common",
    SegmentCombination.PUBLIC3: "public",
}


# ============================================================
# Shared structures
# ============================================================

@dataclass(frozen=True)
class AbsoluteSegmentAddress:
    """Frame/offset pair present only for absolute segments."""
    frame_number: int = 0
    offset: int = 0


@dataclass(frozen=True)
class SegmentAttributes:
    """Decoded SEGDEF attribute byte."""
    alignment: SegmentAlignment = SegmentAlignment.RELOCATABLE_BYTE_ALIGNED
    combination: SegmentCombination = SegmentCombination.PRIVATE
    big: bool = False
    use32: bool = False
    absolute_address: Optional[AbsoluteSegmentAddress] = None


@dataclass(frozen=True)
class GroupComponent:
    """One (component index, segment definition index) pair of a GRPDEF."""
    index: int = 0
    segment_definition: int = 0


@dataclass(frozen=True)
class SegmentInfo:
    """Entry of the module segment table."""
    attributes: SegmentAttributes = field(default_factory=SegmentAttributes)
    segment_length: int = 0
    segment_name_index: int = 0
    class_name_index: int = 0
    overlay_name_index: int = 0


@dataclass(frozen=True)
class GroupInfo:
    """Entry of the module group table."""
    group_name_index: int = 0
    components: Tuple[GroupComponent, ...] = ()


@dataclass(frozen=True)
class CommentType:
    no_purge: bool = False
    no_list: bool = False


@dataclass(frozen=True)
class ModuleStart:
    """Start address of a main module (MODEND with the start bit set)."""
    end_data: int = 0
    frame_datum: int = 0
    target_datum: int = 0
    target_displacement: int = 0


@dataclass(frozen=True)
class ExternalName:
    name: str = ""
    type_index: int = 0


@dataclass(frozen=True)
class PublicName:
    name: str = ""
    public_offset: int = 0
    type_index: int = 0


# ============================================================
# Record payloads
# ============================================================

@dataclass(frozen=True)
class TranslatorHeader:
    """THEADR (80h)."""
    name: str = ""


@dataclass(frozen=True)
class Comment:
    """COMENT (88h)."""
    comment_type: CommentType = field(default_factory=CommentType)
    comment_class: int = 0
    comment_bytes: bytes = b''


@dataclass(frozen=True)
class ModuleEnd:
    """MODEND (8Ah)."""
    main: bool = False
    start: Optional[ModuleStart] = None


@dataclass(frozen=True)
class ExternalNames:
    """EXTDEF (8Ch)."""
    names: Tuple[ExternalName, ...] = ()


@dataclass(frozen=True)
class PublicNames:
    """
    PUBDEF (90h).

    base_frame is only meaningful when base_segment_index is 0; a zero
    base_group_index means the names are not relative to any group.
    """
    base_group_index: int = 0
    base_segment_index: int = 0
    base_frame: int = 0
    names: Tuple[PublicName, ...] = ()


@dataclass(frozen=True)
class ListOfNames:
    """LNAMES (96h)."""
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SegmentDefinition:
    """SEGDEF (98h)."""
    segment: SegmentInfo = field(default_factory=SegmentInfo)


@dataclass(frozen=True)
class GroupDefinition:
    """GRPDEF (9Ah)."""
    group: GroupInfo = field(default_factory=GroupInfo)


@dataclass(frozen=True)
class LogicalEnumeratedData:
    """LEDATA (A0h)."""
    segment_index: int = 0
    enumerated_data_offset: int = 0
    data: bytes = b''


@dataclass(frozen=True)
class UnknownRecord:
    """Any record type without a dedicated parser."""
    data: bytes = b''


RecordData = Union[
    TranslatorHeader,
    Comment,
    ModuleEnd,
    ExternalNames,
    PublicNames,
    ListOfNames,
    SegmentDefinition,
    GroupDefinition,
    LogicalEnumeratedData,
    UnknownRecord,
]


@dataclass(frozen=True)
class OmfRecord:
    """
    A decoded OMF record.

    Attributes:
        record_type: Tag byte
        record_length: Declared length (payload plus checksum)
        data: Type specific payload
        checksum: Trailing checksum byte, read but not validated
        ordinal: 0-based position of the record in the stream
        offset: Stream offset of the tag byte
        view: Module tables as they stood once this record was decoded
    """
    record_type: int
    record_length: int
    data: RecordData
    checksum: int
    ordinal: int = 0
    offset: int = 0
    view: Optional['ModuleView'] = field(default=None, repr=False, compare=False)

    @property
    def type_name(self) -> str:
        """Mnemonic for the record type, or its hex value when unknown."""
        return RECORD_NAMES.get(self.record_type, f"{self.record_type:02X}h")
