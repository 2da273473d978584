"""
OMF record reader.

Reads a stream of back-to-back OMF records. Every record is laid out as

    type    1 byte
    length  2 bytes, little endian; counts the payload plus the checksum
    payload length - 1 bytes
    checksum 1 byte (not validated)

The reader pulls one record per request, decodes its payload according to
the type byte and, for LNAMES/SEGDEF/GRPDEF, appends to the module tables
that later records index into.
"""

from typing import BinaryIO, Callable, Dict, Iterator, Optional, Union

from ..errors import (
    LengthMismatchError,
    OmfError,
    RecordValueError,
    TruncatedRecordError,
)
from ..io.binary_stream import BinaryStream
from .module_state import ModuleState
from .structures import (
    AbsoluteSegmentAddress,
    Comment,
    CommentType,
    ExternalName,
    ExternalNames,
    GroupComponent,
    GroupDefinition,
    GroupInfo,
    ListOfNames,
    LogicalEnumeratedData,
    ModuleEnd,
    ModuleStart,
    OmfRecord,
    PublicName,
    PublicNames,
    RecordData,
    SegmentAlignment,
    SegmentAttributes,
    SegmentCombination,
    SegmentDefinition,
    SegmentInfo,
    TranslatorHeader,
    UnknownRecord,
    COMMENT_NO_LIST,
    COMMENT_NO_PURGE,
    COMENT,
    EXTDEF,
    GRPDEF,
    LEDATA,
    LNAMES,
    MODEND,
    MODEND_MAIN,
    MODEND_START,
    PUBDEF,
    SEGDEF,
    SEGDEF_BIG,
    SEGDEF_USE32,
    THEADR,
)

# Bytes of a record header (type + length)
RECORD_HEADER_SIZE = 3


class OmfReader:
    """
    Pull-based reader producing OmfRecord objects from an OMF byte stream.

    The reader is a one-shot iterator: once the stream is exhausted, or once
    any record fails to decode, it produces nothing further. Errors are
    raised as OmfError subclasses carrying the ordinal, type and offset of
    the failing record.

    Attributes:
        state: Module tables accumulated so far
    """

    def __init__(
        self,
        source: Union[bytes, bytearray, BinaryIO, BinaryStream],
        encoding: str = 'utf-8',
        alias_comment_flags: bool = False,
    ):
        """
        Initialize the reader.

        Args:
            source: Raw bytes, a binary file object, or a BinaryStream
            encoding: Text encoding of length-prefixed names
            alias_comment_flags: Derive COMENT no_list from bit 7 (like
                no_purge) instead of bit 6
        """
        if isinstance(source, BinaryStream):
            self._stream = source
        else:
            self._stream = BinaryStream(source, encoding)
        self.encoding = encoding
        self.alias_comment_flags = alias_comment_flags
        self.state = ModuleState()

        self._ordinal = 0
        self._offset = 0
        self._done = False

        self._parsers: Dict[int, Callable[[BinaryStream, int], RecordData]] = {
            THEADR: self._read_translator_header,
            COMENT: self._read_comment,
            MODEND: self._read_module_end,
            EXTDEF: self._read_external_names,
            PUBDEF: self._read_public_names,
            LNAMES: self._read_list_of_names,
            SEGDEF: self._read_segment_definition,
            GRPDEF: self._read_group_definition,
            LEDATA: self._read_logical_enumerated_data,
        }

    # ========== Iteration ==========

    def __iter__(self) -> Iterator[OmfRecord]:
        return self

    def __next__(self) -> OmfRecord:
        record = self.read_record()
        if record is None:
            raise StopIteration
        return record

    @property
    def done(self) -> bool:
        """True once the stream is exhausted or a record failed."""
        return self._done

    def read_record(self) -> Optional[OmfRecord]:
        """
        Read the next record.

        Returns:
            The decoded record, or None at a clean end of stream

        Raises:
            OmfError: If the record is truncated or malformed
        """
        if self._done:
            return None

        ordinal = self._ordinal
        offset = self._offset
        record_type: Optional[int] = None
        try:
            record_type = self._stream.try_read_byte()
            if record_type is None:
                self._done = True
                return None

            record_length = self._stream.read_uint16()
            body = self._stream.read_bytes(record_length)
            record = self._decode(record_type, record_length, body, ordinal, offset)
        except OmfError as e:
            self._done = True
            raise e.locate(ordinal, record_type, offset)

        self._ordinal += 1
        self._offset += RECORD_HEADER_SIZE + record_length
        return record

    # ========== Record decoding ==========

    def _decode(self, record_type: int, record_length: int, body: bytes,
                ordinal: int, offset: int) -> OmfRecord:
        """Decode one record body and commit its table updates."""
        if record_length < 1:
            raise LengthMismatchError("declared length 0 leaves no room for the checksum")

        stream = BinaryStream(body, self.encoding)
        parser = self._parsers.get(record_type, self._read_unknown)
        try:
            data = parser(stream, record_length)
        except TruncatedRecordError as e:
            raise LengthMismatchError(
                f"payload overruns declared length {record_length}"
            ) from e

        if stream.remaining != 1:
            raise LengthMismatchError(
                f"payload used {stream.position} of {record_length - 1} declared bytes"
            )
        checksum = stream.read_byte()

        # Tables change only once the whole record has decoded
        if isinstance(data, ListOfNames):
            self.state.append_names(data.names)
        elif isinstance(data, SegmentDefinition):
            self.state.append_segment(data.segment)
        elif isinstance(data, GroupDefinition):
            self.state.append_group(data.group)

        return OmfRecord(
            record_type=record_type,
            record_length=record_length,
            data=data,
            checksum=checksum,
            ordinal=ordinal,
            offset=offset,
            view=self.state.view(),
        )

    @staticmethod
    def _fixed_size(record_length: int, overhead: int, what: str) -> int:
        """Size of a trailing byte block occupying length - overhead bytes."""
        size = record_length - overhead
        if size < 0:
            raise LengthMismatchError(
                f"declared length {record_length} too small for {what}"
            )
        return size

    def _read_translator_header(self, stream: BinaryStream, record_length: int) -> TranslatorHeader:
        return TranslatorHeader(name=stream.read_pstring())

    def _read_comment(self, stream: BinaryStream, record_length: int) -> Comment:
        flags = stream.read_byte()
        no_list_bit = COMMENT_NO_PURGE if self.alias_comment_flags else COMMENT_NO_LIST
        comment_type = CommentType(
            no_purge=bool(flags & COMMENT_NO_PURGE),
            no_list=bool(flags & no_list_bit),
        )
        comment_class = stream.read_byte()
        size = self._fixed_size(record_length, 3, "comment header")
        return Comment(
            comment_type=comment_type,
            comment_class=comment_class,
            comment_bytes=stream.read_bytes(size),
        )

    def _read_module_end(self, stream: BinaryStream, record_length: int) -> ModuleEnd:
        module_type = stream.read_byte()
        start = None
        if module_type & MODEND_START:
            start = ModuleStart(
                end_data=stream.read_byte(),
                frame_datum=stream.read_byte(),
                target_datum=stream.read_byte(),
                target_displacement=stream.read_uint16(),
            )
        return ModuleEnd(main=bool(module_type & MODEND_MAIN), start=start)

    def _read_external_names(self, stream: BinaryStream, record_length: int) -> ExternalNames:
        names = []
        budget = record_length - 1
        start = stream.position
        while stream.position - start < budget:
            name = stream.read_pstring()
            type_index = stream.read_byte()
            names.append(ExternalName(name=name, type_index=type_index))
        return ExternalNames(names=tuple(names))

    def _read_public_names(self, stream: BinaryStream, record_length: int) -> PublicNames:
        base_group_index = stream.read_byte()
        base_segment_index = stream.read_byte()
        base_frame = 0
        if base_segment_index == 0:
            base_frame = stream.read_uint16()

        names = []
        budget = record_length - 3 - (2 if base_segment_index == 0 else 0)
        start = stream.position
        while stream.position - start < budget:
            name = stream.read_pstring()
            public_offset = stream.read_uint16()
            type_index = stream.read_byte()
            names.append(PublicName(name=name, public_offset=public_offset, type_index=type_index))

        return PublicNames(
            base_group_index=base_group_index,
            base_segment_index=base_segment_index,
            base_frame=base_frame,
            names=tuple(names),
        )

    def _read_list_of_names(self, stream: BinaryStream, record_length: int) -> ListOfNames:
        names = []
        budget = record_length - 1
        start = stream.position
        while stream.position - start < budget:
            names.append(stream.read_pstring())
        return ListOfNames(names=tuple(names))

    def _read_segment_definition(self, stream: BinaryStream, record_length: int) -> SegmentDefinition:
        acbp = stream.read_byte()
        try:
            alignment = SegmentAlignment(acbp >> 5)
        except ValueError:
            raise RecordValueError(f"invalid segment alignment {acbp >> 5}") from None
        try:
            combination = SegmentCombination((acbp >> 2) & 3)
        except ValueError:
            raise RecordValueError(f"invalid segment combination {(acbp >> 2) & 3}") from None

        absolute_address = None
        if alignment == SegmentAlignment.ABSOLUTE_SEGMENT:
            absolute_address = AbsoluteSegmentAddress(
                frame_number=stream.read_uint16(),
                offset=stream.read_byte(),
            )

        attributes = SegmentAttributes(
            alignment=alignment,
            combination=combination,
            big=bool(acbp & SEGDEF_BIG),
            use32=bool(acbp & SEGDEF_USE32),
            absolute_address=absolute_address,
        )
        return SegmentDefinition(segment=SegmentInfo(
            attributes=attributes,
            segment_length=stream.read_uint16(),
            segment_name_index=stream.read_byte(),
            class_name_index=stream.read_byte(),
            overlay_name_index=stream.read_byte(),
        ))

    def _read_group_definition(self, stream: BinaryStream, record_length: int) -> GroupDefinition:
        group_name_index = stream.read_byte()
        components = []
        budget = record_length - 2
        start = stream.position
        while stream.position - start < budget:
            index = stream.read_byte()
            segment_definition = stream.read_byte()
            components.append(GroupComponent(index=index, segment_definition=segment_definition))
        return GroupDefinition(group=GroupInfo(
            group_name_index=group_name_index,
            components=tuple(components),
        ))

    def _read_logical_enumerated_data(self, stream: BinaryStream,
                                      record_length: int) -> LogicalEnumeratedData:
        segment_index = stream.read_byte()
        enumerated_data_offset = stream.read_uint16()
        size = self._fixed_size(record_length, 4, "LEDATA header")
        return LogicalEnumeratedData(
            segment_index=segment_index,
            enumerated_data_offset=enumerated_data_offset,
            data=stream.read_bytes(size),
        )

    def _read_unknown(self, stream: BinaryStream, record_length: int) -> UnknownRecord:
        return UnknownRecord(data=stream.read_bytes(record_length - 1))


def read_records(source: Union[bytes, bytearray, BinaryIO], **kwargs) -> Iterator[OmfRecord]:
    """Iterate over all records of an OMF byte stream."""
    return iter(OmfReader(source, **kwargs))
