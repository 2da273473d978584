"""
Name, segment and group tables accumulated while reading an OMF module.

OMF records refer to earlier definitions through small 1-based indices:
LNAMES appends names, SEGDEF appends segments, GRPDEF appends groups, and
later records (SEGDEF, GRPDEF, PUBDEF, LEDATA) resolve indices into those
tables. The tables only ever grow, so a snapshot of a ModuleState is simply
the state plus the three table lengths at snapshot time.
"""

from typing import Iterable, List, Sequence, TypeVar

from ..errors import UnresolvedIndexError
from .structures import GroupInfo, SegmentInfo

T = TypeVar('T')


def _lookup(table: Sequence[T], size: int, index: int, table_name: str) -> T:
    if index <= 0 or index > size:
        raise UnresolvedIndexError(table_name, index, size)
    return table[index - 1]


class ModuleState:
    """
    Session-wide accumulator of the names, segments and groups tables.

    Only OmfReader appends to a ModuleState. Records hold ModuleView
    snapshots instead of the state itself.
    """

    def __init__(self):
        self.names: List[str] = []
        self.segments: List[SegmentInfo] = []
        self.groups: List[GroupInfo] = []

    def append_names(self, names: Iterable[str]) -> int:
        """Append names in order; returns the new table length."""
        self.names.extend(names)
        return len(self.names)

    def append_segment(self, info: SegmentInfo) -> int:
        """Append a segment; returns its 1-based index."""
        self.segments.append(info)
        return len(self.segments)

    def append_group(self, info: GroupInfo) -> int:
        """Append a group; returns its 1-based index."""
        self.groups.append(info)
        return len(self.groups)

    def resolve_name(self, index: int) -> str:
        return _lookup(self.names, len(self.names), index, "name")

    def resolve_segment(self, index: int) -> SegmentInfo:
        return _lookup(self.segments, len(self.segments), index, "segment")

    def resolve_group(self, index: int) -> GroupInfo:
        return _lookup(self.groups, len(self.groups), index, "group")

    def view(self) -> 'ModuleView':
        """Read-only snapshot of the tables as they stand now."""
        return ModuleView(self, len(self.names), len(self.segments), len(self.groups))


class ModuleView:
    """
    Read-only window over a ModuleState, bounded to the table lengths
    captured when the view was taken.

    Entries appended after the snapshot are invisible, which keeps a
    record's rendering independent of anything decoded after it.
    """

    __slots__ = ('_state', 'names_count', 'segments_count', 'groups_count')

    def __init__(self, state: ModuleState, names_count: int,
                 segments_count: int, groups_count: int):
        self._state = state
        self.names_count = names_count
        self.segments_count = segments_count
        self.groups_count = groups_count

    @property
    def names(self) -> List[str]:
        return self._state.names[:self.names_count]

    @property
    def segments(self) -> List[SegmentInfo]:
        return self._state.segments[:self.segments_count]

    @property
    def groups(self) -> List[GroupInfo]:
        return self._state.groups[:self.groups_count]

    def resolve_name(self, index: int) -> str:
        return _lookup(self._state.names, self.names_count, index, "name")

    def resolve_segment(self, index: int) -> SegmentInfo:
        return _lookup(self._state.segments, self.segments_count, index, "segment")

    def resolve_group(self, index: int) -> GroupInfo:
        return _lookup(self._state.groups, self.groups_count, index, "group")

    def segment_name(self, index: int) -> str:
        """Name of the segment at a 1-based segment index."""
        return self.resolve_name(self.resolve_segment(index).segment_name_index)

    def group_name(self, index: int) -> str:
        """Name of the group at a 1-based group index."""
        return self.resolve_name(self.resolve_group(index).group_name_index)

    def __repr__(self) -> str:
        return (f"ModuleView(names={self.names_count}, segments={self.segments_count}, "
                f"groups={self.groups_count})")
