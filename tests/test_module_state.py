"""
Tests for the names/segments/groups tables.
"""

import pytest

from omf_dumper_py.errors import UnresolvedIndexError
from omf_dumper_py.omf.module_state import ModuleState
from omf_dumper_py.omf.structures import GroupComponent, GroupInfo, SegmentInfo


def test_append_returns_new_length():
    state = ModuleState()
    assert state.append_names(["CODE", "DATA"]) == 2
    assert state.append_names(["STACK"]) == 3
    assert state.append_segment(SegmentInfo(segment_name_index=1)) == 1
    assert state.append_group(GroupInfo(group_name_index=2)) == 1


def test_resolve_is_one_based():
    state = ModuleState()
    state.append_names(["CODE", "DATA"])
    assert state.resolve_name(1) == "CODE"
    assert state.resolve_name(2) == "DATA"


@pytest.mark.parametrize("resolver", ["resolve_name", "resolve_segment", "resolve_group"])
def test_index_zero_always_fails(resolver):
    state = ModuleState()
    state.append_names(["CODE"])
    state.append_segment(SegmentInfo(segment_name_index=1))
    state.append_group(GroupInfo(group_name_index=1))
    with pytest.raises(UnresolvedIndexError):
        getattr(state, resolver)(0)


def test_index_past_end_fails():
    state = ModuleState()
    state.append_names(["CODE"])
    with pytest.raises(IndexError) as excinfo:
        state.resolve_name(2)
    assert "name index 2" in str(excinfo.value)


def test_view_does_not_see_later_appends():
    state = ModuleState()
    state.append_names(["CODE"])
    view = state.view()
    state.append_names(["DATA"])
    assert view.resolve_name(1) == "CODE"
    assert view.names == ["CODE"]
    with pytest.raises(UnresolvedIndexError):
        view.resolve_name(2)
    assert state.resolve_name(2) == "DATA"


def test_view_segment_and_group_names():
    state = ModuleState()
    state.append_names(["_TEXT", "DGROUP"])
    state.append_segment(SegmentInfo(segment_name_index=1))
    state.append_group(GroupInfo(group_name_index=2, components=(GroupComponent(0xFF, 1),)))
    view = state.view()
    assert view.segment_name(1) == "_TEXT"
    assert view.group_name(1) == "DGROUP"
    assert view.resolve_group(1).components[0].segment_definition == 1
