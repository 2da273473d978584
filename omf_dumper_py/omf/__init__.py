"""
OMF core module: record structures, module tables and the record reader.
"""

from .module_state import ModuleState, ModuleView
from .reader import OmfReader, read_records
from .structures import *

__all__ = [
    'ModuleState',
    'ModuleView',
    'OmfReader',
    'read_records',
    # Re-export structures
    'OmfRecord',
    'SegmentInfo',
    'GroupInfo',
    'SegmentAlignment',
    'SegmentCombination',
]
