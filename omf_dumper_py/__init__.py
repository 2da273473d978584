"""
OMF Dumper
A tool for decoding relocatable Object Module Format (OMF) object files.
"""

__version__ = "0.1.0"
__author__ = "OMF Dumper contributors"

from .config import Config
from .errors import OmfError
from .omf.reader import OmfReader, read_records
from .omf.module_state import ModuleState
from .output.renderer import RecordRenderer, render_record

__all__ = [
    'Config',
    'OmfError',
    'OmfReader',
    'read_records',
    'ModuleState',
    'RecordRenderer',
    'render_record',
    '__version__',
]
