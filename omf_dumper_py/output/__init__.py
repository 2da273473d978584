"""
Output generation module.
"""

from .hex_dump import hex_dump_lines
from .record_json import DumpJson, RecordJson
from .renderer import RecordRenderer, render_module_tables, render_record

__all__ = [
    'hex_dump_lines',
    'DumpJson',
    'RecordJson',
    'RecordRenderer',
    'render_module_tables',
    'render_record',
]
