#!/usr/bin/env python3
"""
OMF Dumper

Command-line interface for dumping relocatable OMF object files.

Usage:
    omf-dumper [--json] [--tables] [--config PATH] <object-file>
    omf-dumper -h | --help
    omf-dumper --version

Arguments:
    object-file        Path to the OMF object file (.obj)

Options:
    --json             Emit a JSON document instead of text blocks
    --tables           Print the names/segments/groups tables after the dump
    --config PATH      Path to config.json
    -h --help          Show this help message
    --version          Show version

Exit status is 0 when every record decoded and rendered, 1 otherwise.
"""

import sys
import argparse
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, TextIO, Tuple, Union

from . import __version__
from .config import Config
from .errors import OmfError
from .omf.reader import OmfReader
from .omf.structures import OmfRecord
from .output.record_json import DumpJson, RecordJson
from .output.renderer import RecordRenderer, render_module_tables


def create_reader(source: Union[bytes, BinaryIO], config: Config) -> OmfReader:
    """Create a record reader configured from config."""
    return OmfReader(
        source,
        encoding=config.text_encoding,
        alias_comment_flags=config.alias_comment_flags,
    )


def iter_rendered(reader: OmfReader, renderer: RecordRenderer) -> Iterator[Tuple[OmfRecord, List[str]]]:
    """
    Yield each record together with its rendered lines.

    Raises:
        OmfError: On the first record that fails to decode or render
    """
    for record in reader:
        try:
            lines = renderer.render(record)
        except OmfError as e:
            raise e.locate(record.ordinal, record.record_type, record.offset)
        yield record, lines


def dump_text(source: Union[bytes, BinaryIO], config: Config, out: TextIO) -> Optional[OmfError]:
    """
    Write every record as a text block, one blank line after each.

    Returns:
        The error that stopped decoding, or None on success
    """
    reader = create_reader(source, config)
    renderer = RecordRenderer(config)
    error = None
    try:
        for _, lines in iter_rendered(reader, renderer):
            out.write('\n'.join(lines))
            out.write('\n\n')
    except OmfError as e:
        error = e

    if config.show_module_tables:
        out.write('\n'.join(render_module_tables(reader.state)))
        out.write('\n')
    return error


def dump_json(source: Union[bytes, BinaryIO], config: Config) -> DumpJson:
    """
    Decode every record into a DumpJson document.

    Decode failures do not raise; they are recorded in DumpJson.Error
    alongside the records decoded before the failure.
    """
    reader = create_reader(source, config)
    renderer = RecordRenderer(config)
    doc = DumpJson()
    try:
        for record, lines in iter_rendered(reader, renderer):
            doc.Records.append(RecordJson.from_record(record, lines))
    except OmfError as e:
        doc.set_error(e)
    doc.set_tables(reader.state)
    return doc


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='omf-dumper',
        description="OMF Dumper - Decode and print the records of an OMF object file",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('file', help='OMF object file')
    parser.add_argument('--json', action='store_true', help='Emit JSON instead of text')
    parser.add_argument('--tables', action='store_true',
                        help='Print the module name/segment/group tables')
    parser.add_argument('--version', action='version', version=f'omf-dumper {__version__}')
    parser.add_argument('--config', type=str, help='Path to config.json')

    args = parser.parse_args(argv)

    # Load config
    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.is_file():
        print(f"ERROR: Config file not found: {config_path}", file=sys.stderr)
        return 1
    config = Config.load(config_path)
    if args.tables:
        config.show_module_tables = True

    path = Path(args.file)
    if not path.is_file():
        print(f"ERROR: File not found: {path}", file=sys.stderr)
        return 1

    try:
        with open(path, 'rb') as f:
            if args.json:
                doc = dump_json(f, config)
                print(doc.to_json())
                error_text = doc.Error
            else:
                error = dump_text(f, config, sys.stdout)
                error_text = error.describe() if error is not None else None
    except OSError as e:
        print(f"ERROR: Cannot read {path}: {e}", file=sys.stderr)
        return 1

    if error_text is not None:
        sys.stdout.flush()
        print(f"ERROR: {error_text}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
