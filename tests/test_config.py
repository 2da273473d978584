"""
Tests for configuration loading.
"""

import json

from omf_dumper_py.config import Config


def test_bundled_config_matches_defaults():
    assert Config.load(None) == Config()


def test_missing_file_gives_defaults(tmp_path):
    assert Config.load(tmp_path / "nope.json") == Config()


def test_camel_case_keys_and_unknown_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "aliasCommentFlags": True,
        "hexBytesPerLine": 8,
        "textEncoding": "latin-1",
        "somethingElse": 1,
    }))
    config = Config.load(path)
    assert config.alias_comment_flags is True
    assert config.hex_bytes_per_line == 8
    assert config.text_encoding == "latin-1"
    assert not hasattr(config, "something_else")


def test_save_writes_camel_case(tmp_path):
    path = tmp_path / "out.json"
    Config(show_module_tables=True).save(path)
    data = json.loads(path.read_text())
    assert data["showModuleTables"] is True
    assert Config.load(path).show_module_tables is True
