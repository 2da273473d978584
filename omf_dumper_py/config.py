"""
Configuration handling for OMF Dumper.
"""

from dataclasses import dataclass, fields as dataclass_fields
from typing import Optional
import json
from pathlib import Path


@dataclass
class Config:
    """Configuration options for OMF Dumper."""

    # Decoding options
    text_encoding: str = "utf-8"
    alias_comment_flags: bool = False

    # Hex dump options
    hex_bytes_per_line: int = 16
    hex_group_size: int = 8
    hex_show_ascii: bool = True
    hex_show_title: bool = True

    # Output options
    show_module_tables: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'Config':
        """Load configuration from a JSON file."""
        if path is None:
            path = Path(__file__).parent / 'config.json'

        if not path.exists():
            return cls()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # Convert camelCase to snake_case
        converted = {}
        for key, value in data.items():
            snake_key = ''.join(
                f'_{c.lower()}' if c.isupper() else c
                for c in key
            ).lstrip('_')
            converted[snake_key] = value

        # Filter to only include valid fields
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in converted.items() if k in valid_fields}

        return cls(**filtered)

    def save(self, path: Path) -> None:
        """Save configuration to a JSON file (library API; the CLI only loads)."""
        # Convert snake_case to camelCase for compatibility
        data = {}
        for key, value in self.__dict__.items():
            camel_key = ''.join(
                word.capitalize() if i > 0 else word
                for i, word in enumerate(key.split('_'))
            )
            data[camel_key] = value

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
