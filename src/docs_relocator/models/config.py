"""Configuration model for the document relocator."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from ..exceptions import ConfigurationError

WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)

# JSON Schema for configuration files
CONFIG_SCHEMA = {
    "type": "object",
    "required": ["root_directory", "database_path"],
    "additionalProperties": False,
    "properties": {
        "root_directory": {
            "type": "string",
            "minLength": 1,
            "description": "Share under which the year folders live"
        },
        "database_path": {
            "type": "string",
            "minLength": 1,
            "description": "SQLite database holding documents and the issue log"
        },
        "batch_size": {"type": "integer", "minimum": 1},
        "max_workers": {"type": "integer", "minimum": 1, "maximum": 64},
        "cutoff_weekday": {"type": "integer", "minimum": 0, "maximum": 6},
        "cutoff_hour": {"type": "integer", "minimum": 0, "maximum": 23},
        "account_levels": {
            "type": "array",
            "items": {"type": "integer"},
            "minItems": 1
        },
        "year_folder_prefix": {"type": "string"},
        "file_extension": {"type": "string", "pattern": "^\\."}
    }
}


@dataclass
class RelocationConfig:
    """Main configuration model."""
    root_directory: Path
    database_path: Path
    batch_size: int = 50
    max_workers: int = 4
    cutoff_weekday: int = 0  # Monday
    cutoff_hour: int = 20
    account_levels: List[int] = field(default_factory=lambda: [998, 999])
    year_folder_prefix: str = "DOCS"
    file_extension: str = ".zip"

    def __post_init__(self):
        self.root_directory = Path(self.root_directory)
        self.database_path = Path(self.database_path)

    def validate(self) -> None:
        """Validate field values against the configuration schema."""
        validate_config_data(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_directory": str(self.root_directory),
            "database_path": str(self.database_path),
            "batch_size": self.batch_size,
            "max_workers": self.max_workers,
            "cutoff_weekday": self.cutoff_weekday,
            "cutoff_hour": self.cutoff_hour,
            "account_levels": list(self.account_levels),
            "year_folder_prefix": self.year_folder_prefix,
            "file_extension": self.file_extension,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelocationConfig":
        validate_config_data(data)
        return cls(**data)


def validate_config_data(data: Dict[str, Any]) -> None:
    """Validate raw configuration data, raising ConfigurationError."""
    try:
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        location = ".".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigurationError(f"Invalid configuration at {location}: {e.message}") from e


def parse_weekday(value: str) -> int:
    """Convert a weekday name (or unambiguous prefix) or number to 0-6."""
    text = value.strip().lower()
    if text.isdigit():
        number = int(text)
        if 0 <= number <= 6:
            return number
        raise ConfigurationError(f"Weekday number must be 0-6, got {value!r}")

    matches = [i for i, name in enumerate(WEEKDAY_NAMES) if text and name.startswith(text)]
    if len(matches) != 1:
        raise ConfigurationError(f"Unknown weekday: {value!r}")
    return matches[0]


def load_config(config_path: Path) -> RelocationConfig:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration {config_path} is not valid JSON: {e}") from e

    return RelocationConfig.from_dict(config_data)


def save_config(config: RelocationConfig, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = RelocationConfig(
        root_directory=Path("/path/to/share"),
        database_path=Path("/path/to/documents.db")
    )
    save_config(default_config, config_path)
