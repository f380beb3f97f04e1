"""
Configuration management for build-lens.

Settings live in ~/.build-lens/config.json. The BUILD_LENS_DATA
environment variable (also read from a project .env file) overrides
the snapshot location.
"""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Auto-load .env from the working directory
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


CONFIG_PATH = Path.home() / ".build-lens" / "config.json"

DATA_PATH_ENV = "BUILD_LENS_DATA"

DEFAULT_LENS_CONFIG = {
    "data_path": ".data/sample.json",
    "global_name": "__data",
    "verbose": False,
}


def _filter_dataclass_fields(data: dict[str, Any], cls: type) -> dict[str, Any]:
    """Filter dict to only include fields that exist in the dataclass."""
    valid_fields = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in valid_fields}


@dataclass
class LensConfig:
    """
    build-lens user configuration.

    data_path: snapshot exported by the build (relative to the cwd)
    global_name: window global the delivery script assigns the snapshot to
    verbose: debug logging for the inspector script
    """

    data_path: str = ".data/sample.json"
    global_name: str = "__data"
    verbose: bool = False

    @property
    def resolved_data_path(self) -> Path:
        """Absolute snapshot path, with the environment override applied."""
        path = Path(os.getenv(DATA_PATH_ENV) or self.data_path).expanduser()
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    @classmethod
    def load(cls, path: Path | None = None) -> "LensConfig":
        """
        Load config from file with defaults.

        Args:
            path: Optional config file path. Defaults to ~/.build-lens/config.json

        Returns:
            LensConfig instance with user settings merged with defaults
        """
        if path is None:
            path = CONFIG_PATH

        config = DEFAULT_LENS_CONFIG.copy()

        if path.exists():
            try:
                user_config = json.loads(path.read_text())
                config.update(user_config)
            except (json.JSONDecodeError, OSError):
                # Use defaults on error
                pass

        return cls(**_filter_dataclass_fields(config, cls))

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(
                {
                    "data_path": self.data_path,
                    "global_name": self.global_name,
                    "verbose": self.verbose,
                },
                f,
                indent=2,
            )
