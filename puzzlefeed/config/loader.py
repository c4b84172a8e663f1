"""Configuration and data file loaders."""

from pathlib import Path
from typing import Any, List, Optional, Set

import yaml
from pydantic import ValidationError

from ..models import Puzzle, UserProfile
from .models import ConfigModel


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.home() / ".config" / "puzzlefeed" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def data_root(self) -> Path:
        """Get data root path."""
        return Path(self.config.data_root).expanduser()

    def resolve_data_path(self, path: Path) -> Path:
        """Resolve a relative data file against the data root."""
        path = Path(path).expanduser()
        if path.is_absolute() or path.exists():
            return path
        return self.data_root / path


def _read_yaml(path: Path, kind: str) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {kind.lower()} file: {e}")


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    config_data = _read_yaml(config_path, "Config")
    if config_data is None:
        config_data = {}

    try:
        return ConfigModel(**config_data)
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def load_catalog(catalog_path: Path) -> List[Puzzle]:
    """
    Load puzzle candidates from a YAML or JSON file.

    The file holds either a list of puzzle documents or a mapping with a
    ``puzzles`` list. Invalid entries are skipped.
    """
    data = _read_yaml(catalog_path, "Catalog")

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("puzzles") or []
    if not isinstance(data, list):
        raise ValueError(f"Catalog must be a list of puzzles: {catalog_path}")

    puzzles = []
    for entry in data:
        try:
            puzzles.append(Puzzle.model_validate(entry))
        except ValidationError as e:
            name = entry.get("id", "unknown") if isinstance(entry, dict) else "unknown"
            print(f"Skipping invalid puzzle {name}: {e}")

    return puzzles


def load_profile(profile_path: Path) -> UserProfile:
    """Load a user profile document from YAML or JSON."""
    data = _read_yaml(profile_path, "Profile")
    if data is None:
        data = {}

    try:
        return UserProfile.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid profile: {e}")


def save_profile(profile: UserProfile, profile_path: Path) -> None:
    """Save a user profile document to YAML."""
    profile_path.parent.mkdir(parents=True, exist_ok=True)

    with open(profile_path, "w") as f:
        yaml.safe_dump(profile.to_document(), f, default_flow_style=False, sort_keys=False)


def load_completed_ids(completed_path: Path) -> Set[str]:
    """Load completed puzzle IDs from a YAML list or a plain text file (one per line)."""
    if not completed_path.exists():
        raise FileNotFoundError(f"Completed IDs file not found: {completed_path}")

    text = completed_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = None

    if isinstance(data, dict):
        data = data.get("completed") or data.get("completedGames") or []
    if isinstance(data, list):
        return {str(item) for item in data if item is not None}

    return {line.strip() for line in text.splitlines() if line.strip()}
