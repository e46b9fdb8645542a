"""
Configuration Loader - YAML Loading with Validation.

Reads monitor settings from YAML, optionally overlaid by one or more
profiles from ``config/profiles/<name>.yaml``, and validates the result as
a MonitorConfig.

Settings may sit at the top level of a file or under a
``performance_monitor`` key, and may use either snake_case field names or
their camelCase aliases. Keys are normalized to field names before
overlaying, so ``fpsThreshold`` in a profile overrides ``fps_threshold``
in the base file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import yaml

from perf_telemetry.config.models import MonitorConfig

logger = logging.getLogger(__name__)

SECTION_KEY = "performance_monitor"
PROFILES_DIR = Path("config") / "profiles"

Profiles = Union[str, Sequence[str], None]


def _field_names() -> Dict[str, str]:
    """Every accepted key (field name or alias) mapped to its field name."""
    names: Dict[str, str] = {}
    for name, info in MonitorConfig.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


class ConfigLoader:
    """
    Loads monitor settings from YAML files.

    Example:
        loader = ConfigLoader(base_path=Path("."))
        config = loader.load("config/default.yaml", profile=["low_end"])
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        profiles_dir: Path = PROFILES_DIR,
    ) -> None:
        """
        Args:
            base_path: Directory relative paths are resolved against
            profiles_dir: Profile directory, relative to base_path
        """
        self._base_path = base_path or Path(".")
        self._profiles_dir = profiles_dir
        self._known_keys = _field_names()

    def load(
        self,
        config_path: Union[str, Path],
        profile: Profiles = None,
    ) -> MonitorConfig:
        """
        Load a config file and overlay profiles in the given order.

        Raises:
            FileNotFoundError: If the file or a profile doesn't exist
            ValueError: If a file doesn't hold a mapping
            ValidationError: If the merged settings are invalid
        """
        settings = self._settings(self._read(self._resolve(config_path)))
        for name in self._profile_names(profile):
            settings.update(self._settings(self._read(self._profile_path(name))))
        return MonitorConfig.model_validate(settings)

    def load_from_dict(self, config_dict: Mapping[str, Any]) -> MonitorConfig:
        """Validate settings already held in memory."""
        return MonitorConfig.model_validate(self._settings(config_dict))

    def _resolve(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self._base_path / p

    def _profile_path(self, name: str) -> Path:
        path = self._base_path / self._profiles_dir / f"{name}.yaml"
        if not path.exists():
            raise FileNotFoundError(f"Profile not found: {name} ({path})")
        return path

    @staticmethod
    def _profile_names(profile: Profiles) -> Sequence[str]:
        if not profile:
            return []
        if isinstance(profile, str):
            return [profile]
        return list(profile)

    @staticmethod
    def _read(path: Path) -> Mapping[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ValueError(
                f"{path} must contain a mapping, got {type(data).__name__}"
            )
        return data

    def _settings(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Unwrap the section and rename keys to field names."""
        section = data.get(SECTION_KEY, data)
        if not isinstance(section, Mapping):
            raise ValueError(f"'{SECTION_KEY}' must be a mapping")

        settings: Dict[str, Any] = {}
        for key, value in section.items():
            name = self._known_keys.get(key)
            if name is None:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            settings[name] = value
        return settings


def load_config(
    config_path: Union[str, Path],
    profile: Profiles = None,
    base_path: Optional[Path] = None,
) -> MonitorConfig:
    """Load configuration with a throwaway ConfigLoader."""
    return ConfigLoader(base_path=base_path).load(config_path, profile)
