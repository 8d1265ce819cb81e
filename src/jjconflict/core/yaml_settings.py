"""YAML configuration loading with include directive support."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

CONFIG_FILENAME = "jjconflict.yaml"

# Bootstrap logger - created lazily to avoid circular import
_bootstrap_logger = None


def _get_bootstrap_logger():
    """Get or create the logger used while config is loading."""
    global _bootstrap_logger
    if _bootstrap_logger is None:
        from jjconflict.core.log import ConsoleSink, Logger
        _bootstrap_logger = Logger(console=ConsoleSink(level="warn"))
        _bootstrap_logger.setup(log_root=Path.home(), session_name="bootstrap")
    return _bootstrap_logger


def _cleanup_bootstrap_logger():
    """Close the bootstrap logger once the real one is configured."""
    global _bootstrap_logger
    if _bootstrap_logger:
        _bootstrap_logger.close()
        _bootstrap_logger = None


def _cli_includes(argv: list[str]) -> list[str]:
    """Collect --include values from argv before pydantic parses it."""
    includes = []
    i = 1
    while i < len(argv):
        if argv[i] == "--include" and i + 1 < len(argv):
            includes.append(argv[i + 1])
            i += 1
        elif argv[i].startswith("--include="):
            includes.append(argv[i].split("=", 1)[1])
        i += 1
    return includes


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source with include: directives and --include.

    Deep merges, lowest priority first:
        package defaults < user config < project config < includes
    Each file may itself list further files under include:.
    """

    def __init__(
        self, settings_cls: type[BaseSettings], yaml_file=None
    ):
        """Initialize with CLI include processing.

        Args:
            settings_cls: The Settings class being initialized
            yaml_file: Optional extra file(s) to load last
        """
        includes = _cli_includes(sys.argv)

        base = yaml_file
        if base and includes:
            yaml_file = (
                [base] if isinstance(base, (str, os.PathLike)) else list(base)
            ) + includes
        elif includes:
            yaml_file = includes
        else:
            yaml_file = base

        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files, deep_merge: bool = True):
        """Load defaults, user config, project config, and includes.

        Args:
            files: Extra file path(s) from yaml_file or --include
            deep_merge: Ignored; files are always deep merged

        Returns:
            Deep-merged dictionary of all loaded data
        """
        result = {}

        files_to_load = [
            Path(__file__).parent.parent / "defaults" / "default.yaml",
            Path(user_config_dir("jjconflict", appauthor=False))
            / CONFIG_FILENAME,
            Path(CONFIG_FILENAME),
        ]

        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        for file_path in files_to_load:
            if file_path.is_file():
                with _get_bootstrap_logger().span(
                    "Configuration loading",
                    file=str(file_path),
                ):
                    data = self._load_file_recursive(file_path, set())
                    result = self._deep_merge(result, data)
            else:
                _get_bootstrap_logger().debug(
                    "Configuration file not found (skipping)",
                    file=str(file_path),
                )

        return result

    def _load_file_recursive(
        self, filepath: Path, visited: set[Path]
    ) -> dict:
        """Load file and process include: directives recursively.

        Included files are merged first, so the including file wins.

        Raises:
            ValueError: If a circular include is detected
            FileNotFoundError: If an included file does not exist
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if "include" in data:
            includes = data.pop("include") or []
            if isinstance(includes, str):
                includes = [includes]

            for inc in includes:
                inc_path = self._resolve_path(inc, filepath)
                inc_data = self._load_file_recursive(
                    inc_path, visited.copy()
                )
                data = self._deep_merge(inc_data, data)

        return data

    def _resolve_path(
        self, include_path: str, relative_to: Path
    ) -> Path:
        """Resolve include path relative to the including file."""
        path = Path(include_path).expanduser()
        if path.is_absolute():
            return path
        return (relative_to.parent / path).resolve()

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge override into base (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
