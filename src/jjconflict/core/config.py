"""Application configuration."""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from jjconflict.core.base import BaseConfig
from jjconflict.core.log import Logger
from jjconflict.core.yaml_settings import YamlWithIncludesSettingsSource
from jjconflict.highlight.color import DEFAULT_SHADE_AMOUNT, parse_color
from jjconflict.highlight.groups import (
    HighlightGroups,
    StaticColorResolver,
)
from jjconflict.highlight.regions import RegionKind


class HighlightConfig(BaseConfig):
    """Which colors conflict regions and labels are drawn with."""

    current: str = Field(
        default="DiffText",
        description="Highlight group the current side's color comes from",
    )
    incoming: str = Field(
        default="DiffAdd",
        description="Highlight group the incoming side's color comes from",
    )
    ancestor: str = Field(
        default="DiffChange",
        description="Highlight group the base side's color comes from",
    )
    shade_amount: int = Field(
        default=DEFAULT_SHADE_AMOUNT,
        ge=0,
        le=100,
        description="Percentage labels are darkened by (0-100)",
    )
    colors: dict[str, int | str] = Field(
        default_factory=dict,
        description=(
            "Color scheme: highlight group name to background "
            "('#rrggbb' or integer). Unlisted groups use built-in "
            "defaults"
        ),
    )
    width: int = Field(
        default=80,
        ge=1,
        description="Columns that painted lines and labels fill",
    )

    @field_validator("colors")
    @classmethod
    def _check_colors(cls, value: dict[str, int | str]) -> dict[str, int | str]:
        for color in value.values():
            parse_color(color)
        return value

    def groups(self) -> HighlightGroups:
        """Resolve this configuration into concrete group colors."""
        return HighlightGroups.derive(
            StaticColorResolver(self.colors),
            sources={
                RegionKind.CURRENT: self.current,
                RegionKind.INCOMING: self.incoming,
                RegionKind.ANCESTOR: self.ancestor,
            },
            shade_amount=self.shade_amount,
        )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger | None = Field(
        default=None,
        description="Logger configuration and runtime instance"
    )
    highlight: HighlightConfig = Field(
        default_factory=HighlightConfig,
        description="Conflict highlighting settings"
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "jjconflict"
        ),
        description="Root directory for log files",
    )

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger singleton after config loads."""
        from jjconflict.core.log import setup_logger
        from jjconflict.core.yaml_settings import _cleanup_bootstrap_logger

        if self.logger is None:
            self.logger = Logger()

        setup_logger(
            log_root=self.log_root,
            session_name="cli",
            console=self.logger.console,
            file=self.logger.file,
            level=self.logger.level,
        )

        _cleanup_bootstrap_logger()
        return self

    def close(self):
        """Close config and the global logger singleton."""
        from jjconflict.core.log import logger
        logger.close()
        super().close()


class State(BaseSettings):
    """Complete application state loaded from all sources."""

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="JJCONFLICT_",
        env_nested_delimiter="__",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings source priority.

        Priority order (highest to lowest):
        1. init_settings (CLI arguments, constructor kwargs)
        2. YAML files (defaults, user, project, includes)
        3. .env file
        4. Environment variables
        5. Secret files
        """
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


__all__ = ["Config", "HighlightConfig", "State"]
