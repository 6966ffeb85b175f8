"""Configuration management for blogpress."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .note_plugins.config import PluginConfig
from .paths import resolve_model_paths


def split_setting_list(value: Any) -> Any:
    """Accept `"a, b,,c"` as well as a list, dropping empty entries."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return value


class LinkFilterConfig(BaseModel):
    """Filters applied to the links, labels and tags collected for a note."""

    include_link_prefixes: list[str] = Field(
        default_factory=list,
        description="Only keep outlinks and backlinks starting with one of these",
    )
    exclude_link_extensions: list[str] = Field(
        default_factory=list,
        description="Drop links to files with these extensions (e.g. png, pdf)",
    )
    label_prefixes: list[str] = Field(
        default_factory=list,
        description="Body links starting with one of these become post labels",
    )
    exclude_tags_containing: list[str] = Field(
        default_factory=list,
        description="Drop tags containing any of these substrings",
    )

    @field_validator(
        "include_link_prefixes",
        "exclude_link_extensions",
        "label_prefixes",
        "exclude_tags_containing",
        mode="before",
    )
    @classmethod
    def split_comma_lists(cls, v: Any) -> Any:
        return split_setting_list(v)


class BlogpressConfig(BaseSettings):
    """Main configuration for blogpress."""

    model_config = SettingsConfigDict(
        env_prefix="BLOGPRESS_",
        env_nested_delimiter="__",
        yaml_file=Path.home() / ".blogpress" / "config.yml",
        yaml_file_encoding="utf-8",
        case_sensitive=False,
    )

    vault_dir: Path = Field(
        default=Path.cwd(),
        description="Root of the vault holding notes and attachments",
    )

    # Image uploads
    upload_dir: Path = Field(
        default=Path.cwd() / "uploads",
        description="Directory uploaded images are written to",
    )
    upload_base_url: str = Field(
        default="/uploads/",
        description="Public URL under which upload_dir is served",
    )

    links: LinkFilterConfig = Field(default_factory=LinkFilterConfig)

    diagram_commands: dict[str, list[str]] | None = Field(
        default=None,
        description="Diagram language to argv template with {input} and {output} "
        "placeholders; unset uses the built in mermaid and d2 commands",
    )

    # Overrides of the default stage configs, matched by name
    note_plugins: list[PluginConfig] = Field(
        default_factory=list,
        description="Stage plugin configurations overriding the defaults",
    )

    def __init__(self, config_file: Path | None = None, **kwargs: Any) -> None:
        # An explicit config file is read with PyYAML, kwargs take priority
        if config_file is not None and config_file.exists():
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            kwargs = {**config_data, **kwargs}

        super().__init__(**kwargs)

        self._custom_config_file = config_file

        # Relative paths in an explicit config file are relative to that file
        if config_file is not None:
            resolve_model_paths(self, config_file.parent)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @property
    def config_dir(self) -> Path:
        """Return the .blogpress configuration directory."""
        return Path.home() / ".blogpress"

    @property
    def config_file_path(self) -> Path:
        """Return the path to the configuration file."""
        if self._custom_config_file is not None:
            return self._custom_config_file
        return self.config_dir / "config.yml"
