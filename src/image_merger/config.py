"""
Configuration schema and loader for the image merger.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from image_merger.colors import parse_background
from image_merger.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_BORDER_SIZE,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SORT_INPUTS,
)
from image_merger.errors import InvalidColor


class LayoutConfig(BaseModel):
    """Border thickness and background fill for every image."""

    border_size: int = Field(DEFAULT_BORDER_SIZE, ge=0)
    background: str | list[int | float] = Field(DEFAULT_BACKGROUND)

    @field_validator("background")
    @classmethod
    def _check_background(
        cls,
        value: str | list[int | float],
    ) -> str | list[int | float]:
        try:
            parse_background(value)
        except InvalidColor as exc:
            raise ValueError(str(exc)) from exc
        return value


class OutputConfig(BaseModel):
    """Where the merged image goes and how directory inputs are ordered."""

    output: str = Field(DEFAULT_OUTPUT_PATH, min_length=1)
    sort_inputs: bool = DEFAULT_SORT_INPUTS


class MergerConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    # model_validate({}) lets Pydantic populate defaults from the Field
    # declarations of each section.
    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )


_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "border_size": ("layout", "border_size"),
    "background": ("layout", "background"),
    "output": ("output", "output"),
    "sort": ("output", "sort_inputs"),
}


def build_config_from_cli(
    cli_args: dict[str, Any],
    base_config: MergerConfig | None = None,
) -> MergerConfig:
    """
    Overlay explicitly given CLI values on top of a base configuration.

    Arguments left as ``None`` keep the value from ``base_config`` (or
    the defaults when no config file was loaded). The result is
    re-validated so CLI values obey the same constraints as TOML ones.
    """
    base = base_config or MergerConfig.model_validate({})
    data = base.model_dump()
    for arg_name, (section, field) in _CLI_FIELDS.items():
        value = cli_args.get(arg_name)
        if value is not None:
            data[section][field] = value
    return MergerConfig.model_validate(data)


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> MergerConfig:
        """
        Load a merger configuration from a TOML file.

        Returns a validated MergerConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return MergerConfig.model_validate(doc.unwrap())
