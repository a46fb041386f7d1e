"""
Unit tests for the config module used by the image merger.

Covers:
- Successful loading of a valid config.toml
- Default fallbacks for missing values
- Error handling for missing files and invalid values
- Overlaying CLI arguments onto a loaded configuration
"""
import tempfile
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import image_merger.config as im_config
from image_merger.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_BORDER_SIZE,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SORT_INPUTS,
)


def create_toml_file(data: dict[str, Any]) -> str:
    """Write a TOML string to a temporary file and return its path."""
    doc = tomlkit.document()
    doc.update(data)
    toml_str = tomlkit.dumps(doc)

    with tempfile.NamedTemporaryFile(
        delete=False,
        suffix=".toml",
        mode="w",
        encoding="utf-8",
    ) as temp:
        temp.write(toml_str)
        return temp.name


def test_load_valid_config() -> None:
    """Test that a well-formed config.toml loads successfully."""
    path = create_toml_file({
        "layout": {"border_size": 4, "background": "#000000"},
        "output": {"output": "stacked.png", "sort_inputs": True},
    })
    cfg = im_config.ConfigLoader.load(path)

    assert isinstance(cfg, im_config.MergerConfig)
    assert cfg.layout.border_size == 4  # noqa: PLR2004
    assert cfg.layout.background == "#000000"
    assert cfg.output.output == "stacked.png"
    assert cfg.output.sort_inputs is True


def test_rgba_array_background() -> None:
    """Arrays keep ints as ints and fractional alpha as float."""
    path = create_toml_file({"layout": {"background": [255, 0, 0, 0.5]}})
    cfg = im_config.ConfigLoader.load(path)
    assert cfg.layout.background == [255, 0, 0, 0.5]
    assert isinstance(cfg.layout.background[0], int)


def test_missing_file_raises() -> None:
    """Ensure FileNotFoundError is raised for nonexistent config."""
    with pytest.raises(FileNotFoundError):
        im_config.ConfigLoader.load("nonexistent_file.toml")


def test_partial_config_uses_defaults() -> None:
    """ConfigLoader should fall back to defaults for missing sections."""
    path = create_toml_file({"layout": {"border_size": 0}})
    cfg = im_config.ConfigLoader.load(path)

    assert cfg.layout.border_size == 0
    assert cfg.layout.background == DEFAULT_BACKGROUND
    assert cfg.output.output == DEFAULT_OUTPUT_PATH
    assert cfg.output.sort_inputs is DEFAULT_SORT_INPUTS


def test_empty_config_matches_defaults() -> None:
    cfg = im_config.MergerConfig.model_validate({})
    assert cfg.layout.border_size == DEFAULT_BORDER_SIZE
    assert cfg.layout.background == DEFAULT_BACKGROUND


def test_negative_border_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        im_config.LayoutConfig(border_size=-1)
    assert "border_size" in str(exc_info.value)


def test_invalid_background_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        im_config.LayoutConfig(background="chartreuse-ish")
    assert "unrecognized color" in str(exc_info.value)


def test_empty_output_rejected() -> None:
    with pytest.raises(ValidationError):
        im_config.OutputConfig(output="")


class TestBuildConfigFromCli:
    """CLI values override config values only when given."""

    def test_overrides(self) -> None:
        base = im_config.MergerConfig.model_validate(
            {"layout": {"border_size": 3}, "output": {"output": "a.png"}},
        )
        cfg = im_config.build_config_from_cli(
            {
                "border_size": 0,
                "background": "#00000000",
                "output": "b.png",
                "sort": True,
                "verbose": True,
            },
            base_config=base,
        )
        assert cfg.layout.border_size == 0
        assert cfg.layout.background == "#00000000"
        assert cfg.output.output == "b.png"
        assert cfg.output.sort_inputs is True
        assert base.layout.border_size == 3  # noqa: PLR2004

    def test_none_keeps_base(self) -> None:
        base = im_config.MergerConfig.model_validate(
            {"layout": {"border_size": 3}, "output": {"sort_inputs": True}},
        )
        cfg = im_config.build_config_from_cli(
            {"border_size": None, "output": None, "sort": None},
            base_config=base,
        )
        assert cfg == base

    def test_without_base_uses_defaults(self) -> None:
        cfg = im_config.build_config_from_cli({"border_size": 2})
        assert cfg.layout.border_size == 2  # noqa: PLR2004
        assert cfg.output.output == DEFAULT_OUTPUT_PATH

    def test_cli_values_are_validated(self) -> None:
        with pytest.raises(ValidationError):
            im_config.build_config_from_cli({"background": "nope"})
