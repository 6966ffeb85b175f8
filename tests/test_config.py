"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from blogpress.config import BlogpressConfig, split_setting_list
from blogpress.note_plugins.config import (
    BoundsPluginConfig,
    CalloutsPluginConfig,
    PluginName,
)


class TestBlogpressConfig:
    """Test cases for BlogpressConfig."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(
            yaml.safe_dump(
                {
                    "vault_dir": "vault",
                    "upload_dir": "/srv/uploads",
                    "upload_base_url": "https://cdn.example/",
                    "links": {
                        "label_prefixes": "Topic, ,Area",
                        "exclude_link_extensions": ["png", ""],
                    },
                    "diagram_commands": {"d2": ["d2", "{input}", "{output}"]},
                    "note_plugins": [
                        {"name": "bounds", "start_marker": "%% start %%"},
                        {"name": "callouts", "dialect": "line"},
                    ],
                }
            )
        )
        return path

    def test_load_from_file(self, config_file, tmp_path):
        config = BlogpressConfig(config_file=config_file)

        assert config.vault_dir == tmp_path / "vault"
        assert config.upload_dir == Path("/srv/uploads")
        assert config.upload_base_url == "https://cdn.example/"
        assert config.links.label_prefixes == ["Topic", "Area"]
        assert config.links.exclude_link_extensions == ["png"]
        assert config.diagram_commands == {"d2": ["d2", "{input}", "{output}"]}
        assert config.config_file_path == config_file

    def test_plugin_configs_are_discriminated_by_name(self, config_file):
        config = BlogpressConfig(config_file=config_file)

        bounds, callouts = config.note_plugins
        assert isinstance(bounds, BoundsPluginConfig)
        assert bounds.start_marker == "%% start %%"
        assert bounds.after_dependencies == [PluginName.FRONTMATTER]
        assert isinstance(callouts, CalloutsPluginConfig)
        assert callouts.dialect == "line"

    def test_kwargs_override_file(self, config_file, tmp_path):
        config = BlogpressConfig(config_file=config_file, vault_dir=tmp_path / "other")

        assert config.vault_dir == tmp_path / "other"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("BLOGPRESS_UPLOAD_BASE_URL", "https://env.example/")

        assert BlogpressConfig().upload_base_url == "https://env.example/"

    def test_defaults(self):
        config = BlogpressConfig(upload_base_url="/uploads/")

        assert config.note_plugins == []
        assert config.diagram_commands is None
        assert config.links.label_prefixes == []

    def test_invalid_dialect_is_rejected(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("note_plugins:\n  - name: callouts\n    dialect: fancy\n")

        with pytest.raises(ValueError):
            BlogpressConfig(config_file=path)


def test_split_setting_list():
    assert split_setting_list("a, b,,c ,") == ["a", "b", "c"]
    assert split_setting_list(["x", " ", "y"]) == ["x", "y"]
    assert split_setting_list(None) == []
