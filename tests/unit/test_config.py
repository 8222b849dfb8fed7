"""Unit tests for configuration discovery and loading."""

import json
from pathlib import Path

import pytest

from mdscroll.config import (
    discover_config_file,
    env_overrides,
    find_config_in_parents,
    load_config,
    load_config_file,
    options_from_dict,
)
from mdscroll.exceptions import ConfigError
from mdscroll.options import RendererOptions, ViewerOptions


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def project(tmp_path) -> Path:
    root = tmp_path / "project"
    (root / "docs" / "deep").mkdir(parents=True)
    return root


@pytest.mark.unit
class TestLoadConfigFile:
    """Format detection by file name."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".mdscroll.toml"
        path.write_text('theme = "nord"\nline_wrap = false\n', encoding="utf-8")
        assert load_config_file(path) == {"theme": "nord", "line_wrap": False}

    def test_yaml(self, tmp_path):
        path = tmp_path / ".mdscroll.yaml"
        path.write_text("theme: gruvbox\nshow_outline: false\n", encoding="utf-8")
        assert load_config_file(path) == {"theme": "gruvbox", "show_outline": False}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / ".mdscroll.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / ".mdscroll.json"
        path.write_text(json.dumps({"theme": "matrix"}), encoding="utf-8")
        assert load_config_file(path) == {"theme": "matrix"}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdscroll]\ntheme = "onedark"\n', encoding="utf-8")
        assert load_config_file(path) == {"theme": "onedark"}

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "nope.toml")
        assert exc_info.value.config_path.endswith("nope.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / ".mdscroll.toml"
        path.write_text("theme = = nord", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_malformed_json(self, tmp_path):
        path = tmp_path / ".mdscroll.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / ".mdscroll.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)


@pytest.mark.unit
class TestDiscovery:
    """Walking parent directories for config files."""

    def test_found_in_parent(self, project):
        config = project / ".mdscroll.toml"
        config.write_text('theme = "nord"\n', encoding="utf-8")
        assert find_config_in_parents(project / "docs" / "deep") == config.resolve()

    def test_dedicated_file_beats_pyproject(self, project):
        (project / "pyproject.toml").write_text('[tool.mdscroll]\ntheme = "nord"\n', encoding="utf-8")
        dedicated = project / ".mdscroll.json"
        dedicated.write_text("{}", encoding="utf-8")
        assert find_config_in_parents(project) == dedicated.resolve()

    def test_pyproject_without_section_is_skipped(self, project):
        (project / "docs" / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        outer = project / "pyproject.toml"
        outer.write_text('[tool.mdscroll]\ntheme = "nord"\n', encoding="utf-8")
        assert find_config_in_parents(project / "docs") == outer.resolve()

    def test_home_fallback(self, project, isolated_home):
        config = isolated_home / ".mdscroll.yaml"
        config.write_text("theme: dracula\n", encoding="utf-8")
        assert discover_config_file(project) == config


@pytest.mark.unit
class TestEnvironment:
    """MDSCROLL_* overrides."""

    def test_theme(self):
        assert env_overrides({"MDSCROLL_THEME": "nord"}) == {"theme": "nord"}

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("no", False)])
    def test_booleans(self, value, expected):
        assert env_overrides({"MDSCROLL_LINE_WRAP": value}) == {"line_wrap": expected}

    def test_all_boolean_variables(self):
        env = {
            "MDSCROLL_OUTLINE": "false",
            "MDSCROLL_LINE_NUMBERS": "true",
            "MDSCROLL_HIGHLIGHT": "0",
        }
        assert env_overrides(env) == {
            "show_outline": False,
            "show_line_numbers": True,
            "syntax_highlighting": False,
        }

    def test_unrelated_variables_ignored(self):
        assert env_overrides({"PATH": "/bin", "MDSCROLL_THEME": ""}) == {}


@pytest.mark.unit
class TestLoadConfig:
    """Defaults, file values and environment layered together."""

    def test_defaults(self, project, isolated_home):
        assert load_config(env={}, start_dir=project) == ViewerOptions()

    def test_file_values(self, project, isolated_home):
        (project / ".mdscroll.toml").write_text(
            'theme = "nord"\nline-wrap = false\n\n[renderer]\nrule_width = 60\n', encoding="utf-8"
        )
        options = load_config(env={}, start_dir=project)
        assert options.theme == "nord"
        assert options.line_wrap is False
        assert options.renderer == RendererOptions(rule_width=60)

    def test_environment_beats_file(self, project, isolated_home):
        (project / ".mdscroll.toml").write_text('theme = "nord"\n', encoding="utf-8")
        options = load_config(env={"MDSCROLL_THEME": "matrix"}, start_dir=project)
        assert options.theme == "matrix"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"outline_width": 30}), encoding="utf-8")
        assert load_config(path, env={}).outline_width == 30

    def test_unknown_keys_are_logged(self, tmp_path, caplog):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"theme": "nord", "colour": "red"}), encoding="utf-8")
        with caplog.at_level("WARNING", logger="mdscroll.config"):
            options = load_config(path, env={})
        assert options.theme == "nord"
        assert "colour" in caplog.text

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"horizontal_step": 0}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_unknown_highlight_style(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('syntax_highlighting = false\nhighlight_style = "nope"\n', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path, env={})
        assert "Unknown highlight style" in exc_info.value.message
        assert exc_info.value.config_path == str(path)

    def test_renderer_must_be_table(self):
        with pytest.raises(ConfigError):
            options_from_dict({"renderer": 3})
