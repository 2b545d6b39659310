"""Unit tests for chunkgrep CLI configuration management.

This module tests the configuration system including file discovery, loading,
merging, and priority handling.
"""

import argparse
import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from chunkgrep.cli.config import (
    apply_search_config,
    discover_config_file,
    find_config_in_parents,
    get_config_search_paths,
    load_config_file,
    load_config_with_priority,
    merge_configs,
)
from chunkgrep.options.search import SearchOptions


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_discover_config_in_cwd(self):
        """Test discovering config file in current working directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".chunkgrep.toml"
            config_file.write_text("[search]\nworkers = 2\n")

            with patch("pathlib.Path.cwd", return_value=temp_path):
                discovered = discover_config_file()

            assert discovered is not None
            assert discovered.resolve() == config_file.resolve()

    def test_discover_config_in_home(self):
        """Test discovering config file in home directory."""
        with tempfile.TemporaryDirectory() as home_dir, tempfile.TemporaryDirectory() as work_dir:
            home_path = Path(home_dir)
            config_file = home_path / ".chunkgrep.json"
            config_file.write_text('{"search": {"workers": 2}}')

            with patch("pathlib.Path.cwd", return_value=Path(work_dir)):
                with patch("pathlib.Path.home", return_value=home_path):
                    discovered = discover_config_file()

            assert discovered == config_file

    def test_dedicated_file_priority(self, tmp_path):
        """TOML wins over YAML and JSON in the same directory."""
        (tmp_path / ".chunkgrep.json").write_text("{}")
        (tmp_path / ".chunkgrep.yaml").write_text("search: {}\n")
        (tmp_path / ".chunkgrep.toml").write_text("[search]\n")

        assert find_config_in_parents(tmp_path) == (tmp_path / ".chunkgrep.toml").resolve()

    def test_find_config_in_parent_directory(self, tmp_path):
        """Nested working directories find a config further up."""
        config_file = tmp_path / ".chunkgrep.yml"
        config_file.write_text("search:\n  fuzzy: true\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config_file.resolve()

    def test_pyproject_needs_chunkgrep_table(self, tmp_path):
        """A pyproject without [tool.chunkgrep] is not a config file."""
        nested = tmp_path / "project"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "x"\n')
        (tmp_path / "pyproject.toml").write_text("[tool.chunkgrep.search]\nworkers = 3\n")

        assert find_config_in_parents(nested) == (tmp_path / "pyproject.toml").resolve()

    def test_invalid_pyproject_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("this is [not toml")
        nested = tmp_path / "inner"
        nested.mkdir()

        assert find_config_in_parents(nested) != (tmp_path / "pyproject.toml").resolve()

    def test_get_config_search_paths(self, tmp_path):
        with patch("pathlib.Path.cwd", return_value=tmp_path), patch("pathlib.Path.home", return_value=tmp_path):
            paths = get_config_search_paths()

        assert paths[0] == tmp_path / ".chunkgrep.toml"
        assert tmp_path / "pyproject.toml" in paths
        assert len(paths) == 9


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading the supported file formats."""

    def test_load_toml(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('[search]\nworkers = 4\nexecutor = "thread"\n')

        assert load_config_file(path) == {"search": {"workers": 4, "executor": "thread"}}

    def test_load_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"search": {"case_sensitive": False}}))

        assert load_config_file(str(path)) == {"search": {"case_sensitive": False}}

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"search": {"fuzzy": True}}))

        assert load_config_file(path) == {"search": {"fuzzy": True}}

    def test_load_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.chunkgrep.search]\nworkers = 6\n")

        assert load_config_file(path) == {"search": {"workers": 6}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "settings.ini"
        path.write_text("[search]\n")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "filename, content",
        [
            ("bad.toml", "[search\n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "search: [unclosed\n"),
        ],
    )
    def test_malformed_files(self, tmp_path, filename, content):
        path = tmp_path / filename
        path.write_text(content)

        with pytest.raises(argparse.ArgumentTypeError, match="Invalid"):
            load_config_file(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(argparse.ArgumentTypeError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test priority between explicit, environment and discovered configs."""

    def test_explicit_path_wins(self, tmp_path):
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("[search]\nworkers = 1\n")
        env = tmp_path / "env.toml"
        env.write_text("[search]\nworkers = 2\n")

        config = load_config_with_priority(explicit_path=str(explicit), env_var_path=str(env))

        assert config["search"]["workers"] == 1

    def test_env_path_used_without_explicit(self, tmp_path):
        env = tmp_path / "env.toml"
        env.write_text("[search]\nworkers = 2\n")

        assert load_config_with_priority(env_var_path=str(env))["search"]["workers"] == 2

    def test_empty_when_nothing_found(self):
        with patch("chunkgrep.cli.config.discover_config_file", return_value=None):
            assert load_config_with_priority() == {}

    def test_merge_configs_is_deep(self):
        base = {"search": {"workers": 2, "fuzzy": True}, "other": 1}
        override = {"search": {"workers": 8}}

        assert merge_configs(base, override) == {"search": {"workers": 8, "fuzzy": True}, "other": 1}
        assert base["search"]["workers"] == 2


@pytest.mark.unit
@pytest.mark.cli
class TestApplySearchConfig:
    def test_applies_known_fields(self):
        options = apply_search_config(SearchOptions(), {"search": {"workers": 3, "fuzzy": True}})

        assert options.workers == 3
        assert options.fuzzy is True

    def test_ignores_unknown_fields(self, caplog):
        with caplog.at_level("WARNING", logger="chunkgrep.cli.config"):
            options = apply_search_config(SearchOptions(), {"search": {"workers": 3, "colour": "red"}})

        assert options.workers == 3
        assert "colour" in caplog.text

    def test_missing_section_keeps_options(self):
        options = SearchOptions(workers=5)

        assert apply_search_config(options, {}) is options

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            apply_search_config(SearchOptions(), {"search": {"workers": 0}})

    def test_section_must_be_table(self):
        with pytest.raises(argparse.ArgumentTypeError):
            apply_search_config(SearchOptions(), {"search": [1, 2]})
