"""
Tests for formatting options and YAML configuration files.
"""

import logging
import sys
import os

import pytest
import yaml

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from usings.config import FormatOptions, find_config_file, get_default_config, load_config, save_config


class TestFormatOptions:

    def test_defaults(self):
        options = FormatOptions()
        assert options.sort_order == "System"
        assert options.split_groups is True
        assert options.disable_unused_removal is False
        assert options.process_directives_in_conditional_blocks is False
        assert options.static_placement == "bottom"

    def test_priority_namespaces(self):
        assert FormatOptions(sort_order="  System   Microsoft ").priority_namespaces == ["System", "Microsoft"]

    def test_invalid_placement(self):
        with pytest.raises(ValueError):
            FormatOptions(static_placement="top")

    def test_from_mapping_camel_case(self):
        options = FormatOptions.from_mapping({
            "sortOrder": "Microsoft System",
            "splitGroups": False,
            "disableUnusedRemoval": True,
            "processDirectivesInConditionalBlocks": True,
            "staticPlacement": "intermixed",
            "somethingElse": 1,
        })
        assert options == FormatOptions("Microsoft System", False, True, True, "intermixed")

    def test_from_mapping_snake_case(self):
        options = FormatOptions.from_mapping({"split_groups": False})
        assert options.split_groups is False
        assert options.sort_order == "System"

    def test_from_mapping_none(self):
        assert FormatOptions.from_mapping(None) == FormatOptions()


class TestConfigFiles:

    def test_default_config(self):
        assert get_default_config() == FormatOptions()

    def test_load_merges_over_defaults(self, tmp_path):
        path = tmp_path / ".organize-usings.yml"
        path.write_text("sortOrder: Microsoft\nstaticPlacement: groupedWithNamespace\n", encoding="utf-8")

        options = load_config(str(path))
        assert options.sort_order == "Microsoft"
        assert options.static_placement == "groupedWithNamespace"
        assert options.split_groups is True

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yml")) == FormatOptions()

    @pytest.mark.parametrize("content", [
        "staticPlacement: sideways\n",
        "sortOrder: [System, Microsoft]\n",
        "- just\n- a list\n",
        "key: [unclosed\n",
    ])
    def test_invalid_file_falls_back_with_warning(self, tmp_path, caplog, content):
        path = tmp_path / "organize-usings.yaml"
        path.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="usings.config"):
            options = load_config(str(path))

        assert options == FormatOptions()
        assert "Failed to load config" in caplog.text

    def test_save_writes_editor_names(self, tmp_path):
        path = tmp_path / "nested" / "organize-usings.yml"
        save_config(FormatOptions(sort_order="Microsoft", split_groups=False), str(path))

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["sortOrder"] == "Microsoft"
        assert data["splitGroups"] is False
        assert load_config(str(path)) == FormatOptions(sort_order="Microsoft", split_groups=False)

    def test_find_config_walks_up(self, tmp_path):
        config = tmp_path / ".organize-usings.yaml"
        config.write_text("splitGroups: false\n", encoding="utf-8")
        nested = tmp_path / "src" / "deep"
        nested.mkdir(parents=True)

        assert find_config_file(str(nested)) == str(config)

    def test_find_config_from_file_path(self, tmp_path):
        config = tmp_path / ".organize-usings.yml"
        config.write_text("", encoding="utf-8")
        source = tmp_path / "Program.cs"
        source.write_text("using System;\n", encoding="utf-8")

        assert find_config_file(str(source)) == str(config)

    def test_find_config_prefers_dotfile(self, tmp_path):
        (tmp_path / "organize-usings.yml").write_text("", encoding="utf-8")
        (tmp_path / ".organize-usings.yml").write_text("", encoding="utf-8")

        assert find_config_file(str(tmp_path)) == str(tmp_path / ".organize-usings.yml")
