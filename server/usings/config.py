"""
Configuration management for the using-directive organizer.

This module provides the formatting options with their defaults, and
YAML configuration loading in the same shape as the editor settings.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .types import STATIC_PLACEMENTS

logger = logging.getLogger(__name__)

# Editor setting name -> field name
_SETTING_NAMES = {
    "sortOrder": "sort_order",
    "splitGroups": "split_groups",
    "disableUnusedRemoval": "disable_unused_removal",
    "processDirectivesInConditionalBlocks": "process_directives_in_conditional_blocks",
    "staticPlacement": "static_placement",
}


@dataclass
class FormatOptions:
    """Formatting options for one organize run."""

    # Space-separated namespace prefixes, highest priority first
    sort_order: str = "System"
    split_groups: bool = True
    disable_unused_removal: bool = False
    process_directives_in_conditional_blocks: bool = False
    static_placement: str = "bottom"  # "intermixed", "groupedWithNamespace", "bottom"

    def __post_init__(self):
        if self.static_placement not in STATIC_PLACEMENTS:
            raise ValueError(
                f"Invalid static placement {self.static_placement!r}; "
                f"expected one of {', '.join(STATIC_PLACEMENTS)}"
            )
        if not isinstance(self.sort_order, str):
            raise TypeError("sort_order must be a space-separated string")

    @property
    def priority_namespaces(self) -> List[str]:
        return self.sort_order.split()

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "FormatOptions":
        """
        Build options from a settings mapping.

        Accepts the editor's camelCase names and the snake_case field
        names. Unknown keys are ignored.
        """
        values: Dict[str, Any] = {}
        field_names = set(_SETTING_NAMES.values())
        for key, value in (mapping or {}).items():
            name = _SETTING_NAMES.get(key, key)
            if name in field_names and value is not None:
                values[name] = value
        return cls(**values)

    def to_mapping(self) -> Dict[str, Any]:
        """Editor-style (camelCase) settings mapping."""
        return {setting: getattr(self, name) for setting, name in _SETTING_NAMES.items()}


def load_config(config_path: Optional[str] = None) -> FormatOptions:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses defaults.

    Returns:
        FormatOptions instance
    """
    defaults = FormatOptions().to_mapping()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise TypeError("top-level YAML value must be a mapping")

            merged_config = defaults.copy()
            merged_config.update(file_config)
            return FormatOptions.from_mapping(merged_config)

        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}; using default configuration")

    return FormatOptions.from_mapping(defaults)


def get_default_config() -> FormatOptions:
    """Get default configuration without loading from file."""
    return load_config(None)


def save_config(config: FormatOptions, config_path: str) -> None:
    """
    Save configuration to file.

    Args:
        config: FormatOptions to save
        config_path: Path where to save the config
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.to_mapping(), f, default_flow_style=False, indent=2, sort_keys=False)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for files in this order:
    1. .organize-usings.yml
    2. .organize-usings.yaml
    3. organize-usings.yml
    4. organize-usings.yaml

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    config_names = [".organize-usings.yml", ".organize-usings.yaml", "organize-usings.yml", "organize-usings.yaml"]

    current_path = os.path.abspath(start_path)
    if os.path.isfile(current_path):
        current_path = os.path.dirname(current_path)

    while True:
        for config_name in config_names:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None
