"""
Configuration management for the dataset generator.

Handles loading, updating, and persisting configuration for the source
document, section headers, fetch behaviour, export and database paths.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional
import yaml

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages generator configuration.

    A YAML file is merged section by section over DEFAULT_CONFIG, so a
    file only needs the keys it changes.
    """

    DEFAULT_CONFIG = {
        'source': {
            'url': 'https://www.aspca.org/pet-care/animal-poison-control/cats-plant-list',
            'name': 'ASPCA Toxic and Non-Toxic Plant List — Cats',
            'license': 'restricted',
            'user_agent': 'canmycateatthat/0.1',
        },
        'sections': {
            'toxic_header': 'Plants Toxic to Cats',
            'non_toxic_header': 'Plants Non-Toxic to Cats',
        },
        'fetch': {
            'timeout': 30,
            'max_retries': 3,
            'cache_expire_after': 86400,
            'cache_dir': 'data/raw/http_cache',
            'use_cache': True,
        },
        'export': {
            'out_dir': 'out',
            'schema_version': '1',
        },
        'database': {
            'db_path': 'data/catplants.db',
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file; None uses defaults

        Raises:
            FileNotFoundError: If config_path is given but does not exist
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path:
            self.load_config(config_path)
        else:
            logger.info("No config file given, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = copy.deepcopy(self.DEFAULT_CONFIG)
            else:
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a single configuration value.

        Args:
            section: Section name (e.g., 'fetch', 'sections')
            key: Key within the section
            default: Value returned when the key is absent

        Returns:
            Configured value or ``default``
        """
        return self.config.get(section, {}).get(key, default)

    def get_section(self, section: str) -> dict[str, Any]:
        """
        Get a copy of one configuration section.

        Raises:
            KeyError: If section not found
        """
        if section not in self.config:
            raise KeyError(f"Configuration section '{section}' not found")
        return copy.deepcopy(self.config[section])

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a single configuration value, creating the section if needed."""
        old_value = self.config.setdefault(section, {}).get(key)
        self.config[section][key] = value
        logger.info(f"Updated {section}.{key}: {old_value} -> {value}")

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                self.config,
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2,
                allow_unicode=True,
            )

        logger.info(f"Saved configuration to {save_path}")

    def get_all_config(self) -> dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Full configuration dictionary
        """
        return copy.deepcopy(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        source = self.config.get('source', {})
        url = source.get('url')
        if not isinstance(url, str) or not url.startswith(('http://', 'https://')):
            errors.append(f"source.url must be an http(s) URL, got {url!r}")

        sections = self.config.get('sections', {})
        toxic = sections.get('toxic_header')
        non_toxic = sections.get('non_toxic_header')
        for name, value in (('toxic_header', toxic), ('non_toxic_header', non_toxic)):
            if not isinstance(value, str) or not value.strip():
                errors.append(f"sections.{name} must be a non-empty string")
        if toxic and toxic == non_toxic:
            errors.append("sections.toxic_header and sections.non_toxic_header must differ")

        fetch = self.config.get('fetch', {})
        timeout = fetch.get('timeout')
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            errors.append(f"fetch.timeout must be a positive number, got {timeout!r}")

        max_retries = fetch.get('max_retries')
        if not isinstance(max_retries, int) or max_retries < 0:
            errors.append("fetch.max_retries must be a non-negative integer")

        return errors
