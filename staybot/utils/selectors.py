"""Locator registry: built-in selectors merged with an optional YAML file."""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from loguru import logger

from staybot.constants import DEFAULT_SELECTORS
from staybot.core.exceptions import ConfigurationError


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            # A {primary, fallbacks} entry replaces the built-in one as a whole
            if "primary" in value:
                merged[key] = copy.deepcopy(value)
            else:
                merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class LocatorRegistry:
    """Manage page locators from built-in defaults and external configuration."""

    def __init__(
        self,
        selectors_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize locator registry.

        Args:
            selectors_file: Optional path to a YAML file overriding defaults
            overrides: In-memory overrides applied after the file
        """
        self.selectors_file = Path(selectors_file) if selectors_file else None
        self._selectors: Dict[str, Any] = {}
        self._load_selectors()
        if overrides:
            self._selectors = _deep_merge(self._selectors, overrides)

    def _load_selectors(self) -> None:
        """Load defaults, then merge the YAML file if it exists."""
        self._selectors = copy.deepcopy(DEFAULT_SELECTORS)
        if self.selectors_file is None:
            return
        if not self.selectors_file.exists():
            logger.warning(f"Selectors file not found: {self.selectors_file}, using defaults")
            return

        try:
            with open(self.selectors_file, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid selectors file {self.selectors_file}: {e}",
                details={"file": str(self.selectors_file)},
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Selectors file {self.selectors_file} must contain a mapping",
                details={"file": str(self.selectors_file)},
            )

        self._selectors = _deep_merge(self._selectors, loaded)
        logger.info(f"Selectors loaded (version: {self._selectors.get('version', 'unknown')})")

    @property
    def version(self) -> str:
        return str(self._selectors.get("version", "unknown"))

    def _resolve(self, path: str) -> Any:
        value: Any = self._selectors
        for key in path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return None
        return value

    def get(self, path: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get selector by dot-notation path.

        Args:
            path: Dot-separated path (e.g., "listing.reserve_button")
            default: Default value if not found

        Returns:
            Primary selector string or default
        """
        value = self._resolve(path)
        if isinstance(value, dict) and "primary" in value:
            value = value["primary"]
        return value if isinstance(value, str) else default

    def get_fallbacks(self, path: str) -> List[str]:
        """Fallback selectors for a path, without the primary."""
        value = self._resolve(path)
        if isinstance(value, dict) and "fallbacks" in value:
            fallbacks = value["fallbacks"]
            return list(fallbacks) if isinstance(fallbacks, list) else [fallbacks]
        return []

    def section(self, name: str) -> Dict[str, Any]:
        """
        Copy of one page's locator section.

        Raises:
            ConfigurationError: If the section does not exist
        """
        value = self._selectors.get(name)
        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Unknown locator section: {name}", details={"section": name}
            )
        return copy.deepcopy(value)
