"""Configuration management for attrforge.

Two config zones:
- validation: how strictly default specifications are checked
- registry: extra modules that register types into the default registry

Config resolution order (highest priority first):
1. Programmatic (AttrforgeConfig constructed in code, installed via configure())
2. Environment variables (ATTRFORGE_ENFORCE_DEFAULT_ARITY, ATTRFORGE_TYPE_MODULES)
3. Config file (~/.config/attrforge/config.json)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "attrforge"
CONFIG_FILE = CONFIG_DIR / "config.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean from an env var / CLI string.

    Raises:
        ValueError: If the string is not a recognised boolean literal.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Invalid boolean: {value!r}. Expected one of: "
        f"{', '.join(sorted(_TRUE_VALUES | _FALSE_VALUES))}"
    )


def parse_module_list(value: str) -> list[str]:
    """Parse a comma-separated module list, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class ValidationConfig:
    """Default specification checks.

    - enforce_default_arity: reject callables whose required positional
      arguments don't fit the phase (0 for create, 0 or 1 for update)
    """

    enforce_default_arity: bool = True


@dataclass
class RegistryConfig:
    """Default type registry population.

    - type_modules: importable module names whose register_types(registry) hook
      adds extra types
    """

    type_modules: list[str] = field(default_factory=list)


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class AttrforgeConfig:
    """Top-level attrforge configuration.

    Examples:
        # Package use: no files needed
        config = AttrforgeConfig(
            validation=ValidationConfig(enforce_default_arity=False),
        )
        configure(config)

        # CLI use: loads from ~/.config/attrforge/config.json
        config = AttrforgeConfig.load()
    """

    validation: ValidationConfig = field(default_factory=ValidationConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)

    @classmethod
    def load(cls) -> "AttrforgeConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("ATTRFORGE_ENFORCE_DEFAULT_ARITY"):
            try:
                config.validation.enforce_default_arity = parse_bool(val)
            except ValueError:
                logger.warning(
                    "Invalid ATTRFORGE_ENFORCE_DEFAULT_ARITY=%r, ignoring", val
                )
        if val := os.environ.get("ATTRFORGE_TYPE_MODULES"):
            config.registry.type_modules = parse_module_list(val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/attrforge/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "validation": asdict(self.validation),
            "registry": asdict(self.registry),
        }


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: AttrforgeConfig, data: dict) -> None:
    """Apply a dict of values onto an AttrforgeConfig."""
    if "validation" in data and isinstance(data["validation"], dict):
        for k, v in data["validation"].items():
            if hasattr(config.validation, k):
                setattr(config.validation, k, bool(v))
            else:
                logger.warning("Unknown config key validation.%s, ignoring", k)
    if "registry" in data and isinstance(data["registry"], dict):
        modules = data["registry"].get("type_modules")
        if isinstance(modules, list):
            config.registry.type_modules = [str(m) for m in modules]
        elif modules is not None:
            logger.warning("Invalid registry.type_modules=%r, ignoring", modules)


# =============================================================================
# Global config singleton
# =============================================================================

_config: AttrforgeConfig | None = None


def get_config() -> AttrforgeConfig:
    """Get the global AttrforgeConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = AttrforgeConfig.load()
    return _config


def configure(config: AttrforgeConfig) -> None:
    """Set the global AttrforgeConfig programmatically.

    Use this when attrforge is used as a package:
        from attrforge.config import configure, AttrforgeConfig, ValidationConfig
        configure(AttrforgeConfig(validation=ValidationConfig(enforce_default_arity=False)))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
