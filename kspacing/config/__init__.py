"""
Configuration System

Manages configuration for kspacing with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to SpacingConfig())
    2. Environment variables (KSPACING_* prefix)
    3. Built-in defaults

A TOML file loaded with SpacingConfig.from_file() is applied as
programmatic overrides.

Modules:
    settings: SpacingConfig class
"""

from kspacing.config.settings import SpacingConfig

__all__ = ["SpacingConfig"]
