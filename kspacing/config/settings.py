"""
SpacingConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> engine = ExplicitClusteringEngine.from_graph(graph)

    >>> # Explicit configuration
    >>> config = SpacingConfig(debug=True, label_base=0)
    >>> engine = ExplicitClusteringEngine.from_graph(graph, config=config)

    >>> # From config file
    >>> config = SpacingConfig.from_file("./kspacing.toml")

Environment Variables:
    KSPACING_DEBUG - Emit per-merge trace logging ("1", "true", "yes", "on")
    KSPACING_LABEL_BASE - Label of the first element in edge files
    KSPACING_CLUSTER_TARGET - Default k for the explicit model
    KSPACING_SPACING_THRESHOLD - Default T for the Hamming model
    KSPACING_VERIFY_MAX_VECTORS - Largest collection checked by brute force
    KSPACING_LOG_LEVEL - Root log level used by the CLI
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, cast

_TRUTHY = {"1", "true", "yes", "on"}


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return cast(dict[str, Any], tomllib.load(f))


class SpacingConfig:
    """Configuration for kspacing."""

    # === Tracing ===

    debug: bool = False
    """Log extra per-merge and per-candidate detail at DEBUG level"""

    log_level: str = "WARNING"
    """Root log level configured by the CLI"""

    # === Explicit Model ===

    label_base: int = 1
    """Label of the first element in edge files (the original data is 1-based)"""

    cluster_target: int = 4
    """Default number of clusters k"""

    # === Hamming Model ===

    spacing_threshold: int = 3
    """Default required spacing T"""

    verify_max_vectors: int = 2000
    """Largest distinct-vector count cross-checked against brute force"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        self.log_level = str(self.log_level).upper()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        import os

        if debug := os.getenv("KSPACING_DEBUG"):
            self.debug = debug.strip().lower() in _TRUTHY
        if level := os.getenv("KSPACING_LOG_LEVEL"):
            self.log_level = level.upper()
        if base := os.getenv("KSPACING_LABEL_BASE"):
            self.label_base = int(base)
        if target := os.getenv("KSPACING_CLUSTER_TARGET"):
            self.cluster_target = int(target)
        if threshold := os.getenv("KSPACING_SPACING_THRESHOLD"):
            self.spacing_threshold = int(threshold)
        if limit := os.getenv("KSPACING_VERIFY_MAX_VECTORS"):
            self.verify_max_vectors = int(limit)

    @classmethod
    def from_file(cls, path: str | Path) -> "SpacingConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened onto config keys.

        Example TOML:
            [logging]
            debug = true
            level = "INFO"

            [explicit]
            label_base = 1
            cluster_target = 4

            [hamming]
            spacing_threshold = 3
            verify_max_vectors = 2000

        Args:
            path: Path to TOML configuration file

        Returns:
            SpacingConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}
        sections = ("logging", "explicit", "hamming")

        for section in sections:
            for key, value in data.get(section, {}).items():
                # [logging] level -> log_level
                if section == "logging" and key == "level":
                    key = "log_level"
                flat_config[key] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in sections and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "SpacingConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | bool]] = {
            "logging": {
                "debug": self.debug,
                "level": self.log_level,
            },
            "explicit": {
                "label_base": self.label_base,
                "cluster_target": self.cluster_target,
            },
            "hamming": {
                "spacing_threshold": self.spacing_threshold,
                "verify_max_vectors": self.verify_max_vectors,
            },
        }

        # Build TOML string manually (avoids extra dependency)
        lines = ["# kspacing configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                else:
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "SpacingConfig":
        """Return new config with specified overrides."""
        new_config = SpacingConfig.__new__(SpacingConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        new_config.log_level = str(new_config.log_level).upper()
        return new_config
