"""Configuration resolution with precedence handling.

Merges configuration sources in the documented order:
Programmatic > Environment > Project file > Defaults
"""

import logging
from pathlib import Path
from typing import Any

from offergrab.exceptions import ConfigurationError

from .env_loader import EnvironmentConfigLoader
from .file_loader import FileConfigLoader
from .schema import OfferGrabSettings
from .types import ConfigOrigin, ResolvedConfig

logger = logging.getLogger(__name__)


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        """Initialize the configuration resolver."""
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        use_env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence)
            use_env_file: Optional .env file to load
            project_root: Directory to search for pyproject.toml

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If validation fails (a ValueError subclass).
            ConfigFileError: If pyproject.toml is malformed.
        """
        merged: dict[str, Any] = {}
        origins: dict[str, ConfigOrigin] = {}

        def apply(values: dict[str, Any], origin: ConfigOrigin) -> None:
            for field, value in values.items():
                if field in OfferGrabSettings.model_fields:
                    merged[field] = value
                    origins[field] = origin
                else:
                    logger.debug("Ignoring unknown %s config field %r", origin, field)

        # Schema defaults are read from the field definitions so that the
        # environment does not leak into values marked as "default".
        apply(
            {name: f.default for name, f in OfferGrabSettings.model_fields.items()},
            "default",
        )
        apply(self.file_loader.load_project_config(project_root=project_root), "file")
        try:
            apply(self.env_loader.load_env_config(env_file=use_env_file), "env")
        except (ValueError, FileNotFoundError) as e:
            raise ConfigurationError(f"Environment configuration error: {e}") from e
        if programmatic:
            apply(programmatic, "programmatic")

        try:
            final = OfferGrabSettings(**merged).to_dict()
        except Exception as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(**final, origin=origins)
