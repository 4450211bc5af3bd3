"""Environment variable configuration loading.

Reads ``OFFERGRAB_*`` variables, optionally after loading a ``.env`` file,
and coerces them through the settings schema.
"""

import os
from pathlib import Path
from typing import Any

from .schema import OfferGrabSettings

ENV_PREFIX = "OFFERGRAB_"


class EnvironmentConfigLoader:
    """Loads configuration from OFFERGRAB_* environment variables."""

    def load_env_config(self, env_file: str | Path | None = None) -> dict[str, Any]:
        """Load configuration from environment variables.

        Args:
            env_file: Optional .env file loaded into the environment first.
                Existing variables are never overwritten.

        Returns:
            Coerced values for the fields actually present in the environment.

        Raises:
            ValueError: If environment variables contain invalid values.
            FileNotFoundError: If ``env_file`` does not exist.
        """
        if env_file:
            self._load_env_file(env_file)

        env_values = {}
        for field_name in OfferGrabSettings.model_fields:
            env_var = f"{ENV_PREFIX}{field_name.upper()}"
            if env_var in os.environ:
                env_values[field_name] = os.environ[env_var]

        if not env_values:
            return {}

        try:
            settings = OfferGrabSettings(**env_values)
        except Exception as e:
            names = ", ".join(f"{ENV_PREFIX}{f.upper()}" for f in env_values)
            raise ValueError(
                f"Invalid environment variable values for: {names}. Error: {e}"
            ) from e
        return {field_name: getattr(settings, field_name) for field_name in env_values}

    def _load_env_file(self, env_file: str | Path) -> None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise FileNotFoundError(f"Environment file not found: {env_path}")

        try:
            with env_path.open(encoding="utf-8") as f:
                for line_num, raw in enumerate(f, 1):
                    line = raw.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" not in line:
                        raise ValueError(
                            f"Invalid format at line {line_num}: {line}. "
                            "Expected KEY=VALUE format."
                        )
                    key, value = (part.strip() for part in line.split("=", 1))
                    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                        value = value[1:-1]
                    os.environ.setdefault(key, value)
        except OSError as e:
            raise ValueError(f"Failed to read environment file {env_path}: {e}") from e
