"""Public API for the configuration system."""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .types import FrozenConfig, ResolvedConfig

_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > Project file > Defaults.

    Args:
        programmatic: Dictionary of overrides. Only known fields are used.
        use_env_file: Optional path to a .env file loaded before reading
                     environment variables.
        project_root: Directory to search for pyproject.toml. If None,
                     searches current directory and parents.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ValueError: If validation fails or environment values are invalid.
        ConfigFileError: If pyproject.toml exists but is malformed.

    Example:
        config = resolve_config({"request_timeout": 10})
        invoker = Invoker.from_config(config.to_frozen(), channel=functions)
    """
    return _resolver.resolve(
        programmatic=programmatic,
        use_env_file=use_env_file,
        project_root=project_root,
    )


def load_config(programmatic: dict[str, Any] | None = None) -> FrozenConfig:
    """Resolve and freeze configuration in one step."""
    return resolve_config(programmatic).to_frozen()
