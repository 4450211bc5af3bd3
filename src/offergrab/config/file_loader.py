"""File-based configuration loading.

Reads the ``[tool.offergrab]`` table of the nearest ``pyproject.toml``.
"""

from pathlib import Path
import tomllib
from typing import Any

from offergrab.exceptions import ConfigurationError


class ConfigFileError(ConfigurationError):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        """Initialize with file path, message, and optional cause."""
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads configuration from a project's pyproject.toml."""

    def load_project_config(self, project_root: Path | None = None) -> dict[str, Any]:
        """Load the ``[tool.offergrab]`` table.

        Args:
            project_root: Directory to search for pyproject.toml. If None,
                         searches current directory and parents.

        Returns:
            Dictionary of configuration values from the file.
            Empty dict if no file exists or it has no offergrab section.

        Raises:
            ConfigFileError: If the file exists but cannot be parsed, or the
                section is not a table.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        try:
            with Path(pyproject_path).open(mode="rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(
                pyproject_path, f"Failed to parse TOML: {e}", cause=e
            ) from e

        section = data.get("tool", {}).get("offergrab", {})
        if not isinstance(section, dict):
            raise ConfigFileError(pyproject_path, "[tool.offergrab] must be a table")
        return dict(section)

    def _find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        current = Path(start_dir or Path.cwd()).resolve()
        while True:
            candidate = current / "pyproject.toml"
            if candidate.exists():
                return candidate
            if current == current.parent:
                return None
            current = current.parent
