"""Configuration management for the offergrab client core.

Resolve once, freeze, then hand the frozen value to components:

- ResolvedConfig: merged configuration with audit metadata
- FrozenConfig: immutable configuration consumed by components
- SourceMap: origin of each configuration value
"""

from .api import load_config, resolve_config
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import KNOWN_GEO_PROVIDERS, OfferGrabSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "KNOWN_GEO_PROVIDERS",
    "ConfigFileError",
    "ConfigOrigin",
    "ConfigResolver",
    "FileConfigLoader",
    "FrozenConfig",
    "OfferGrabSettings",
    "ResolvedConfig",
    "SourceMap",
    "load_config",
    "resolve_config",
]
