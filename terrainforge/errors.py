"""Exceptions raised by TerrainForge."""


class TerrainForgeError(Exception):
    """Base exception for TerrainForge errors."""

    pass


class ConfigError(TerrainForgeError, ValueError):
    """Raised when a render configuration is malformed."""

    pass
