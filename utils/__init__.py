"""Collaborators shared by the resolvers: file access, caching, logging, settings."""

from .cache import FileCache, file_cache
from .filesystem import read_file, file_exists, dir_exists, read_manifest
from .log import TraceLevel, configure_logging
from .config import Settings, ConfigError, load_settings

__all__ = [
    "FileCache",
    "file_cache",
    "read_file",
    "file_exists",
    "dir_exists",
    "read_manifest",
    "TraceLevel",
    "configure_logging",
    "Settings",
    "ConfigError",
    "load_settings",
]
