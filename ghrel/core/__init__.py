"""Core types: configuration, exit codes and the Result type."""

from .config import ConfigError, ReleaseConfiguration, find_config, load_config, resolve_version
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "ReleaseConfiguration",
    "find_config",
    "load_config",
    "resolve_version",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
