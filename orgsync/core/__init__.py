"""Core domain types and logic."""

from .config import ConfigError, SyncConfig, load_config, load_config_if_present, read_token
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "SyncConfig",
    "load_config",
    "load_config_if_present",
    "read_token",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
