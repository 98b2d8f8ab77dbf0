from .config import LogLevel, StoreConfig, get_store_config, load_store_config_from_env, set_store_config
from .exceptions import ConfigurationError, PermissionDenied, StoreError
from .interfaces import BaseStore
from .logging import (
    StoreLogFormatter,
    StoreLoggerAdapter,
    get_store_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)
from .path import Path
from .permissions import (
    CLEAR,
    Permission,
    PermissionRegistry,
    PermissionResolver,
    ResolutionMode,
    registry,
    restrict,
)
from .store import Store
from .values import Lazy, preprocess

__all__ = [
    'BaseStore',
    'Store',
    'Lazy',
    'Path',
    'preprocess',
    'CLEAR',
    'Permission',
    'PermissionRegistry',
    'PermissionResolver',
    'ResolutionMode',
    'registry',
    'restrict',
    'StoreError',
    'PermissionDenied',
    'ConfigurationError',
    'StoreConfig',
    'LogLevel',
    'get_store_config',
    'set_store_config',
    'load_store_config_from_env',
    'safe_preview',
    'redact_secrets',
    'safe_log_value',
    'StoreLogFormatter',
    'StoreLoggerAdapter',
    'setup_logging',
    'get_store_logger',
]
