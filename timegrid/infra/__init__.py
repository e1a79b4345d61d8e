"""Process-level configuration and logging."""

from timegrid.infra.config import load_default_env_files, load_env_file, load_scheduler_config
from timegrid.infra.logging import JsonFormatter, LoggingConfig, configure_logging, setup_logging

__all__ = [
    "JsonFormatter",
    "LoggingConfig",
    "configure_logging",
    "load_default_env_files",
    "load_env_file",
    "load_scheduler_config",
    "setup_logging",
]
