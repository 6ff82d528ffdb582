__all__ = [
    "DEBUG",
    "INFO",
    "FORMAT",
    "LogConfig",
    "debug",
    "info",
    "warning",
    "init_log_config"
]

from .config import DEBUG, INFO, FORMAT, LogConfig
from .logger import init_log_config, info, debug, warning

# stdout only; file sinks are added from CheckerConfig.log_config
init_log_config()
