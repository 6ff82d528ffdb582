# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

__all__ = [
    "debug",
    "info",
    "warning",
    "init_log_config"
]

import os
import sys
from typing import Any

from loguru import logger

from .config import FORMAT, LogConfig

PREFIX = "[efc]:"


def _stdout_level() -> str:
    return os.environ.get("LOG_LEVEL") or os.environ.get("log_level") or "INFO"


def init_log_config(*configs: LogConfig):
    """Replace all sinks: stdout, plus one rotating file per config."""
    logger.remove()
    logger.add(sink=sys.stdout, format=FORMAT, level=_stdout_level())

    for config in configs:
        os.makedirs(config.dir or "efc_log", exist_ok=True)
        logger.add(
            sink=os.path.join(config.dir or "efc_log", config.filename or "efc.log"),
            rotation=f"{config.rotation if config.rotation > 0 else 100} MB",
            retention=f"{config.retention if config.retention > 0 else 7} days",
            compression=config.compression,
            format=config.format,
            level=config.level
        )


def debug(message: str, *args: Any, **kwargs: Any) -> None:
    logger.opt(depth=1).debug(PREFIX + message, *args, **kwargs)


def info(message: str, *args: Any, **kwargs: Any) -> None:
    logger.opt(depth=1).info(PREFIX + message, *args, **kwargs)


def warning(message: str, *args: Any, **kwargs: Any) -> None:
    logger.opt(depth=1).warning(PREFIX + message, *args, **kwargs)
