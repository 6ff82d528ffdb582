# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

__all__ = [
    "DEBUG",
    "INFO",
    "FORMAT",
    "LogConfig"
]

from dataclasses import dataclass

# Log level constants
DEBUG = "DEBUG"
INFO = "INFO"
# Log output format
FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"


@dataclass
class LogConfig:
    """Log file sink configuration."""

    rotation: int = 100  # Size limit for log files in MB
    retention: int = 7  # Days to retain log files
    compression: str = "zip"
    dir: str = "efc_log"
    filename: str = "efc.log"
    format: str = FORMAT
    level: str = INFO
