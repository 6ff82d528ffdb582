# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
检查器配置.
"""

import json
import os
from dataclasses import dataclass

from typing import TYPE_CHECKING, Optional
from typing_extensions import Self

if TYPE_CHECKING:
    from _typeshed import GenericPath
else:
    GenericPath = str

from . import error
from .contract import ContractVersion
from .log import LogConfig


@dataclass
class CheckerConfig:
    """
    加密格式检查器配置.
    """

    contract: str = ContractVersion.BARE.value
    """
    契约版本, "bare" 或 "suffixed".
    """

    setup_timeout: Optional[float] = None
    """
    等待 setup() 完成的超时时间 (秒).
    为空表示一直等待 (默认).
    """

    log_config: Optional[str] = None
    """
    日志文件配置, json 格式的字符串, 字段同 LogConfig.
    为空表示只输出到 stdout (默认).
    """

    def __post_init__(self):
        try:
            ContractVersion(self.contract)
        except ValueError as e:
            raise error.ConfigError(self, f"Unknown contract {self.contract!r}") from e

        if self.setup_timeout is not None and self.setup_timeout <= 0:
            raise error.ConfigError(self, "setup_timeout must be positive")

    @property
    def contract_version(self) -> ContractVersion:
        return ContractVersion(self.contract)

    def log_file_config(self) -> Optional[LogConfig]:
        """解析 log_config."""
        if not self.log_config:
            return None
        try:
            return LogConfig(**json.loads(self.log_config))
        except (ValueError, TypeError) as e:
            raise error.ConfigError(self, f"Invalid log_config: {e}") from e

    @classmethod
    def from_file(cls, path: GenericPath) -> Self:
        """从文件读取配置对象."""

        with open(path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_dict(cls, obj: dict) -> Self:
        """从 dict 对象创建配置对象."""

        obj.pop("$schema", None)

        return cls(**obj)

    @classmethod
    def from_env(cls, env_key: str) -> Self:
        """从环境变量读取配置对象."""

        config = os.getenv(env_key, "{}")
        return cls.from_dict(json.loads(config))
