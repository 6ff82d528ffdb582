# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
检查用的临时身份 (密钥对).
"""

__all__ = [
    "CURVE",
    "Identity",
    "generate",
]

import base64
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from typing import Any, Dict

CURVE = "ed25519"


@dataclass(eq=False)
class Identity:
    """
    临时 Ed25519 身份.

    每次检查生成一个, 不持久化, 不在检查之间共享.
    加密格式可以在 cache 中缓存由私钥派生的密钥材料.
    """

    public: bytes
    """32 字节 Ed25519 公钥."""

    private: bytes
    """64 字节私钥: 种子 + 公钥 (libsodium 格式)."""

    curve: str = CURVE

    cache: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def id(self) -> str:
        """feed id, 形如 ``@<base64 公钥>.ed25519``."""
        return f"@{base64.b64encode(self.public).decode()}.{self.curve}"


def generate() -> Identity:
    """
    随机生成身份.
    """
    private_key = Ed25519PrivateKey.generate()

    seed = private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )

    return Identity(public=public, private=seed + public)
