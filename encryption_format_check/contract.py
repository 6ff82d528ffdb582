# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
加密格式的契约版本.
"""

__all__ = ["ContractVersion", "EncryptionFormat"]

from enum import Enum

from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Tuple

from .assertions import (
    Assertion,
    assert_decrypt_returns_buffer,
    assert_encrypt_decrypt,
    assert_encrypt_returns_buffer,
    assert_has_methods,
    assert_has_name,
    assert_has_suffix,
    assert_name,
    assert_suffix,
)
from .options import EncryptionOptions, OptionsFactory, self_addressed, with_previous


class ContractVersion(Enum):
    """
    契约版本.

    BARE: 只要求 name.
    SUFFIXED: 还要求 suffix, 并在加密选项中带上作者和上一条消息.
    """

    BARE = "bare"
    SUFFIXED = "suffixed"

    @property
    def assertions(self) -> Tuple[Assertion, ...]:
        """按执行顺序排列的断言."""
        if self is ContractVersion.SUFFIXED:
            return (
                assert_has_name,
                assert_has_suffix,
                assert_has_methods,
                assert_name,
                assert_suffix,
                assert_encrypt_returns_buffer,
                assert_decrypt_returns_buffer,
                assert_encrypt_decrypt,
            )
        return (
            assert_has_name,
            assert_has_methods,
            assert_name,
            assert_encrypt_returns_buffer,
            assert_decrypt_returns_buffer,
            assert_encrypt_decrypt,
        )

    @property
    def encrypt_options(self) -> OptionsFactory:
        if self is ContractVersion.SUFFIXED:
            return with_previous
        return self_addressed


class EncryptionFormat(Protocol):
    """
    被检查的加密格式.

    可以是模块, 对象实例, 也可以是带有同名键的 Mapping.
    setup 可选; suffix 仅 SUFFIXED 契约要求.
    """

    name: str

    def setup(self, config: Dict[str, Any], done: Callable[[], None]) -> Optional[Awaitable[None]]: ...

    def encrypt(self, plaintext: bytes, opts: EncryptionOptions) -> bytes: ...

    def decrypt(self, ciphertext: bytes, opts: EncryptionOptions) -> bytes: ...
