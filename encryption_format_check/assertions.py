# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
加密格式的各项断言.

每个断言要么静默通过, 要么抛出 FormatCheckError 的子类.
"""

__all__ = [
    "Assertion",
    "CheckContext",
    "assert_decrypt_returns_buffer",
    "assert_encrypt_decrypt",
    "assert_encrypt_returns_buffer",
    "assert_has_methods",
    "assert_has_name",
    "assert_has_suffix",
    "assert_name",
    "assert_suffix",
    "get_field",
    "is_buffer",
]

import re
from collections.abc import Mapping
from dataclasses import dataclass

from typing import Any, Callable

from . import error
from .keys import Identity
from .options import PLAINTEXT, EncryptionOptions, OptionsFactory, with_author

NAME_PATTERN = re.compile(r"[a-z0-9]+")


def get_field(descriptor: object, key: str) -> Any:
    """读取格式的字段, 支持 Mapping 和普通对象 (模块, 实例等)."""
    if isinstance(descriptor, Mapping):
        return descriptor.get(key)
    return getattr(descriptor, key, None)


def is_buffer(value: object) -> bool:
    return isinstance(value, (bytes, bytearray))


@dataclass(eq=False)
class CheckContext:
    """一次检查中各断言共享的上下文."""

    descriptor: object

    keys: Identity

    encrypt_options: OptionsFactory

    @property
    def name(self) -> str:
        return get_field(self.descriptor, "name")

    def encrypt(self, plaintext: bytes, opts: EncryptionOptions) -> Any:
        return self._call("encrypt", plaintext, opts)

    def decrypt(self, ciphertext: Any, opts: EncryptionOptions) -> Any:
        return self._call("decrypt", ciphertext, opts)

    def _call(self, method: error.MethodName, *args: Any) -> Any:
        func = get_field(self.descriptor, method)
        try:
            return func(*args)
        except Exception as e:
            raise error.FormatRaisedError(self.name, method, str(e) or type(e).__name__) from e


Assertion = Callable[[CheckContext], None]


def assert_has_name(ctx: CheckContext) -> None:
    name = get_field(ctx.descriptor, "name")
    if not name or not isinstance(name, str):
        raise error.MissingFieldError(None, "name")


def assert_has_methods(ctx: CheckContext) -> None:
    name = ctx.name
    if not callable(get_field(ctx.descriptor, "encrypt")):
        raise error.MissingMethodError(name, "encrypt")

    if not callable(get_field(ctx.descriptor, "decrypt")):
        raise error.MissingMethodError(name, "decrypt")


def assert_has_suffix(ctx: CheckContext) -> None:
    suffix = get_field(ctx.descriptor, "suffix")
    if not suffix or not isinstance(suffix, str):
        raise error.MissingFieldError(ctx.name, "suffix")


def _assert_identifier(ctx: CheckContext, field: error.FieldName) -> None:
    value: str = get_field(ctx.descriptor, field)
    if "." in value:
        raise error.InvalidNameDotError(ctx.name, field, value)
    if not NAME_PATTERN.fullmatch(value):
        raise error.InvalidNameCharsError(ctx.name, field, value)


def assert_name(ctx: CheckContext) -> None:
    """name 会成为消息标签的一部分, 其中 "." 是分隔符."""
    _assert_identifier(ctx, "name")


def assert_suffix(ctx: CheckContext) -> None:
    _assert_identifier(ctx, "suffix")


def assert_encrypt_returns_buffer(ctx: CheckContext) -> None:
    ciphertext = ctx.encrypt(PLAINTEXT, ctx.encrypt_options(ctx.keys))
    if not is_buffer(ciphertext):
        raise error.EncryptNotBufferError(ctx.name, ciphertext)


def assert_decrypt_returns_buffer(ctx: CheckContext) -> None:
    ciphertext = ctx.encrypt(PLAINTEXT, ctx.encrypt_options(ctx.keys))
    plaintext = ctx.decrypt(ciphertext, with_author(ctx.keys))
    if not is_buffer(plaintext):
        raise error.DecryptNotBufferError(ctx.name, plaintext)


def assert_encrypt_decrypt(ctx: CheckContext) -> None:
    ciphertext = ctx.encrypt(PLAINTEXT, ctx.encrypt_options(ctx.keys))
    plaintext = ctx.decrypt(ciphertext, with_author(ctx.keys))
    if not is_buffer(plaintext) or bytes(plaintext) != PLAINTEXT:
        raise error.RoundTripMismatchError(ctx.name, PLAINTEXT, plaintext)
