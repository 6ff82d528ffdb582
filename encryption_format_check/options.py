# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
传给 encrypt() / decrypt() 的选项.

检查时没有第二个参与方, 临时身份既是作者也是唯一接收方.
"""

__all__ = [
    "PLAINTEXT",
    "PREVIOUS_MSG_ID",
    "EncryptionOptions",
    "OptionsFactory",
    "self_addressed",
    "with_author",
    "with_previous",
]

from dataclasses import dataclass

from typing import Callable, List, Optional

from .keys import Identity

PLAINTEXT = "hello world".encode("utf-8")

PREVIOUS_MSG_ID = "%H5sMnwT3SX7f4aTFCzOsHd8vk1BMS0mBxbJQnNWhvlk=.sha256"
"""示例的上一条消息 id."""


@dataclass(eq=False, frozen=True)
class EncryptionOptions:
    recps: List[str]
    keys: Identity
    author: Optional[str] = None
    previous: Optional[str] = None


OptionsFactory = Callable[[Identity], EncryptionOptions]


def self_addressed(keys: Identity) -> EncryptionOptions:
    return EncryptionOptions(recps=[keys.id], keys=keys)


def with_author(keys: Identity) -> EncryptionOptions:
    return EncryptionOptions(recps=[keys.id], keys=keys, author=keys.id)


def with_previous(keys: Identity) -> EncryptionOptions:
    return EncryptionOptions(
        recps=[keys.id], keys=keys, author=keys.id, previous=PREVIOUS_MSG_ID
    )
