# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

import base64
import secrets
from threading import Event, Timer

import pytest
from nacl.bindings import (
    crypto_sign_ed25519_pk_to_curve25519,
    crypto_sign_ed25519_sk_to_curve25519,
)
from nacl.exceptions import CryptoError
from nacl.public import PrivateKey, PublicKey, SealedBox
from nacl.secret import SecretBox
from typing import Callable, List, Optional

from encryption_format_check import FormatChecker, FormatCheckError
from encryption_format_check.options import EncryptionOptions

SLOT_LEN = SecretBox.KEY_SIZE + 48
"""每个接收方一份: 消息密钥 + sealed box 开销 (临时公钥 32 字节, MAC 16 字节)."""

MAX_RECIPIENTS = 7


class BoxFormat:
    """
    多接收方加密格式: 每个接收方一份 sealed box 封装的消息密钥, 正文用 SecretBox 加密.

    setup() 通过定时器异步完成.
    """

    name = "box"

    def __init__(self, delay: float = 0.05):
        self.delay = delay
        self.setup_called = False
        self.exchange_key_derivations = 0

    def setup(self, config: dict, done: Callable[[], None]) -> None:
        def finish():
            self.setup_called = True
            done()

        Timer(self.delay, finish).start()

    @staticmethod
    def _recipient_key(recp: str) -> PublicKey:
        if not (recp.startswith("@") and recp.endswith(".ed25519")):
            raise ValueError(f"box does not support recipient {recp}")
        ed_pk = base64.b64decode(recp[1:-8])
        return PublicKey(crypto_sign_ed25519_pk_to_curve25519(ed_pk))

    def encrypt(self, plaintext: bytes, opts: EncryptionOptions) -> bytes:
        recipients = [self._recipient_key(recp) for recp in opts.recps]
        if not 0 < len(recipients) <= MAX_RECIPIENTS:
            raise ValueError("box supports 1 to 7 recipients")

        msg_key = secrets.token_bytes(SecretBox.KEY_SIZE)
        slots = b"".join(SealedBox(pk).encrypt(msg_key) for pk in recipients)
        return bytes([len(recipients)]) + slots + SecretBox(msg_key).encrypt(plaintext)

    def decrypt(self, ciphertext: bytes, opts: EncryptionOptions) -> Optional[bytes]:
        secret = opts.keys.cache.get("exchange_key")
        if secret is None:
            self.exchange_key_derivations += 1
            secret = PrivateKey(crypto_sign_ed25519_sk_to_curve25519(opts.keys.private))
            opts.keys.cache["exchange_key"] = secret

        count = ciphertext[0]
        body = ciphertext[1 + count * SLOT_LEN:]
        for i in range(count):
            slot = ciphertext[1 + i * SLOT_LEN:1 + (i + 1) * SLOT_LEN]
            if len(slot) != SLOT_LEN:
                break
            try:
                msg_key = SealedBox(secret).decrypt(slot)
            except CryptoError:
                continue
            return SecretBox(msg_key).decrypt(body)
        return None


class CheckResult:
    """回调式检查的结果收集器."""

    def __init__(self):
        self.finished = Event()
        self.calls: List[Optional[FormatCheckError]] = []

    def callback(self, err: Optional[FormatCheckError] = None) -> None:
        self.calls.append(err)
        self.finished.set()

    def wait(self, timeout: float = 5.0) -> Optional[FormatCheckError]:
        assert self.finished.wait(timeout), "callback was not invoked"
        assert len(self.calls) == 1
        return self.calls[0]


def run_check(
    descriptor: object,
    checker: Optional[FormatChecker] = None,
    on_setup_complete: Optional[Callable[[], None]] = None,
) -> Optional[FormatCheckError]:
    """执行检查并等待回调."""
    result = CheckResult()
    (checker or FormatChecker()).check(descriptor, on_setup_complete, result.callback)
    return result.wait()


@pytest.fixture
def box_format() -> BoxFormat:
    return BoxFormat()
