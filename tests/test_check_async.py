# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

import asyncio

import pytest

from encryption_format_check import CheckerConfig, FormatChecker, check_async, error

from .conftest import BoxFormat


class AsyncSetupFormat:
    """setup() 是协程的格式."""

    name = "aplain"

    def __init__(self):
        self.events = []

    async def setup(self, config, done):
        await asyncio.sleep(0.01)
        self.events.append("setup")
        done()

    def encrypt(self, plaintext, opts):
        self.events.append("encrypt")
        return plaintext

    def decrypt(self, ciphertext, opts):
        return ciphertext


def test_async_box_format_passes(box_format: BoxFormat):
    """测试协程接口: setup() 在其他线程完成."""

    asyncio.run(check_async(box_format))

    assert box_format.setup_called


def test_async_failure_raises():
    """测试协程接口在检查失败时抛出错误."""

    with pytest.raises(error.MissingMethodError, match=r'requires the function "encrypt\(\)"'):
        asyncio.run(check_async({"name": "cool"}))


def test_async_setup_coroutine_and_hook():
    """测试 setup() 返回协程时先等待它, hook 在 encrypt() 之前调用."""

    descriptor = AsyncSetupFormat()

    asyncio.run(check_async(descriptor, lambda: descriptor.events.append("hook")))

    assert descriptor.events[:3] == ["setup", "hook", "encrypt"]


def test_async_setup_exception():
    """测试协程接口中 setup() 抛出的异常."""

    def setup(config, done):
        raise OSError("boom")

    with pytest.raises(error.FormatRaisedError, match="boom"):
        asyncio.run(check_async({"name": "cool", "setup": setup}))


def test_async_setup_timeout():
    """测试协程接口的 setup 超时."""

    checker = FormatChecker(CheckerConfig(setup_timeout=0.05))
    descriptor = {"name": "slow", "setup": lambda config, done: None}

    with pytest.raises(error.SetupTimeoutError):
        asyncio.run(checker.check_async(descriptor))


def test_async_concurrent_checks():
    """测试多个检查并发执行互不干扰."""

    formats = [BoxFormat(delay=0.01 * i) for i in range(4)]
    broken = {"name": "broken", "encrypt": lambda p, o: p, "decrypt": lambda c, o: b"x"}

    async def run_all():
        return await asyncio.gather(
            *(check_async(f) for f in formats), check_async(broken), return_exceptions=True
        )

    results = asyncio.run(run_all())

    assert results[:4] == [None] * 4
    assert isinstance(results[4], error.RoundTripMismatchError)


def test_async_setup_raises_after_done():
    """测试协程接口中 setup() 完成后再抛出的异常直接传给调用方."""

    def setup(config, done):
        done()
        raise RuntimeError("late failure")

    encrypt = []
    descriptor = {"name": "plain", "setup": setup, "encrypt": lambda p, o: encrypt.append(p) or p, "decrypt": lambda c, o: c}

    with pytest.raises(RuntimeError, match="late failure"):
        asyncio.run(check_async(descriptor))

    assert encrypt == []
