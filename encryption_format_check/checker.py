# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
加密格式检查器.

先完成 setup 握手, 再按契约版本规定的顺序逐项执行断言, 第一个失败即终止.
结果只投递一次: 成功为 None, 失败为 FormatCheckError.
"""

__all__ = [
    "CheckState",
    "Callback",
    "FormatChecker",
    "check",
    "check_async",
    "run_assertions",
]

import asyncio
import inspect
import threading
from dataclasses import dataclass, field
from enum import Enum
from threading import Timer

from typing import Any, Callable, Dict, Optional

from . import error, keys
from .assertions import CheckContext, get_field
from .config import CheckerConfig
from .contract import ContractVersion
from .log import init_log_config, logger

Callback = Callable[[Optional[error.FormatCheckError]], None]

SetupHook = Callable[[], None]


class CheckState(Enum):
    NOT_STARTED = "not_started"
    AWAITING_SETUP = "awaiting_setup"
    READY = "ready"
    RUNNING = "running"
    DONE = "done"


def _format_name(descriptor: object) -> Optional[str]:
    name = get_field(descriptor, "name")
    return name if isinstance(name, str) and name else None


def run_assertions(
    contract: ContractVersion, descriptor: object, identity: keys.Identity
) -> Optional[error.FormatCheckError]:
    """
    同步执行断言.

    Returns:
        第一个失败的断言抛出的错误, 全部通过时为 None.
    """
    ctx = CheckContext(descriptor, identity, contract.encrypt_options)
    try:
        for assertion in contract.assertions:
            assertion(ctx)
    except error.FormatCheckError as e:
        return e
    return None


class _OneShot:
    """只能触发一次的信号, 可跨线程使用."""

    def __init__(self):
        self._lock = threading.Lock()
        self._fired = False

    def claim(self) -> bool:
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True


class _CheckRun:
    """一次回调式检查的状态."""

    def __init__(
        self,
        config: CheckerConfig,
        descriptor: object,
        on_setup_complete: Optional[SetupHook],
        callback: Callback,
    ):
        self.contract = config.contract_version
        self.timeout = config.setup_timeout
        self.descriptor = descriptor
        self.on_setup_complete = on_setup_complete
        self.callback = callback

        self.state = CheckState.NOT_STARTED
        self.identity = keys.generate()
        self.setup_config: Dict[str, Any] = {"keys": self.identity}

        self._signal = _OneShot()
        self._timer: Optional[Timer] = None

    @property
    def format_name(self) -> Optional[str]:
        return _format_name(self.descriptor)

    def _transition(self, state: CheckState) -> None:
        logger.debug(f"format {self.format_name}: {self.state.value} -> {state.value}")
        self.state = state

    def start(self) -> None:
        logger.info(f"Checking encryption format {self.format_name} ({self.contract.value})")
        self._transition(CheckState.AWAITING_SETUP)

        setup = get_field(self.descriptor, "setup")
        if setup is None:
            self.done()
            return

        if self.timeout is not None:
            self._timer = Timer(self.timeout, self._expire)
            self._timer.daemon = True
            self._timer.start()

        try:
            result = setup(self.setup_config, self.done)
        except Exception as e:
            if not self._signal.claim():
                # done() already ran, the result has been delivered
                raise
            self._cancel_timer()
            self._finish(
                error.FormatRaisedError(self.format_name, "setup", str(e) or type(e).__name__)
            )
            return

        if inspect.isawaitable(result):
            close = getattr(result, "close", None)
            if close is not None:
                close()
            if self._signal.claim():
                self._cancel_timer()
                self._finish(
                    error.FormatRaisedError(
                        self.format_name, "setup", "setup() returned an awaitable; use check_async()"
                    )
                )

    def done(self) -> None:
        """setup() 的完成回调."""
        if not self._signal.claim():
            logger.warning(f"format {self.format_name}: setup completion signalled again, ignored")
            return
        self._cancel_timer()

        self._transition(CheckState.READY)
        if self.on_setup_complete is not None:
            self.on_setup_complete()

        self._transition(CheckState.RUNNING)
        self._finish(run_assertions(self.contract, self.descriptor, self.identity))

    def _expire(self) -> None:
        if not self._signal.claim():
            return
        self._finish(error.SetupTimeoutError(self.format_name, self.timeout))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def _finish(self, err: Optional[error.FormatCheckError]) -> None:
        self._transition(CheckState.DONE)
        if err is None:
            logger.info(f"Encryption format {self.format_name} passed all checks")
        else:
            logger.warning(f"Encryption format {self.format_name} failed: {err}")
        self.callback(err)


@dataclass(eq=False)
class FormatChecker:
    """
    加密格式检查器.

    本类不含可变状态, 多个检查可以并发执行.
    """

    config: CheckerConfig = field(default_factory=CheckerConfig)

    def __post_init__(self):
        log_config = self.config.log_file_config()
        if log_config is not None:
            init_log_config(log_config)

    def check(
        self,
        descriptor: object,
        on_setup_complete: Optional[Callable] = None,
        callback: Optional[Callback] = None,
    ) -> None:
        """
        检查加密格式, 结果通过 callback 投递.

        也接受 check(descriptor, callback) 的调用方式.
        callback 可能在 setup() 调用完成回调的线程中执行.
        """
        if callback is None:
            if on_setup_complete is None:
                raise TypeError("check() requires a callback")
            callback, on_setup_complete = on_setup_complete, None

        _CheckRun(self.config, descriptor, on_setup_complete, callback).start()

    async def check_async(
        self,
        descriptor: object,
        on_setup_complete: Optional[SetupHook] = None,
    ) -> None:
        """
        检查加密格式.

        setup() 可以返回 awaitable, 会先 await 它, 再等待完成回调.

        Raises:
            FormatCheckError: 第一个失败的断言.
        """
        contract = self.config.contract_version
        name = _format_name(descriptor)
        identity = keys.generate()
        setup_config: Dict[str, Any] = {"keys": identity}

        logger.info(f"Checking encryption format {name} ({contract.value})")

        loop = asyncio.get_running_loop()
        ready: asyncio.Future = loop.create_future()
        signal = _OneShot()

        def resolve() -> None:
            if not ready.done():
                ready.set_result(None)

        def done() -> None:
            if not signal.claim():
                logger.warning(f"format {name}: setup completion signalled again, ignored")
                return
            loop.call_soon_threadsafe(resolve)

        setup = get_field(descriptor, "setup")
        if setup is None:
            done()
        else:
            try:
                result = setup(setup_config, done)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                if not signal.claim():
                    # done() already signalled, same as the callback form
                    raise
                err = error.FormatRaisedError(name, "setup", str(e) or type(e).__name__)
                logger.warning(f"Encryption format {name} failed: {err}")
                raise err from e

        try:
            await asyncio.wait_for(ready, self.config.setup_timeout)
        except asyncio.TimeoutError:
            err = error.SetupTimeoutError(name, self.config.setup_timeout)
            logger.warning(f"Encryption format {name} failed: {err}")
            raise err from None

        if on_setup_complete is not None:
            on_setup_complete()

        failure = run_assertions(contract, descriptor, identity)
        if failure is not None:
            logger.warning(f"Encryption format {name} failed: {failure}")
            raise failure
        logger.info(f"Encryption format {name} passed all checks")


def check(
    descriptor: object,
    on_setup_complete: Optional[Callable] = None,
    callback: Optional[Callback] = None,
) -> None:
    """用默认配置 (BARE 契约, 无超时) 检查加密格式."""
    FormatChecker().check(descriptor, on_setup_complete, callback)


async def check_async(descriptor: object, on_setup_complete: Optional[SetupHook] = None) -> None:
    """用默认配置 (BARE 契约, 无超时) 检查加密格式."""
    await FormatChecker().check_async(descriptor, on_setup_complete)
