# Copyright (c) 2025 Beijing Volcano Engine Technology Co., Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
加密格式检查错误类型.
"""

from dataclasses import dataclass, field
from enum import Enum

from typing import Literal, Optional

FieldName = Literal["name", "suffix"]

MethodName = Literal["setup", "encrypt", "decrypt"]


class ErrorKind(Enum):
    CONFIG = "config"

    MISSING_FIELD = "missing_field"
    MISSING_METHOD = "missing_method"
    INVALID_NAME_DOT = "invalid_name_dot"
    INVALID_NAME_CHARS = "invalid_name_chars"

    ENCRYPT_NOT_BUFFER = "encrypt_not_buffer"
    DECRYPT_NOT_BUFFER = "decrypt_not_buffer"
    ROUND_TRIP_MISMATCH = "round_trip_mismatch"

    FORMAT_RAISED = "format_raised"
    SETUP_TIMEOUT = "setup_timeout"


class FormatCheckError(Exception):
    kind: ErrorKind


def _prefix(format_name: Optional[str]) -> str:
    if format_name is None:
        return "Your encryption format"
    return f'Your encryption format "{format_name}"'


@dataclass
class ConfigError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.CONFIG)

    config_object: object
    message: str

    def __str__(self) -> str:
        return f"{self.config_object}: {self.message}"


@dataclass
class MissingFieldError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.MISSING_FIELD)

    format_name: Optional[str]
    field: FieldName

    def __str__(self) -> str:
        return f'{_prefix(self.format_name)} requires the field "{self.field}" as a string'


@dataclass
class MissingMethodError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.MISSING_METHOD)

    format_name: str
    method: MethodName

    def __str__(self) -> str:
        return f'{_prefix(self.format_name)} requires the function "{self.method}()"'


@dataclass
class InvalidNameDotError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.INVALID_NAME_DOT)

    format_name: str
    field: FieldName
    value: str

    def __str__(self) -> str:
        return (
            f'{_prefix(self.format_name)} has a {self.field} "{self.value}" with a dot. '
            "This is not allowed."
        )


@dataclass
class InvalidNameCharsError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.INVALID_NAME_CHARS)

    format_name: str
    field: FieldName
    value: str

    def __str__(self) -> str:
        return (
            f'{_prefix(self.format_name)} has a {self.field} "{self.value}" '
            "with invalid characters. This is not allowed."
        )


@dataclass
class EncryptNotBufferError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.ENCRYPT_NOT_BUFFER)

    format_name: str
    value: object

    def __str__(self) -> str:
        return f"{_prefix(self.format_name)} encrypt() function must return a buffer"


@dataclass
class DecryptNotBufferError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.DECRYPT_NOT_BUFFER)

    format_name: str
    value: object

    def __str__(self) -> str:
        return f"{_prefix(self.format_name)} decrypt() function must return a buffer"


@dataclass
class RoundTripMismatchError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.ROUND_TRIP_MISMATCH)

    format_name: str
    expected: bytes
    actual: bytes

    def __str__(self) -> str:
        return (
            f"{_prefix(self.format_name)} decrypt() function must return "
            "the same plaintext as encrypt() received"
        )


@dataclass
class FormatRaisedError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.FORMAT_RAISED)

    format_name: Optional[str]
    method: MethodName
    message: str

    def __str__(self) -> str:
        return f"{_prefix(self.format_name)} {self.method}() function raised: {self.message}"


@dataclass
class SetupTimeoutError(FormatCheckError):
    kind: ErrorKind = field(init=False, repr=False, default=ErrorKind.SETUP_TIMEOUT)

    format_name: Optional[str]
    timeout: float

    def __str__(self) -> str:
        return (
            f"{_prefix(self.format_name)} setup() did not signal completion "
            f"within {self.timeout} seconds"
        )
