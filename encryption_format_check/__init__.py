__all__ = [
    "CheckerConfig",
    "ContractVersion",
    "EncryptionFormat",
    "EncryptionOptions",
    "FormatCheckError",
    "FormatChecker",
    "Identity",
    "check",
    "check_async",
    "error",
]

from . import error
from .checker import FormatChecker, check, check_async
from .config import CheckerConfig
from .contract import ContractVersion, EncryptionFormat
from .error import FormatCheckError
from .keys import Identity
from .options import EncryptionOptions
