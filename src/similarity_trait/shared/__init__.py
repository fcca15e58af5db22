"""共有レイヤの公開インターフェース。"""

from .config import AppSettings, get_settings
from .exceptions import BaseAppError, ConfigurationError, DomainError, Result
from .logging import bound_context, configure_from_settings, configure_logging, get_logger
from .types import DTO, ValueObject, type_name

__all__ = [
    "AppSettings",
    "get_settings",
    "configure_logging",
    "configure_from_settings",
    "bound_context",
    "get_logger",
    "BaseAppError",
    "ConfigurationError",
    "DomainError",
    "Result",
    "ValueObject",
    "DTO",
    "type_name",
]
