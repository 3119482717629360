"""structlog processors: service/request context and credential redaction"""

import re
import socket
import sys
import traceback
from typing import Any

from structlog.contextvars import get_contextvars
from structlog.types import EventDict, WrappedLogger

REDACTED = "***REDACTED***"

# Any key containing one of these fragments is masked
SENSITIVE_KEYS = (
    "password", "passwd", "secret", "token", "authorization",
    "hash", "credential", "private_key", "api_key",
)

# Keys that merely describe a credential, never carry one
SAFE_KEYS = frozenset({"credential_workers", "bcrypt_rounds", "password_rehashed"})

# Modular crypt bcrypt strings, caught even under an innocent key
BCRYPT_VALUE = re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{22,53}")

REQUEST_KEYS = ("correlation_id", "request_method", "request_path", "client_ip")

_HOSTNAME = socket.gethostname()


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    from tresor.core.config import get_settings
    
    event_dict.setdefault("service", "tresor")
    event_dict.setdefault("environment", get_settings().environment)
    event_dict.setdefault("hostname", _HOSTNAME)
    return event_dict


def add_request_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Copy the request fields bound by the middlewares"""
    context = get_contextvars()
    for key in REQUEST_KEYS:
        if key in context:
            event_dict[key] = context[key]
    return event_dict


def is_sensitive_key(key: str) -> bool:
    lower_key = key.lower()
    if lower_key in SAFE_KEYS:
        return False
    return any(fragment in lower_key for fragment in SENSITIVE_KEYS)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if isinstance(key, str) and is_sensitive_key(key) else _redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(item) for item in value)
    if isinstance(value, str):
        return BCRYPT_VALUE.sub(REDACTED, value)
    return value


def sanitize_sensitive_data(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask credential-named fields and bcrypt hashes, at any depth"""
    return _redact(event_dict)


def format_exception_info(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Turn exc_info into a structured exception field"""
    exc_info = event_dict.pop("exc_info", None)
    if not exc_info:
        return event_dict
    
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    elif not isinstance(exc_info, tuple):
        exc_info = sys.exc_info()
    
    exc_type, exc_value, exc_tb = exc_info
    if exc_type is not None:
        event_dict["exception"] = {
            "type": exc_type.__name__,
            "message": str(exc_value),
            "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
        }
    return event_dict


def set_log_severity(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Upper-case severity field for log aggregators"""
    level = event_dict.get("level")
    if level:
        event_dict["severity"] = level.upper()
    return event_dict
