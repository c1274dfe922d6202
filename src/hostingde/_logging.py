"""Logging utilities for the hostingde library."""

import logging
import time
from contextvars import ContextVar, Token

# NullHandler on root logger (library best practice)
_root = logging.getLogger("hostingde")
_root.addHandler(logging.NullHandler())

# Domain whose challenge record is currently being published or retracted
_current_domain: ContextVar[str | None] = ContextVar("current_domain", default=None)

REDACTED = "***"


def set_domain(domain: str | None) -> Token[str | None]:
    """Set the current domain for logging context.

    Args:
        domain: Domain whose challenge record is being handled.

    Returns:
        Token to reset the context.
    """
    return _current_domain.set(domain)


def reset_domain(token: Token[str | None]) -> None:
    """Reset domain context.

    Args:
        token: Token from set_domain() call.
    """
    _current_domain.reset(token)


def get_domain_extra() -> dict[str, str]:
    """Get domain info for log extra fields.

    Returns:
        Dict with 'domain', or empty dict when no domain is set.
    """
    domain = _current_domain.get()
    if domain is None:
        return {}
    return {"domain": domain}


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the hostingde namespace.

    Args:
        name: The module name (typically __name__).

    Returns:
        A logger instance for the module.
    """
    return logging.getLogger(name)


class Timer:
    """Context manager for timing operations.

    Usage:
        with Timer() as t:
            # do work
        print(f"Elapsed: {t.elapsed_ms}ms")
    """

    def __init__(self) -> None:
        self.elapsed_ms: float = 0
        self._start: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
