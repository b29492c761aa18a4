"""
Backends sub-package for wmi-datetime.

Contains interchangeable calendar/time implementations behind the
DateTimeBackend ABC (base.py):
- stdlib.py implements StdlibBackend on ``datetime`` (default).
- timestamp.py implements PandasBackend on ``pandas.Timestamp``.

get_backend() resolves a backend by name (or passes an instance through).
Backends are stateless, so one shared instance per name is enough.
"""

from __future__ import annotations

import logging

from wmi_datetime.backends.base import DateTimeBackend
from wmi_datetime.backends.stdlib import StdlibBackend
from wmi_datetime.exceptions import ConfigValidationError

__all__ = ["DateTimeBackend", "StdlibBackend", "get_backend", "DEFAULT_BACKEND"]

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "stdlib"

_BACKENDS: dict[str, DateTimeBackend] = {}


def _get_backend_map() -> dict[str, DateTimeBackend]:
    """Lazily build the backend map so pandas is imported only when needed."""
    if not _BACKENDS:
        from wmi_datetime.backends.timestamp import PandasBackend

        _BACKENDS["stdlib"] = StdlibBackend()
        _BACKENDS["pandas"] = PandasBackend()
    return _BACKENDS


def get_backend(backend: str | DateTimeBackend | None = None) -> DateTimeBackend:
    """Resolve a backend name or instance.

    Args:
        backend: ``"stdlib"``, ``"pandas"``, a DateTimeBackend instance,
            or ``None`` for the default (stdlib).

    Raises:
        ConfigValidationError: If the name is not a known backend.
    """
    if isinstance(backend, DateTimeBackend):
        return backend
    name = DEFAULT_BACKEND if backend is None else backend
    backends = _get_backend_map()
    if name not in backends:
        raise ConfigValidationError(
            f"Unknown backend: '{name}'. Available backends: {sorted(backends)}"
        )
    logger.debug("Using %s backend", name)
    return backends[name]
