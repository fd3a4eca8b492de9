"""
Structured JSON logging for the rent kernel.

Every record under the ``rent_kernel`` logger is written as one JSON object
per line.  Contract and payment ids bound through ``LogContext`` are added to
each record, so a status change logged deep inside a service still names the
payment that caused it.

Money is logged as text (``"16451.6129"``), never as a float.  Enum values
(payment categories, status kinds) are logged by value and a contract status
by its display text.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator
from uuid import UUID

_LOGGER_PREFIX = "rent_kernel"


# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"rent_log_{name}", default=None)
    for name in ("correlation_id", "contract_id", "payment_id", "actor_id")
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _CONTEXT_VARS[name]
    except KeyError:
        raise TypeError(
            f"Unknown log context field {name!r}; expected one of {sorted(_CONTEXT_VARS)}"
        ) from None


class LogContext:
    """
    Ids attached to every log record emitted in the current context.

    Backed by contextvars, so values are isolated per thread and per task.
    Fields: ``correlation_id``, ``contract_id``, ``payment_id``, ``actor_id``.
    """

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set context fields.  None values leave the field untouched."""
        for name, value in fields.items():
            if value is not None:
                _context_var(name).set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        """The fields currently set, in declaration order."""
        return {
            name: value
            for name, var in _CONTEXT_VARS.items()
            if (value := var.get()) is not None
        }

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """
        Set fields for the duration of a ``with`` block.

        On exit each field goes back to its previous value (None included).

        Usage:
            with LogContext.bind(contract_id=str(contract.id)):
                ...
        """
        tokens = []
        for name, value in fields.items():
            if value is not None:
                var = _context_var(name)
                tokens.append((var, var.set(value)))
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON formatting
# ---------------------------------------------------------------------------

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    render = getattr(value, "render", None)
    if callable(render):
        return render()
    return str(value)


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    Envelope: ``ts``, ``level``, ``logger``, ``message``.  Then the bound
    ``LogContext`` fields, then ``extra`` fields that do not collide with
    either.  For records logged with ``exc_info`` the exception type,
    message, kernel error ``code`` and the error's public attributes are
    added under ``exc_*`` keys, followed by the traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        )
        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_to_json)

    @staticmethod
    def _exception_fields(exc: BaseException) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        for key, value in vars(exc).items():
            if not key.startswith("_") and key != "code":
                fields[f"exc_{key}"] = value
        return fields


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``rent_kernel`` namespace, e.g. ``services.payment``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``rent_kernel`` logger.

    Only the first call has any effect; later calls return immediately.
    Records do not propagate to the root logger.

    Args:
        level: Level number or name (``"debug"`` and ``"DEBUG"`` both work).
        stream: Stream for the default handler.  Defaults to stderr.
        handler: Use this handler instead of a stream handler.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = level.upper()

    target = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(StructuredFormatter())

    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    kernel_logger.setLevel(level)
    kernel_logger.propagate = False
    kernel_logger.addHandler(target)


def reset_logging() -> None:
    """Remove the handler and allow ``configure_logging`` again.  Tests only."""
    global _configured
    with _lock:
        _configured = False
    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    kernel_logger.handlers.clear()
    kernel_logger.setLevel(logging.WARNING)
