"""
rent_engines.tracer -- RENT_ENGINE_TRACE records for engine calls.

Responsibility:
    ``@traced_engine`` wraps a pure engine function and logs one structured
    record per call: engine name and version, a fingerprint of the chosen
    inputs, the duration and whether the call returned or raised.

Architecture position:
    Engines -- infrastructure for the pure calculation layer.  Emits a log
    record only; it never changes arguments or results.  Logs under
    ``rent_kernel.engines.tracer`` so the kernel's JSON handler picks it up.

Invariants enforced:
    - Equal inputs give equal fingerprints.  Money is normalized first, so a
      rent read back from the database as ``50000.000000000`` fingerprints
      like ``50000``.  Dataclass inputs (contracts, payments) are expanded
      field by field.
    - A call that raises is traced with ``outcome="error"`` and the error
      code, then the exception propagates unchanged.

Usage:
    @traced_engine("proration", "1.0", fingerprint_fields=("start", "end"))
    def compute_schedule(start, end, monthly_rent):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import fields, is_dataclass
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any

_logger = logging.getLogger("rent_kernel.engines.tracer")


def _canonicalize(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
            return format(value.normalize(), "f")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    if is_dataclass(value) and not isinstance(value, type):
        return _canonicalize({f.name: getattr(value, f.name) for f in fields(value)})
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """16 hex chars of SHA-256 over ``name=value`` pairs, absent names as null."""
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorator emitting RENT_ENGINE_TRACE for every call.

    Args:
        engine_name: Engine identifier, e.g. ``"proration"``.
        engine_version: Bumped when the engine's results change.
        fingerprint_fields: Parameter names hashed into
            ``input_fingerprint``.  Positional arguments are bound to their
            names first, so ``f(a, b)`` and ``f(a=a, b=b)`` trace the same.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        def fingerprint(args: tuple, kwargs: dict) -> str:
            if not fingerprint_fields:
                return ""
            try:
                bound = signature.bind_partial(*args, **kwargs).arguments
            except TypeError:
                bound = kwargs
            return compute_input_fingerprint(fingerprint_fields, bound)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            trace: dict[str, Any] = {
                "trace_type": "RENT_ENGINE_TRACE",
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint(args, kwargs),
                "function": func.__qualname__,
            }
            started = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                trace["outcome"] = "error"
                trace["error_code"] = getattr(exc, "code", type(exc).__name__)
                raise
            else:
                trace["outcome"] = "ok"
                return result
            finally:
                trace["duration_ms"] = round((time.monotonic() - started) * 1000, 2)
                _logger.info("RENT_ENGINE_TRACE", extra=trace)

        return wrapper

    return decorator
