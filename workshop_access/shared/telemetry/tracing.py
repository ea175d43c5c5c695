"""Span decorator for permission checks and role mutations (PermissionEngine, RoleService).

Uses the OpenTelemetry API only; spans are no-ops unless the host
process installs a tracer provider.
"""

import asyncio
import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_TRACER_NAME = "workshop_access"

# Identifiers and permission coordinates recorded on spans; nothing else is.
_RECORDED_ARGS = frozenset({
    "actor_id", "tenant_id", "user_id", "role_id",
    "action", "resource", "scope", "scope_id",
})


def _bound_attributes(signature: inspect.Signature, args: tuple, kwargs: dict) -> dict[str, str]:
    """Map call arguments to span attributes, positional or keyword alike."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {
        f"access.{name}": str(value)
        for name, value in bound.arguments.items()
        if name in _RECORDED_ARGS and value is not None
    }


def traced(
    operation_name: str | None = None,
    attributes: dict | None = None,
) -> Callable:
    """Run an async function inside a span.

    Arguments named in _RECORDED_ARGS become access.<name> attributes.
    Exceptions are recorded on the span and re-raised.

    Args:
        operation_name: Span name (defaults to module.qualname).
        attributes: Static attributes set on every span.
    """

    def decorator(func: Callable) -> Callable:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"traced() expects an async function, got {func!r}")
        tracer = trace.get_tracer(_TRACER_NAME)
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                span.set_attributes({**(attributes or {}), **_bound_attributes(signature, args, kwargs)})
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                    raise
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
