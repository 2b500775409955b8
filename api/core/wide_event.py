"""Request-scoped context for the canonical request log line.

RequestTimingMiddleware initializes the dict at request start and emits it
once at request end. Route handlers and services add fields as they go:

    from core.wide_event import set_wide_event_fields

    set_wide_event_fields(search_zip="90210", result_count=3)
    set_wide_event_nested("assignment", company_id=str(cid), outcome="created")
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any]] = ContextVar("wide_event")


def init_wide_event() -> dict[str, Any]:
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Returns an empty dict outside request context."""
    try:
        return _wide_event.get()
    except LookupError:
        return {}


def set_wide_event_field(key: str, value: Any) -> None:
    """No-op outside request context (CLI, tests)."""
    event = get_wide_event()
    if event:
        event[key] = value


def set_wide_event_fields(**kwargs: Any) -> None:
    """No-op outside request context (CLI, tests)."""
    event = get_wide_event()
    if event:
        event.update(kwargs)


def set_wide_event_nested(category: str, **kwargs: Any) -> None:
    """Set fields under a nested key.

    Example:
        set_wide_event_nested("company", id="...", category="hvac")
        # Results in: {"company": {"id": "...", "category": "hvac"}}
    """
    event = get_wide_event()
    if not event:
        return
    event.setdefault(category, {}).update(kwargs)


def clear_wide_event() -> None:
    _wide_event.set({})
