"""Change and deletion handler registry.

Handlers are stored as ordered (pattern, handler) entries, one sequence per
event kind. Dispatch walks a sequence in registration order and calls every
handler whose pattern is absent or matches the path. Handlers run
synchronously; an exception from a handler propagates to whoever triggered
the dispatch and the remaining handlers for that path are not called.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from filetrack.tracking.ignore import Pattern, compile_pattern


class EventKind(Enum):
    """Kind of file event a handler is registered for."""

    CHANGED = "changed"
    DELETED = "deleted"


@runtime_checkable
class Handler(Protocol):
    """A unit of work run when a matching file event occurs.

    Any context the handler needs (a build pipeline, a cache, ...) is captured
    when the handler is constructed; dispatch only supplies the path.
    """

    def handle(self, path: str) -> None: ...


@dataclass(frozen=True, slots=True)
class FunctionHandler:
    """Adapts a plain ``callable(path)`` to the Handler protocol."""

    func: Callable[[str], object]

    def handle(self, path: str) -> None:
        self.func(path)


HandlerLike = Handler | Callable[[str], object]


def as_handler(handler: HandlerLike) -> Handler:
    if isinstance(handler, Handler):
        return handler
    if callable(handler):
        return FunctionHandler(handler)
    raise TypeError(
        f"Handler must be callable or define handle(path), got {type(handler).__name__}"
    )


@dataclass(frozen=True, slots=True)
class CallbackEntry:
    """One registration: an optional path pattern and its handler."""

    pattern: re.Pattern[str] | None
    handler: Handler

    def matches(self, path: str) -> bool:
        return self.pattern is None or self.pattern.search(path) is not None


class CallbackRegistry:
    """Ordered handler sequences for ``changed`` and ``deleted`` events."""

    def __init__(self) -> None:
        self._entries: dict[EventKind, list[CallbackEntry]] = {kind: [] for kind in EventKind}

    def register(
        self,
        kind: EventKind,
        pattern: Pattern | None = None,
        handler: HandlerLike | None = None,
    ) -> tuple[CallbackEntry, ...]:
        """Append an entry when ``handler`` is given; return the full sequence."""
        if handler is not None:
            compiled = (
                None
                if pattern is None
                else compile_pattern(pattern, field=f"{kind.value}.pattern")
            )
            self._entries[kind].append(CallbackEntry(compiled, as_handler(handler)))
        return self.entries(kind)

    def on_changed(
        self, pattern: Pattern | None = None, handler: HandlerLike | None = None
    ) -> tuple[CallbackEntry, ...]:
        return self.register(EventKind.CHANGED, pattern, handler)

    def on_deleted(
        self, pattern: Pattern | None = None, handler: HandlerLike | None = None
    ) -> tuple[CallbackEntry, ...]:
        return self.register(EventKind.DELETED, pattern, handler)

    def entries(self, kind: EventKind) -> tuple[CallbackEntry, ...]:
        return tuple(self._entries[kind])

    def dispatch(self, kind: EventKind, path: str) -> int:
        """Run matching handlers in registration order; return how many ran."""
        invoked = 0
        for entry in self._entries[kind]:
            if not entry.matches(path):
                continue
            entry.handler.handle(path)
            invoked += 1
        return invoked

    def dispatch_changed(self, path: str) -> int:
        return self.dispatch(EventKind.CHANGED, path)

    def dispatch_deleted(self, path: str) -> int:
        return self.dispatch(EventKind.DELETED, path)
