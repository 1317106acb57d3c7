"""Query operations as a closed set of typed values.

Each operation is a frozen dataclass carrying its own parameters.  Handlers
are registered per operation type and :func:`run` dispatches on the type of
the value it is given.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from . import query
from .errors import KeyNotFoundError
from .query import ErrorHandler, log_error
from .store import Store

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOFILE = 1
EXIT_NOKEY = 2


@dataclass(frozen=True)
class ListSections:
    pass


@dataclass(frozen=True)
class ListKeys:
    section: str


@dataclass(frozen=True)
class ListAllKeys:
    pass


@dataclass(frozen=True)
class Exists:
    key: str


@dataclass(frozen=True)
class Print:
    key: str


@dataclass(frozen=True)
class GrepKeys:
    pattern: str
    extended: bool = False


@dataclass(frozen=True)
class GrepValues:
    pattern: str
    extended: bool = False


Operation = Union[ListSections, ListKeys, ListAllKeys, Exists, Print, GrepKeys, GrepValues]


@dataclass(frozen=True)
class Outcome:
    """What an operation produced: an exit status and output items.

    ``items`` is None when the operation prints nothing at all; ``single``
    marks operations that produce at most one scalar value.
    """

    status: int = EXIT_OK
    items: tuple[str, ...] | None = None
    single: bool = False


Handler = Callable[[Operation, Store, ErrorHandler], Outcome]

_HANDLERS: dict[type, Handler] = {}


def handles(op_type: type) -> Callable[[Handler], Handler]:
    """Register the decorated function as the handler for ``op_type``."""

    def deco(func: Handler) -> Handler:
        _HANDLERS[op_type] = func
        return func

    return deco


@handles(ListSections)
def _list_sections(op: ListSections, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(items=tuple(query.list_sections(store)))


@handles(ListKeys)
def _list_keys(op: ListKeys, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(items=tuple(query.list_keys(store, op.section)))


@handles(ListAllKeys)
def _list_all_keys(op: ListAllKeys, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(items=tuple(query.list_all_keys(store)))


@handles(Exists)
def _exists(op: Exists, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(status=EXIT_OK if query.exists(store, op.key) else EXIT_NOKEY)


@handles(Print)
def _print(op: Print, store: Store, on_error: ErrorHandler) -> Outcome:
    try:
        value = query.get_value(store, op.key)
    except KeyNotFoundError:
        return Outcome(status=EXIT_NOKEY)
    return Outcome(items=() if value is None else (value,), single=True)


@handles(GrepKeys)
def _grep_keys(op: GrepKeys, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(items=tuple(query.grep_keys(store, op.pattern, op.extended, on_error=on_error)))


@handles(GrepValues)
def _grep_values(op: GrepValues, store: Store, on_error: ErrorHandler) -> Outcome:
    return Outcome(items=tuple(query.grep_values(store, op.pattern, op.extended, on_error=on_error)))


def run(op: Operation, store: Store, *, on_error: ErrorHandler = log_error) -> Outcome:
    try:
        handler = _HANDLERS[type(op)]
    except KeyError:
        raise TypeError(f"Unknown operation: {op!r}") from None
    logger.debug("Running %r", op)
    return handler(op, store, on_error)
