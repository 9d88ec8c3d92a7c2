"""Query-string rendering for ``?action=...`` operations.

Both caches and counters expose non-CRUD verbs (``clear``, ``keys``,
``increment``, ``compareAndSet`` ...) as an ``action`` query parameter,
sometimes followed by numeric arguments. :class:`Action` is the one renderer
used by every builder.
"""

from __future__ import annotations

import enum
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field


class Action(BaseModel):
    """An action name plus its ordered query arguments.

    Example::

        >>> Action(name="add", args={"delta": 5}).to_query()
        'action=add&delta=5'
    """

    model_config = ConfigDict(frozen=True)

    name: str
    args: dict[str, int] = Field(default_factory=dict)

    def to_query(self) -> str:
        return urlencode([("action", self.name), *self.args.items()])


class CacheAction(enum.Enum):
    """Cache actions. The wire name is always the lowercased member name."""

    CLEAR = enum.auto()
    CONFIG = enum.auto()
    KEYS = enum.auto()
    SIZE = enum.auto()
    STATS = enum.auto()

    def to_action(self) -> Action:
        return Action(name=self.name.lower())


def add(delta: int) -> Action:
    return Action(name="add", args={"delta": delta})


def increment() -> Action:
    return Action(name="increment")


def decrement() -> Action:
    return Action(name="decrement")


def reset() -> Action:
    return Action(name="reset")


def compare_and_set(expect: int, update: int) -> Action:
    return Action(name="compareAndSet", args={"expect": expect, "update": update})


def compare_and_swap(expect: int, update: int) -> Action:
    return Action(name="compareAndSwap", args={"expect": expect, "update": update})
