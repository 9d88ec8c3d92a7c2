"""Requests for the counter endpoint ``/rest/v2/counters``.

Counter creation and increment are builders so optional parts can be chained::

    client.run(counters.create_strong("hits").with_value(100))
    client.run(counters.increment("hits").by(10))

Without ``by`` the increment renders ``?action=increment``; with it, the
request becomes ``?action=add&delta=<delta>``.
"""

from __future__ import annotations

import enum
import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from infinispan_rest.request import actions
from infinispan_rest.request.actions import Action
from infinispan_rest.request.base import (
    COUNTERS_ENDPOINT,
    HTTPMethod,
    Request,
    RequestBuilder,
    encode_name,
)


class CounterType(str, enum.Enum):
    """Counter consistency semantics. The value is the wire tag."""

    WEAK = "weak-counter"
    STRONG = "strong-counter"


class CounterConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    initial_value: Optional[int] = Field(default=None, alias="initial-value")


class CreateCounterRequest(RequestBuilder):
    """POST ``/rest/v2/counters/{name}`` with a tagged counter configuration."""

    name: str
    counter_type: CounterType
    config: CounterConfig = Field(default_factory=CounterConfig)

    def with_value(self, value: int) -> CreateCounterRequest:
        return self.model_copy(update={"config": CounterConfig(initial_value=value)})

    def body(self) -> str:
        return json.dumps(
            {
                self.counter_type.value: self.config.model_dump(
                    by_alias=True, exclude_none=True
                )
            }
        )

    def to_request(self) -> Request:
        return Request(
            method=HTTPMethod.POST,
            path_and_query=counter_path(self.name),
            body=self.body(),
        )


class IncrementCounterRequest(RequestBuilder):
    """POST an ``increment`` or, once :meth:`by` is used, an ``add`` action."""

    name: str
    delta: Optional[int] = None

    def by(self, delta: int) -> IncrementCounterRequest:
        return self.model_copy(update={"delta": delta})

    def action(self) -> Action:
        if self.delta is None:
            return actions.increment()
        return actions.add(self.delta)

    def to_request(self) -> Request:
        return Request(
            method=HTTPMethod.POST,
            path_and_query=counter_path(self.name, self.action()),
        )


def create_weak(name: str) -> CreateCounterRequest:
    return CreateCounterRequest(name=name, counter_type=CounterType.WEAK)


def create_strong(name: str) -> CreateCounterRequest:
    return CreateCounterRequest(name=name, counter_type=CounterType.STRONG)


def get(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=counter_path(name))


def get_config(name: str) -> Request:
    return Request(method=HTTPMethod.GET, path_and_query=f"{counter_path(name)}/config")


def increment(name: str) -> IncrementCounterRequest:
    return IncrementCounterRequest(name=name)


def decrement(name: str) -> Request:
    return Request(method=HTTPMethod.POST, path_and_query=counter_path(name, actions.decrement()))


def reset(name: str) -> Request:
    return Request(method=HTTPMethod.POST, path_and_query=counter_path(name, actions.reset()))


def delete(name: str) -> Request:
    return Request(method=HTTPMethod.DELETE, path_and_query=counter_path(name))


def compare_and_set(name: str, expect: int, update: int) -> Request:
    return Request(
        method=HTTPMethod.POST,
        path_and_query=counter_path(name, actions.compare_and_set(expect, update)),
    )


def compare_and_swap(name: str, expect: int, update: int) -> Request:
    return Request(
        method=HTTPMethod.POST,
        path_and_query=counter_path(name, actions.compare_and_swap(expect, update)),
    )


def list() -> Request:  # noqa: A001
    return Request(method=HTTPMethod.GET, path_and_query=COUNTERS_ENDPOINT)


def counter_path(name: str, action: Optional[Action] = None) -> str:
    """Return ``/rest/v2/counters/{name}`` with an optional action query."""
    path = f"{COUNTERS_ENDPOINT}/{encode_name(name)}"
    if action is None:
        return path
    return f"{path}?{action.to_query()}"
