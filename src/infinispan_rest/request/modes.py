"""Cache topology configurations sent when creating a cache.

Each topology serialises to a single-key JSON object tagged with its wire
name, e.g.::

    {"replicated-cache": {"mode": "SYNC", "remote-timeout": 17500, ...}}

Field names are kebab-case on the wire (pydantic aliases) and fields left as
``None`` are dropped, which is how ASYNC variants omit ``remote-timeout``.
"""

from __future__ import annotations

import enum
import json
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONCURRENCY_LEVEL = 1000
DEFAULT_ACQUIRE_TIMEOUT = 15000
DEFAULT_STATE_TRANSFER_TIMEOUT = 60000
DEFAULT_REMOTE_TIMEOUT = 17500


class CacheMode(str, enum.Enum):
    """Replication mode of a clustered cache."""

    SYNC = "SYNC"
    ASYNC = "ASYNC"


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Locking(_WireModel):
    concurrency_level: int = Field(
        default=DEFAULT_CONCURRENCY_LEVEL, alias="concurrency-level"
    )
    acquire_timeout: int = Field(default=DEFAULT_ACQUIRE_TIMEOUT, alias="acquire-timeout")
    striping: bool = False


class StateTransfer(_WireModel):
    timeout: int = DEFAULT_STATE_TRANSFER_TIMEOUT


class CacheConfig(_WireModel):
    """Base for all topologies.

    Subclasses set :attr:`cache_type` to the tag the server expects.
    """

    cache_type: ClassVar[str]

    locking: Locking = Field(default_factory=Locking)
    statistics: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return the tagged JSON-ready representation."""
        return {
            self.cache_type: self.model_dump(mode="json", by_alias=True, exclude_none=True)
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class LocalCache(CacheConfig):
    cache_type: ClassVar[str] = "local-cache"


class _ClusteredCache(CacheConfig):
    """Shared fields of the clustered topologies.

    ``remote_timeout`` is only meaningful for SYNC caches; the
    :meth:`create_sync` / :meth:`create_async` constructors set it accordingly.
    """

    mode: CacheMode
    remote_timeout: Optional[int] = Field(default=None, alias="remote-timeout")

    @classmethod
    def create_sync(cls, **fields: Any):
        return cls(mode=CacheMode.SYNC, remote_timeout=DEFAULT_REMOTE_TIMEOUT, **fields)

    @classmethod
    def create_async(cls, **fields: Any):
        return cls(mode=CacheMode.ASYNC, **fields)


class ReplicatedCache(_ClusteredCache):
    cache_type: ClassVar[str] = "replicated-cache"

    state_transfer: StateTransfer = Field(
        default_factory=StateTransfer, alias="state-transfer"
    )


class DistributedCache(_ClusteredCache):
    cache_type: ClassVar[str] = "distributed-cache"

    state_transfer: StateTransfer = Field(
        default_factory=StateTransfer, alias="state-transfer"
    )


class InvalidationCache(_ClusteredCache):
    cache_type: ClassVar[str] = "invalidation-cache"
