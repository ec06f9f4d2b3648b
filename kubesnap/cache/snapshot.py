"""Per-kind point-in-time snapshot, populated at most once.

State machine per kind:

    EMPTY --fetch ok--> POPULATED   (terminal, never refetched or mutated)
    EMPTY --fetch err-> EMPTY       (next call retries)

Populated-ness is tracked by an explicit flag, so a kind with zero resources
in the cluster is fetched once like any other.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from kubesnap.cache.kinds import KindSpec
from kubesnap.cluster.connection import Connection
from kubesnap.errors import TransportError
from kubesnap.observability.logging import get_logger
from kubesnap.observability.metrics import list_errors_total, list_requests_total, snapshot_resources

Snapshot = Mapping[str, Any]

_EMPTY: Snapshot = MappingProxyType({})


class KindSnapshot:
    """Lazily populated snapshot of one resource kind."""

    def __init__(self, spec: KindSpec) -> None:
        self.spec = spec
        self._items: Snapshot = _EMPTY
        self._populated = False
        self._lock = asyncio.Lock()
        self._log = get_logger("cache.snapshot").bind(kind=spec.kind.value)

    @property
    def populated(self) -> bool:
        return self._populated

    async def get(self, connection: Connection) -> Snapshot:
        """Return the snapshot, issuing one list request on first use.

        Raises:
            TransportError: the dial or the list request failed. The snapshot
                stays unpopulated.
        """
        if self._populated:
            return self._items

        async with self._lock:
            # A concurrent caller may have populated it while we waited.
            if self._populated:
                return self._items

            handle = await connection.dial()
            list_requests_total.labels(kind=self.spec.kind.value).inc()
            try:
                result = await self.spec.list_func(handle)()
            except Exception as exc:
                list_errors_total.labels(kind=self.spec.kind.value).inc()
                self._log.error("cache_list_failed", error=str(exc))
                raise TransportError(f"list {self.spec.kind.value}", exc) from exc

            items = getattr(result, "items", None) or []
            self._items = MappingProxyType({self.spec.key(item): item for item in items})
            self._populated = True

        snapshot_resources.labels(kind=self.spec.kind.value).set(len(self._items))
        self._log.debug("cache_kind_listed", count=len(self._items))
        return self._items
