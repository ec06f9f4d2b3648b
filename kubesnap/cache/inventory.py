"""Cluster inventory: memoized per-kind snapshots and scoped views.

One :class:`ClusterInventory` belongs to one analysis run. It owns the
connection and eight independent snapshots, each fetched at most once.

Two views exist for every kind:

``list_all_<kind>()``
    The full-cluster snapshot, read-only and shared across calls.
``list_<kind>()``
    A new ``dict`` holding the snapshot entries admitted by the scope filter
    (active namespace and not excluded). Rebuilt on every call.

Exclusion is applied only when building filtered views; every
``list_all_<kind>()`` is the unfiltered cluster state, endpoints included.
"""

from __future__ import annotations

import builtins
from typing import Any

from kubesnap.cache.kinds import KIND_SPECS
from kubesnap.cache.scope import ScopeFilter
from kubesnap.cache.snapshot import KindSnapshot, Snapshot
from kubesnap.cluster.connection import Connection
from kubesnap.cluster.discovery import cluster_has_metrics
from kubesnap.errors import NotFoundError, TransportError
from kubesnap.models.resources import ResourceKind
from kubesnap.observability.logging import get_logger


def _labels_match(obj: Any, selector: dict[str, str]) -> bool:
    labels = obj.metadata.labels or {}
    return selector.items() <= labels.items()


class ClusterInventory:
    """Lazily populated, scope-aware view of cluster resources.

    Example::

        inventory = ClusterInventory(Connection(config.cluster), build_scope(config.scope))
        pods = await inventory.list_pods()
        ep = await inventory.get_endpoints("default/my-svc")
    """

    def __init__(self, connection: Connection, scope: ScopeFilter | None = None) -> None:
        self._connection = connection
        self._scope = scope or ScopeFilter()
        self._snapshots: dict[ResourceKind, KindSnapshot] = {
            kind: KindSnapshot(spec) for kind, spec in KIND_SPECS.items()
        }
        self._log = get_logger("cache.inventory")

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def scope(self) -> ScopeFilter:
        return self._scope

    def populated(self, kind: ResourceKind) -> bool:
        return self._snapshots[kind].populated

    # ------------------------------------------------------------------
    # Generic views
    # ------------------------------------------------------------------

    async def list_all(self, kind: ResourceKind) -> Snapshot:
        """Return the full-cluster snapshot for ``kind``.

        Raises:
            TransportError: population failed; the next call retries.
        """
        return await self._snapshots[kind].get(self._connection)

    async def list(self, kind: ResourceKind) -> dict[str, Any]:
        """Return the scope-filtered view for ``kind`` as a new mapping.

        Raises:
            TransportError: population failed; the next call retries.
        """
        snapshot = await self.list_all(kind)
        namespace_of = KIND_SPECS[kind].namespace
        return {key: obj for key, obj in snapshot.items() if self._scope.admits(namespace_of(obj))}

    # ------------------------------------------------------------------
    # Per-kind accessors
    # ------------------------------------------------------------------

    async def list_all_pods(self) -> Snapshot:
        return await self.list_all(ResourceKind.PODS)

    async def list_pods(self) -> dict[str, Any]:
        return await self.list(ResourceKind.PODS)

    async def list_all_namespaces(self) -> Snapshot:
        return await self.list_all(ResourceKind.NAMESPACES)

    async def list_namespaces(self) -> dict[str, Any]:
        return await self.list(ResourceKind.NAMESPACES)

    async def list_all_endpoints(self) -> Snapshot:
        return await self.list_all(ResourceKind.ENDPOINTS)

    async def list_endpoints(self) -> dict[str, Any]:
        return await self.list(ResourceKind.ENDPOINTS)

    async def list_all_cluster_role_bindings(self) -> Snapshot:
        return await self.list_all(ResourceKind.CLUSTER_ROLE_BINDINGS)

    async def list_cluster_role_bindings(self) -> dict[str, Any]:
        return await self.list(ResourceKind.CLUSTER_ROLE_BINDINGS)

    async def list_all_role_bindings(self) -> Snapshot:
        return await self.list_all(ResourceKind.ROLE_BINDINGS)

    async def list_role_bindings(self) -> dict[str, Any]:
        return await self.list(ResourceKind.ROLE_BINDINGS)

    async def list_all_config_maps(self) -> Snapshot:
        return await self.list_all(ResourceKind.CONFIG_MAPS)

    async def list_config_maps(self) -> dict[str, Any]:
        return await self.list(ResourceKind.CONFIG_MAPS)

    async def list_all_secrets(self) -> Snapshot:
        return await self.list_all(ResourceKind.SECRETS)

    async def list_secrets(self) -> dict[str, Any]:
        return await self.list(ResourceKind.SECRETS)

    async def list_all_service_accounts(self) -> Snapshot:
        return await self.list_all(ResourceKind.SERVICE_ACCOUNTS)

    async def list_service_accounts(self) -> dict[str, Any]:
        return await self.list(ResourceKind.SERVICE_ACCOUNTS)

    # ------------------------------------------------------------------
    # Uncached listings
    # ------------------------------------------------------------------

    async def list_nodes(self) -> builtins.list[Any]:
        """List nodes not excluded by the node policy. Not cached."""
        handle = await self._connection.dial()
        try:
            result = await handle.core.list_node()
        except Exception as exc:
            self._log.error("node_list_failed", error=str(exc))
            raise TransportError("list nodes", exc) from exc
        return [node for node in result.items or [] if self._scope.admits_node(node.metadata.name)]

    async def list_services(self) -> builtins.list[Any]:
        """List services admitted by the scope filter. Not cached.

        With an active namespace only that namespace is listed remotely.
        """
        handle = await self._connection.dial()
        active = self._scope.active_namespace
        try:
            if active:
                result = await handle.core.list_namespaced_service(active)
            else:
                result = await handle.core.list_service_for_all_namespaces()
        except Exception as exc:
            self._log.error("service_list_failed", namespace=active, error=str(exc))
            raise TransportError("list services", exc) from exc
        return [svc for svc in result.items or [] if self._scope.admits(svc.metadata.namespace or "")]

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    async def get_pod(self, selector: dict[str, str]) -> Any:
        """Return the first filtered pod whose labels contain every selector pair.

        Pods are visited in cache-key order, so the match is deterministic
        when several pods qualify.

        Raises:
            NotFoundError: no pod in scope carries the selector labels.
        """
        pods = await self.list_pods()
        for key in sorted(pods):
            if _labels_match(pods[key], selector):
                return pods[key]
        self._log.debug("pod_selector_miss", selector=selector)
        raise NotFoundError(f"No pods match selector {selector}")

    async def get_endpoints(self, service_fqn: str) -> Any:
        """Return the endpoints keyed ``<namespace>/<service>`` in the filtered view.

        Raises:
            NotFoundError: no endpoints in scope for that service.
        """
        endpoints = await self.list_endpoints()
        try:
            return endpoints[service_fqn]
        except KeyError:
            self._log.debug("endpoints_miss", service=service_fqn)
            raise NotFoundError(f"Unable to find endpoints for service {service_fqn}") from None

    async def in_use_namespaces(self) -> set[str]:
        """Return the namespaces that filtered pods live in."""
        pods = await self.list_pods()
        return {pod.metadata.namespace or "" for pod in pods.values()}

    async def cluster_has_metrics(self) -> bool:
        return await cluster_has_metrics(self._connection)
