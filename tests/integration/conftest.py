"""Shared fixtures for kubesnap integration tests.

Provides a stub API handle whose list calls are ``AsyncMock`` objects, so
tests can count remote fetches, and a ``ClusterInventory`` wired to it
through a real ``Connection``. No Kubernetes cluster is touched.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio.client import V1ObjectMeta  # type: ignore[import-untyped]

from kubesnap.cache.inventory import ClusterInventory
from kubesnap.cache.kinds import KIND_SPECS
from kubesnap.cache.scope import ExclusionPolicy, ScopeFilter
from kubesnap.cluster.connection import ClusterHandle, Connection
from kubesnap.models.resources import ResourceKind

# ---------------------------------------------------------------------------
# Object factories
# ---------------------------------------------------------------------------


def make_obj(name: str, namespace: str | None = None, labels: dict[str, str] | None = None) -> SimpleNamespace:
    """Create a minimal resource object exposing ``.metadata`` like the client models."""
    return SimpleNamespace(metadata=V1ObjectMeta(name=name, namespace=namespace, labels=labels))


def make_list(items: list[Any]) -> SimpleNamespace:
    return SimpleNamespace(items=items)


# ---------------------------------------------------------------------------
# Stub handle
# ---------------------------------------------------------------------------


def make_handle(resources: dict[ResourceKind, list[Any]] | None = None) -> ClusterHandle:
    """Build a handle whose per-kind list methods return ``resources``."""
    resources = resources or {}
    handle = ClusterHandle(
        api_client=MagicMock(close=AsyncMock()),
        core=MagicMock(),
        rbac=MagicMock(),
        apis=MagicMock(),
        custom=MagicMock(),
    )
    for kind, spec in KIND_SPECS.items():
        setattr(
            getattr(handle, spec.api),
            spec.list_method,
            AsyncMock(return_value=make_list(resources.get(kind, []))),
        )
    handle.core.list_node = AsyncMock(return_value=make_list([]))
    handle.core.list_service_for_all_namespaces = AsyncMock(return_value=make_list([]))
    handle.core.list_namespaced_service = AsyncMock(return_value=make_list([]))
    handle.apis.get_api_versions = AsyncMock(return_value=SimpleNamespace(groups=[]))
    return handle


def list_mock(handle: ClusterHandle, kind: ResourceKind) -> AsyncMock:
    """Return the stub list method backing ``kind``."""
    return KIND_SPECS[kind].list_func(handle)  # type: ignore[return-value]


def make_inventory(
    handle: ClusterHandle,
    active_namespace: str = "",
    excluded_namespaces: list[str] | None = None,
    excluded_nodes: list[str] | None = None,
) -> ClusterInventory:
    connection = Connection(factory=AsyncMock(return_value=handle))
    scope = ScopeFilter(
        active_namespace=active_namespace,
        exclusion=ExclusionPolicy.from_patterns(excluded_namespaces or [], excluded_nodes or []),
    )
    return ClusterInventory(connection, scope)


# ---------------------------------------------------------------------------
# Cluster fixtures
# ---------------------------------------------------------------------------


def _cluster_resources() -> dict[ResourceKind, list[Any]]:
    """A small cluster spanning default, kube-system and staging."""
    return {
        ResourceKind.PODS: [
            make_obj("a", "default", {"app": "x", "tier": "web"}),
            make_obj("b", "kube-system"),
            make_obj("c", "staging", {"app": "y"}),
        ],
        ResourceKind.NAMESPACES: [
            make_obj("default"),
            make_obj("kube-system"),
            make_obj("staging"),
            make_obj("idle"),
        ],
        ResourceKind.ENDPOINTS: [
            make_obj("web", "default"),
            make_obj("kube-dns", "kube-system"),
            make_obj("api", "staging"),
        ],
        ResourceKind.CLUSTER_ROLE_BINDINGS: [
            make_obj("cluster-admin"),
            make_obj("system:node"),
        ],
        ResourceKind.ROLE_BINDINGS: [
            make_obj("viewer", "default"),
            make_obj("leader-locking", "kube-system"),
        ],
        ResourceKind.CONFIG_MAPS: [
            make_obj("kube-root-ca.crt", "default"),
            make_obj("kube-root-ca.crt", "kube-system"),
            make_obj("settings", "staging"),
        ],
        ResourceKind.SECRETS: [
            make_obj("db-creds", "default"),
            make_obj("bootstrap-token", "kube-system"),
        ],
        ResourceKind.SERVICE_ACCOUNTS: [
            make_obj("default", "default"),
            make_obj("default", "kube-system"),
            make_obj("default", "staging"),
        ],
    }


@pytest.fixture()
def cluster_handle() -> ClusterHandle:
    """Stub handle serving the test cluster."""
    return make_handle(_cluster_resources())


@pytest.fixture()
def inventory(cluster_handle: ClusterHandle) -> ClusterInventory:
    """Inventory over the test cluster with no scope or exclusions."""
    return make_inventory(cluster_handle)
