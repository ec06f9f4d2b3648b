"""Per-kind list calls, cache keys and namespace extraction."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kubesnap.cache.keys import fqn
from kubesnap.models.resources import ResourceKind


def _namespaced_key(obj: Any) -> str:
    return fqn(obj.metadata.namespace or "", obj.metadata.name)


def _name_key(obj: Any) -> str:
    return str(obj.metadata.name)


def _metadata_namespace(obj: Any) -> str | None:
    return obj.metadata.namespace or ""


def _own_name(obj: Any) -> str | None:
    return str(obj.metadata.name)


def _no_namespace(_: Any) -> str | None:
    return None


@dataclass(frozen=True)
class KindSpec:
    """How to fetch, key and scope one resource kind.

    ``api`` names the attribute of :class:`~kubesnap.cluster.connection.ClusterHandle`
    that owns ``list_method``; the method is called with no arguments and lists
    the kind across all namespaces.
    """

    kind: ResourceKind
    api: str
    list_method: str
    key: Callable[[Any], str]
    namespace: Callable[[Any], str | None]

    def list_func(self, handle: Any) -> Callable[..., Any]:
        return getattr(getattr(handle, self.api), self.list_method)


def _namespaced(kind: ResourceKind, api: str, list_method: str) -> KindSpec:
    return KindSpec(kind, api, list_method, key=_namespaced_key, namespace=_metadata_namespace)


KIND_SPECS: dict[ResourceKind, KindSpec] = {
    ResourceKind.PODS: _namespaced(ResourceKind.PODS, "core", "list_pod_for_all_namespaces"),
    # A namespace is scoped by its own name.
    ResourceKind.NAMESPACES: KindSpec(
        ResourceKind.NAMESPACES, "core", "list_namespace", key=_name_key, namespace=_own_name
    ),
    ResourceKind.ENDPOINTS: _namespaced(ResourceKind.ENDPOINTS, "core", "list_endpoints_for_all_namespaces"),
    ResourceKind.CLUSTER_ROLE_BINDINGS: KindSpec(
        ResourceKind.CLUSTER_ROLE_BINDINGS, "rbac", "list_cluster_role_binding", key=_name_key, namespace=_no_namespace
    ),
    ResourceKind.ROLE_BINDINGS: _namespaced(ResourceKind.ROLE_BINDINGS, "rbac", "list_role_binding_for_all_namespaces"),
    ResourceKind.CONFIG_MAPS: _namespaced(ResourceKind.CONFIG_MAPS, "core", "list_config_map_for_all_namespaces"),
    ResourceKind.SECRETS: _namespaced(ResourceKind.SECRETS, "core", "list_secret_for_all_namespaces"),
    ResourceKind.SERVICE_ACCOUNTS: _namespaced(
        ResourceKind.SERVICE_ACCOUNTS, "core", "list_service_account_for_all_namespaces"
    ),
}
