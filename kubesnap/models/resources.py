"""Resource kind enumeration shared by the cache and its callers."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Kinds held in a per-run inventory snapshot."""

    PODS = "pods"
    NAMESPACES = "namespaces"
    ENDPOINTS = "endpoints"
    CLUSTER_ROLE_BINDINGS = "cluster_role_bindings"
    ROLE_BINDINGS = "role_bindings"
    CONFIG_MAPS = "config_maps"
    SECRETS = "secrets"
    SERVICE_ACCOUNTS = "service_accounts"
