"""Metrics capability probe and metrics.k8s.io listing.

The probe never raises: an unreachable API server or a failed discovery call
reads as "no metrics", since missing telemetry must not block inventory.
"""

from __future__ import annotations

from typing import Any

from kubesnap.cluster.connection import Connection
from kubesnap.errors import TransportError
from kubesnap.observability.logging import get_logger

METRICS_GROUP = "metrics.k8s.io"
SUPPORTED_METRICS_VERSIONS: tuple[str, ...] = ("v1beta1",)

_logger = get_logger("cluster.discovery")


def _advertises_metrics(groups: Any) -> bool:
    for group in getattr(groups, "groups", None) or []:
        if group.name != METRICS_GROUP:
            continue
        for version in group.versions or []:
            if version.version in SUPPORTED_METRICS_VERSIONS:
                return True
    return False


async def cluster_has_metrics(connection: Connection) -> bool:
    """Return True if the API server serves a supported metrics.k8s.io version."""
    try:
        handle = await connection.dial()
    except TransportError:
        return False

    try:
        groups = await handle.apis.get_api_versions()
    except Exception as exc:
        _logger.warning("metrics_probe_failed", error=str(exc))
        return False

    available = _advertises_metrics(groups)
    _logger.debug("metrics_probe", available=available)
    return available


async def fetch_node_metrics(connection: Connection) -> list[dict[str, Any]]:
    """List node usage metrics across the cluster.

    Raises:
        TransportError: the dial or the list request failed.
    """
    handle = await connection.dial()
    try:
        result = await handle.custom.list_cluster_custom_object(
            group=METRICS_GROUP,
            version=SUPPORTED_METRICS_VERSIONS[0],
            plural="nodes",
        )
    except Exception as exc:
        _logger.error("node_metrics_failed", error=str(exc))
        raise TransportError("list node metrics", exc) from exc
    return list(result.get("items", []))


async def fetch_pod_metrics(connection: Connection, namespace: str = "") -> list[dict[str, Any]]:
    """List pod usage metrics in ``namespace``, or in all namespaces when empty.

    Raises:
        TransportError: the dial or the list request failed.
    """
    handle = await connection.dial()
    try:
        if namespace:
            result = await handle.custom.list_namespaced_custom_object(
                group=METRICS_GROUP,
                version=SUPPORTED_METRICS_VERSIONS[0],
                namespace=namespace,
                plural="pods",
            )
        else:
            result = await handle.custom.list_cluster_custom_object(
                group=METRICS_GROUP,
                version=SUPPORTED_METRICS_VERSIONS[0],
                plural="pods",
            )
    except Exception as exc:
        _logger.error("pod_metrics_failed", namespace=namespace, error=str(exc))
        raise TransportError("list pod metrics", exc) from exc
    return list(result.get("items", []))
