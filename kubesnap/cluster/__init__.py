"""API server connection and discovery.

Submodules:
    connection  -- Lazily dialed, memoized handle to the API server.
    discovery   -- Metrics capability probe and metrics.k8s.io listing.
"""

from kubesnap.cluster.connection import ClusterHandle, Connection
from kubesnap.cluster.discovery import cluster_has_metrics, fetch_node_metrics, fetch_pod_metrics

__all__ = [
    "ClusterHandle",
    "Connection",
    "cluster_has_metrics",
    "fetch_node_metrics",
    "fetch_pod_metrics",
]
