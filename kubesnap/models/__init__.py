"""Core data structures for kubesnap."""

from kubesnap.models.config import (
    ClusterConfig,
    KubeSnapConfig,
    LogConfig,
    MetricsConfig,
    ScopeConfig,
)
from kubesnap.models.resources import ResourceKind

__all__ = [
    "ClusterConfig",
    "KubeSnapConfig",
    "LogConfig",
    "MetricsConfig",
    "ResourceKind",
    "ScopeConfig",
]
