"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClusterConfig:
    """API server connection configuration."""

    kubeconfig: str = ""
    context: str = ""
    in_cluster: bool = True


@dataclass
class ScopeConfig:
    """Active namespace and exclusion patterns for filtered views.

    An empty ``active_namespace`` means all namespaces. Exclusion entries are
    exact names, or regular expressions when prefixed with ``rx:``.
    """

    active_namespace: str = ""
    excluded_namespaces: list[str] = field(default_factory=list)
    excluded_nodes: list[str] = field(default_factory=list)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class MetricsConfig:
    """Prometheus endpoint configuration. Port 0 disables the endpoint."""

    port: int = 0


@dataclass
class KubeSnapConfig:
    """Top-level kubesnap configuration."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    scope: ScopeConfig = field(default_factory=ScopeConfig)
    log: LogConfig = field(default_factory=LogConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
