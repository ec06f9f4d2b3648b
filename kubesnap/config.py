"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import re

from kubesnap.cache.scope import REGEX_PREFIX, ExclusionPolicy, ScopeFilter
from kubesnap.models.config import (
    ClusterConfig,
    KubeSnapConfig,
    LogConfig,
    MetricsConfig,
    ScopeConfig,
)

_DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]{0,61}[a-z0-9])?$")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBESNAP_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key).split(",") if item.strip()]


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_namespace(value: str) -> str:
    if value and not _DNS_LABEL.match(value):
        raise ValueError(f"Invalid namespace name: {value}")
    return value


def _validate_patterns(values: list[str]) -> list[str]:
    for value in values:
        if value.startswith(REGEX_PREFIX):
            try:
                re.compile(value[len(REGEX_PREFIX) :])
            except re.error as exc:
                raise ValueError(f"Invalid exclusion pattern {value}: {exc}") from exc
    return values


def load_config() -> KubeSnapConfig:
    """Load configuration from KUBESNAP_* environment variables."""
    return KubeSnapConfig(
        cluster=ClusterConfig(
            kubeconfig=_env("KUBECONFIG", ""),
            context=_env("CONTEXT", ""),
            in_cluster=_env_bool("IN_CLUSTER", True),
        ),
        scope=ScopeConfig(
            active_namespace=_validate_namespace(_env("NAMESPACE", "")),
            excluded_namespaces=_validate_patterns(_env_list("EXCLUDED_NAMESPACES")),
            excluded_nodes=_validate_patterns(_env_list("EXCLUDED_NODES")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
        metrics=MetricsConfig(
            port=_env_int("METRICS_PORT", 0, min_val=0, max_val=65535),
        ),
    )


def build_scope(scope: ScopeConfig) -> ScopeFilter:
    """Build the scope filter for one analysis run from its configuration."""
    return ScopeFilter(
        active_namespace=scope.active_namespace,
        exclusion=ExclusionPolicy.from_patterns(scope.excluded_namespaces, scope.excluded_nodes),
    )
