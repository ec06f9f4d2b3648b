"""Lazily established, memoized connection to the Kubernetes API server.

The first :meth:`Connection.dial` builds a ``kubernetes_asyncio`` API client
from in-cluster service account credentials, falling back to kubeconfig.
Every later call returns the same :class:`ClusterHandle`. A failed dial is
not memoized; the next call tries again.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from kubesnap.errors import TransportError
from kubesnap.models.config import ClusterConfig
from kubesnap.observability.logging import get_logger
from kubesnap.observability.metrics import dial_failures_total

HandleFactory = Callable[[ClusterConfig], Awaitable["ClusterHandle"]]


@dataclass(frozen=True)
class ClusterHandle:
    """The typed APIs the inventory needs, sharing one ``ApiClient``."""

    api_client: Any
    core: Any
    rbac: Any
    apis: Any
    custom: Any

    async def close(self) -> None:
        await self.api_client.close()


async def build_handle(config: ClusterConfig) -> ClusterHandle:
    """Load credentials and construct the API handle."""
    # Import lazily; kubernetes-asyncio probes the environment on import in some versions.
    from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
    from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]

    log = get_logger("cluster.connection")
    configuration = k8s_client.Configuration()
    loaded = False
    if config.in_cluster:
        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
            loaded = True
            log.info("k8s client configured from in-cluster service account")
        except k8s_config.ConfigException:
            log.debug("in-cluster config unavailable, falling back to kubeconfig")
    if not loaded:
        await k8s_config.load_kube_config(
            config_file=config.kubeconfig or None,
            context=config.context or None,
            client_configuration=configuration,
        )
        log.info("k8s client configured from kubeconfig", context=config.context or "current")

    api_client = k8s_client.ApiClient(configuration=configuration)
    return ClusterHandle(
        api_client=api_client,
        core=k8s_client.CoreV1Api(api_client),
        rbac=k8s_client.RbacAuthorizationV1Api(api_client),
        apis=k8s_client.ApisApi(api_client),
        custom=k8s_client.CustomObjectsApi(api_client),
    )


class Connection:
    """Owns the single API handle of one inventory instance.

    Example::

        conn = Connection(ClusterConfig(context="staging"))
        handle = await conn.dial()
        pods = await handle.core.list_pod_for_all_namespaces()
    """

    def __init__(self, config: ClusterConfig | None = None, factory: HandleFactory | None = None) -> None:
        self._config = config or ClusterConfig()
        self._factory: HandleFactory = factory or build_handle
        self._handle: ClusterHandle | None = None
        self._lock = asyncio.Lock()
        self._log = get_logger("cluster.connection")

    @property
    def dialed(self) -> bool:
        return self._handle is not None

    async def dial(self) -> ClusterHandle:
        """Return the shared handle, establishing it on first use.

        Raises:
            TransportError: credentials could not be loaded or the client
                could not be constructed.
        """
        if self._handle is not None:
            return self._handle

        async with self._lock:
            if self._handle is not None:
                return self._handle
            try:
                self._handle = await self._factory(self._config)
            except Exception as exc:
                dial_failures_total.inc()
                self._log.error("dial_failed", error=str(exc))
                raise TransportError("dial", exc) from exc
            self._log.debug("dial_established")
            return self._handle

    async def close(self) -> None:
        """Close the underlying client session, if one was established."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        await handle.close()
