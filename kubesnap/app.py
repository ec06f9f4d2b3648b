"""Application shell for kubesnap.

Builds one inventory for the run and reports what it sees.
Startup order: config → logging → metrics endpoint → connection → inventory.

This is the only place a transport failure terminates the process: every
layer below raises ``TransportError`` and leaves the decision here.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from kubesnap.cache.inventory import ClusterInventory
from kubesnap.cluster.connection import Connection
from kubesnap.config import build_scope, load_config
from kubesnap.errors import TransportError
from kubesnap.models.config import KubeSnapConfig
from kubesnap.models.resources import ResourceKind
from kubesnap.observability.logging import bind_run_context, clear_run_context, get_logger, setup_logging


async def run(config: KubeSnapConfig, connection: Connection | None = None) -> dict[str, Any]:
    """List every kind's filtered view and return a summary of the run.

    Raises:
        TransportError: the API server could not be dialed or a list failed.
    """
    log = get_logger("app")
    bind_run_context(run_id=str(uuid4()), namespace=config.scope.active_namespace or "all")
    connection = connection or Connection(config.cluster)
    inventory = ClusterInventory(connection, build_scope(config.scope))
    try:
        counts: dict[str, int] = {}
        for kind in ResourceKind:
            view = await inventory.list(kind)
            counts[kind.value] = len(view)
            log.info("inventory listed", kind=kind.value, count=len(view))

        namespaces = sorted(await inventory.in_use_namespaces())
        has_metrics = await inventory.cluster_has_metrics()
        log.info("inventory complete", in_use_namespaces=namespaces, metrics=has_metrics)
        return {"counts": counts, "in_use_namespaces": namespaces, "metrics": has_metrics}
    finally:
        await connection.close()
        clear_run_context()


def _start_metrics_server(port: int) -> None:
    from prometheus_client import start_http_server

    start_http_server(port)
    get_logger("app").info("metrics endpoint started", port=port)


def _kubesnap_version() -> str:
    from kubesnap import __version__

    return __version__


async def main() -> None:
    """Load configuration, run one inventory pass, exit non-zero on transport failure."""
    config = load_config()
    setup_logging(config.log.level)
    log = get_logger("app")
    log.info(
        "kubesnap starting",
        version=_kubesnap_version(),
        namespace=config.scope.active_namespace or "all",
    )

    if config.metrics.port:
        _start_metrics_server(config.metrics.port)

    try:
        await run(config)
    except TransportError as exc:
        log.critical("fatal transport error", operation=exc.operation, error=str(exc.cause))
        raise SystemExit(1) from exc
