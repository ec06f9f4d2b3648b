"""Prometheus metrics for the inventory cache."""

from __future__ import annotations

from prometheus_client import Counter, Gauge

list_requests_total = Counter(
    "kubesnap_list_requests_total",
    "Remote list requests issued to populate a snapshot",
    ["kind"],
)

list_errors_total = Counter(
    "kubesnap_list_errors_total",
    "Remote list requests that failed",
    ["kind"],
)

snapshot_resources = Gauge(
    "kubesnap_snapshot_resources",
    "Resources held in the populated snapshot of a kind",
    ["kind"],
)

dial_failures_total = Counter(
    "kubesnap_dial_failures_total",
    "Failed attempts to establish the API server connection",
)
