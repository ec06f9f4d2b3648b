"""Cache key helpers.

Namespaced resources are keyed ``<namespace>/<name>``; downstream consumers
split keys back on the first separator, so the format must not change.
"""

from __future__ import annotations

KEY_SEPARATOR = "/"

SYSTEM_NAMESPACES = frozenset({"kube-system", "kube-public"})


def fqn(namespace: str, name: str) -> str:
    """Return the fully qualified key for a namespaced resource."""
    return f"{namespace}{KEY_SEPARATOR}{name}"


def parse_fqn(key: str) -> tuple[str, str]:
    """Split a key into ``(namespace, name)``.

    Bare names (cluster-scoped keys) yield an empty namespace.
    """
    namespace, sep, name = key.partition(KEY_SEPARATOR)
    if not sep:
        return "", key
    return namespace, name


def is_system_namespace(namespace: str) -> bool:
    return namespace in SYSTEM_NAMESPACES
