"""Cache layer for kubesnap.

Provides per-run, fetch-once snapshots of cluster resources and the
scope-filtered views derived from them.

Submodules:
    keys       -- ``<namespace>/<name>`` cache key helpers.
    kinds      -- Per-kind list calls, key and namespace extraction.
    scope      -- Active namespace and exclusion predicates.
    snapshot   -- Lazily populated snapshot of a single kind.
    inventory  -- ClusterInventory: all kinds, filtered views, lookups.
"""

from kubesnap.cache.inventory import ClusterInventory
from kubesnap.cache.keys import fqn, parse_fqn
from kubesnap.cache.scope import ExclusionPolicy, ScopeFilter

__all__ = ["ClusterInventory", "ExclusionPolicy", "ScopeFilter", "fqn", "parse_fqn"]
