"""Active-namespace scoping and exclusion predicates for filtered views."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

REGEX_PREFIX = "rx:"

Predicate = Callable[[str], bool]


def _never(_: str) -> bool:
    return False


def _matcher(patterns: Iterable[str]) -> Predicate:
    """Compile exact names and ``rx:`` regular expressions into one predicate."""
    names: set[str] = set()
    regexes: list[re.Pattern[str]] = []
    for pattern in patterns:
        if pattern.startswith(REGEX_PREFIX):
            regexes.append(re.compile(pattern[len(REGEX_PREFIX) :]))
        else:
            names.add(pattern)

    if not names and not regexes:
        return _never

    def _match(value: str) -> bool:
        return value in names or any(rx.fullmatch(value) for rx in regexes)

    return _match


@dataclass(frozen=True)
class ExclusionPolicy:
    """Predicates deciding which namespaces and nodes are dropped from views."""

    namespace: Predicate = _never
    node: Predicate = _never

    @classmethod
    def none(cls) -> ExclusionPolicy:
        return cls()

    @classmethod
    def from_patterns(cls, namespaces: Iterable[str] = (), nodes: Iterable[str] = ()) -> ExclusionPolicy:
        return cls(namespace=_matcher(namespaces), node=_matcher(nodes))


@dataclass(frozen=True)
class ScopeFilter:
    """Composes the active namespace with the exclusion policy.

    A namespaced resource passes iff it matches the active namespace and its
    namespace is not excluded. Cluster-scoped resources (no namespace) always
    pass. Nodes are filtered by exclusion only.
    """

    active_namespace: str = ""
    exclusion: ExclusionPolicy = field(default_factory=ExclusionPolicy)

    def matches(self, namespace: str) -> bool:
        if not self.active_namespace:
            return True
        return namespace == self.active_namespace

    def excluded_namespace(self, namespace: str) -> bool:
        return self.exclusion.namespace(namespace)

    def excluded_node(self, name: str) -> bool:
        return self.exclusion.node(name)

    def admits(self, namespace: str | None) -> bool:
        if namespace is None:
            return True
        return self.matches(namespace) and not self.excluded_namespace(namespace)

    def admits_node(self, name: str) -> bool:
        return not self.excluded_node(name)
