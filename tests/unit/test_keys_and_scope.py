"""Property-based tests for cache keys and the scope filter.

Uses hypothesis to check:
 1. parse_fqn(fqn(ns, name)) round-trips for every valid namespace
 2. An empty active namespace matches every namespace string
 3. A set active namespace matches exactly, case-sensitively
 4. admits() is matches() and not excluded, for namespaced resources
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from kubesnap.cache.keys import KEY_SEPARATOR, fqn, is_system_namespace, parse_fqn
from kubesnap.cache.scope import ExclusionPolicy, ScopeFilter

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

_namespace = st.from_regex(r"[a-z0-9]([-a-z0-9]{0,20}[a-z0-9])?", fullmatch=True)

# Names are left free-form, separator included, to pin first-separator parsing.
_name = st.text(alphabet=st.characters(codec="utf-8", exclude_categories=("Cs",)), min_size=1, max_size=60)

_any_string = st.text(max_size=60)


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class TestKeys:
    def test_separator_is_slash(self) -> None:
        assert KEY_SEPARATOR == "/"
        assert fqn("default", "web") == "default/web"

    @given(namespace=_namespace, name=_name)
    @settings(max_examples=200)
    def test_round_trip(self, namespace: str, name: str) -> None:
        assert parse_fqn(fqn(namespace, name)) == (namespace, name)

    @given(ns1=_namespace, n1=_name, ns2=_namespace, n2=_name)
    def test_distinct_pairs_get_distinct_keys(self, ns1: str, n1: str, ns2: str, n2: str) -> None:
        if (ns1, n1) != (ns2, n2):
            assert fqn(ns1, n1) != fqn(ns2, n2)

    def test_bare_name_has_empty_namespace(self) -> None:
        assert parse_fqn("cluster-admin") == ("", "cluster-admin")

    def test_system_namespaces(self) -> None:
        assert is_system_namespace("kube-system")
        assert is_system_namespace("kube-public")
        assert not is_system_namespace("kube-node-lease")
        assert not is_system_namespace("default")


# ---------------------------------------------------------------------------
# Scope filter
# ---------------------------------------------------------------------------


class TestScopeMatches:
    @given(namespace=_any_string)
    def test_empty_scope_matches_everything(self, namespace: str) -> None:
        assert ScopeFilter().matches(namespace)

    def test_empty_scope_matches_empty_and_separator(self) -> None:
        scope = ScopeFilter(active_namespace="")

        assert scope.matches("")
        assert scope.matches("a/b")
        assert scope.matches("/")

    @given(active=_namespace, namespace=_any_string)
    def test_set_scope_is_exact(self, active: str, namespace: str) -> None:
        assert ScopeFilter(active_namespace=active).matches(namespace) == (namespace == active)

    def test_case_sensitive_and_no_globbing(self) -> None:
        scope = ScopeFilter(active_namespace="default")

        assert not scope.matches("Default")
        assert not scope.matches("default-2")
        assert not ScopeFilter(active_namespace="def*").matches("default")


class TestScopeAdmits:
    @given(active=st.sampled_from(["", "default", "staging"]), namespace=_namespace, excluded=st.sets(_namespace, max_size=3))
    def test_admits_is_scope_and_not_excluded(self, active: str, namespace: str, excluded: set[str]) -> None:
        scope = ScopeFilter(active_namespace=active, exclusion=ExclusionPolicy.from_patterns(excluded))

        expected = scope.matches(namespace) and namespace not in excluded
        assert scope.admits(namespace) == expected

    def test_cluster_scoped_always_admitted(self) -> None:
        scope = ScopeFilter(active_namespace="default", exclusion=ExclusionPolicy(namespace=lambda _: True))

        assert scope.admits(None)

    def test_nodes_use_exclusion_only(self) -> None:
        scope = ScopeFilter(active_namespace="default", exclusion=ExclusionPolicy.from_patterns(nodes=["node-1"]))

        assert scope.admits_node("node-0")
        assert not scope.admits_node("node-1")


class TestExclusionPolicy:
    def test_none_excludes_nothing(self) -> None:
        policy = ExclusionPolicy.none()

        assert not policy.namespace("kube-system")
        assert not policy.node("node-0")

    def test_exact_names(self) -> None:
        policy = ExclusionPolicy.from_patterns(["kube-system"])

        assert policy.namespace("kube-system")
        assert not policy.namespace("kube-system-2")

    def test_regex_full_match(self) -> None:
        policy = ExclusionPolicy.from_patterns(["rx:kube-.*"], ["rx:gpu-[0-9]+"])

        assert policy.namespace("kube-public")
        assert not policy.namespace("my-kube-ns")
        assert policy.node("gpu-12")
        assert not policy.node("gpu-a")

    def test_custom_predicates(self) -> None:
        scope = ScopeFilter(exclusion=ExclusionPolicy(namespace=lambda ns: ns.startswith("tmp-")))

        assert scope.excluded_namespace("tmp-1")
        assert not scope.excluded_namespace("prod")
        assert not scope.excluded_node("tmp-1")
