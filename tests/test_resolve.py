"""Tests for import classification, Git notations and the resolver registry."""

from __future__ import annotations

import pytest

import gopherdeps.resolve.registry as registry_mod
from gopherdeps.core.enums import DependencyKind, is_external
from gopherdeps.resolve import (
    NEWEST_COMMIT,
    GitNotationDependency,
    NotationError,
    ResolutionContext,
    ResolverNotFoundError,
    classify_import,
    get_resolver,
    load_pins,
    parse_notation_string,
    resolve_imports,
)
from gopherdeps.resolve.registry import clear_resolvers_for_tests, registered_kinds


# ===========================================================================
# classify_import
# ===========================================================================


@pytest.mark.parametrize(
    "path, kind, root",
    [
        ("fmt", DependencyKind.STDLIB, "fmt"),
        ("net/http", DependencyKind.STDLIB, "net/http"),
        ("C", DependencyKind.PSEUDO, "C"),
        ("./sub", DependencyKind.LOCAL, "./sub"),
        ("github.com/golang/snappy", DependencyKind.GIT, "github.com/golang/snappy"),
        ("github.com/a/b/c/d", DependencyKind.GIT, "github.com/a/b"),
        ("bitbucket.org/o/r/x", DependencyKind.GIT, "bitbucket.org/o/r"),
        ("golang.org/x/net/context", DependencyKind.GIT, "golang.org/x/net"),
        ("gopkg.in/yaml.v2", DependencyKind.GIT, "gopkg.in/yaml.v2"),
        ("gopkg.in/check.v1/sub", DependencyKind.GIT, "gopkg.in/check.v1"),
        ("gopkg.in/user/pkg.v3", DependencyKind.GIT, "gopkg.in/user/pkg.v3"),
        ("example.com/repo.git/pkg", DependencyKind.GIT, "example.com/repo.git"),
        ("zombiezen.com/go/capnproto2", DependencyKind.UNKNOWN, "zombiezen.com/go/capnproto2"),
        ("github.com/onlyowner", DependencyKind.UNKNOWN, "github.com/onlyowner"),
    ],
)
def test_classify_import(path, kind, root):
    target = classify_import(path)
    assert target.kind is kind
    assert target.root == root
    assert target.path == path


def test_classify_urls():
    assert classify_import("github.com/a/b").url == "https://github.com/a/b.git"
    assert classify_import("golang.org/x/sys/unix").url == "https://go.googlesource.com/sys"
    assert classify_import("gopkg.in/yaml.v2").url == "https://gopkg.in/yaml.v2"
    assert classify_import("fmt").url is None


def test_module_prefix_is_local():
    target = classify_import("github.com/me/proj/internal/x", module_path="github.com/me/proj")
    assert target.kind is DependencyKind.LOCAL
    assert target.root == "github.com/me/proj"
    other = classify_import("github.com/me/project2", module_path="github.com/me/proj")
    assert other.kind is DependencyKind.GIT


def test_is_external():
    assert is_external(DependencyKind.GIT)
    assert is_external("unknown")
    assert not is_external(DependencyKind.STDLIB)
    assert not is_external("bogus")


# ===========================================================================
# GitNotationDependency
# ===========================================================================


class TestGitNotation:
    def test_string_notation_is_commit(self):
        dep = GitNotationDependency.from_notation("github.com/a/b", "abc123")
        assert dep.commit == "abc123"
        assert dep.version == "abc123"
        assert dep.resolver_kind is DependencyKind.GIT

    def test_missing_commit_tracks_newest(self):
        dep = GitNotationDependency.from_notation("github.com/a/b", {"url": "https://x"})
        assert dep.version == NEWEST_COMMIT
        assert dep.url == "https://x"

    def test_tag_only_leaves_commit_unset(self):
        dep = GitNotationDependency.from_notation("github.com/a/b", {"tag": "v1.0.0"})
        assert dep.tag == "v1.0.0"
        assert dep.commit is None

    def test_branch_is_recorded(self):
        dep = GitNotationDependency.from_notation(
            "github.com/a/b", {"branch": "main", "commit": "c0ffee"}
        )
        assert dep.branch == "main"
        assert dep.to_dict() == {"commit": "c0ffee", "branch": "main"}

    def test_set_version(self):
        dep = GitNotationDependency("github.com/a/b")
        dep.set_version("deadbeef")
        assert dep.commit == "deadbeef"

    def test_unknown_key_raises(self):
        with pytest.raises(NotationError):
            GitNotationDependency.from_notation("github.com/a/b", {"revision": "x"})

    def test_non_string_value_raises(self):
        with pytest.raises(NotationError):
            GitNotationDependency.from_notation("github.com/a/b", {"commit": 5})

    def test_empty_name_raises(self):
        with pytest.raises(NotationError):
            GitNotationDependency.from_notation(" ", "abc")

    def test_parse_notation_string(self):
        dep = parse_notation_string("github.com/a/b@abc")
        assert (dep.name, dep.commit) == ("github.com/a/b", "abc")
        assert parse_notation_string("github.com/a/b").commit == NEWEST_COMMIT

    def test_load_pins(self):
        pins = load_pins({"github.com/a/b": "abc", "example.org/c": {"commit": "d"}})
        assert pins["github.com/a/b"].commit == "abc"
        assert pins["example.org/c"].commit == "d"
        assert load_pins(None) == {}


# ===========================================================================
# registry and pipeline
# ===========================================================================


def test_every_kind_has_a_resolver():
    for kind in DependencyKind:
        assert callable(get_resolver(kind))
    assert set(registered_kinds()) == set(DependencyKind)


def test_registry_reloads_after_clear():
    clear_resolvers_for_tests()
    assert callable(get_resolver(DependencyKind.GIT))


def test_unregistered_kind_raises(monkeypatch):
    monkeypatch.setattr(registry_mod, "_RESOLVERS", {})
    monkeypatch.setattr(registry_mod.importlib, "reload", lambda module: module)
    monkeypatch.setattr(registry_mod.importlib, "import_module", lambda name: None)
    with pytest.raises(ResolverNotFoundError) as excinfo:
        get_resolver(DependencyKind.GIT)
    assert excinfo.value.kind is DependencyKind.GIT


def test_resolve_imports_groups_packages_by_root():
    resolved = resolve_imports(
        ["fmt", "github.com/a/b/x", "github.com/a/b/y", "C", "github.com/a/b/x"]
    )
    assert set(resolved) == {"fmt", "github.com/a/b", "C"}
    git = resolved["github.com/a/b"]
    assert git.packages == {"github.com/a/b/x", "github.com/a/b/y"}
    assert git.version == NEWEST_COMMIT
    assert git.url == "https://github.com/a/b.git"
    assert resolved["C"].kind is DependencyKind.PSEUDO


def test_pins_apply_to_git_roots():
    context = ResolutionContext(
        pins=load_pins({"github.com/a/b": {"commit": "abc", "url": "git@github.com:a/b.git"}})
    )
    dep = resolve_imports(["github.com/a/b/x"], context)["github.com/a/b"]
    assert dep.commit == "abc"
    assert dep.version == "abc"
    assert dep.url == "git@github.com:a/b.git"


def test_pin_turns_unknown_host_into_git():
    context = ResolutionContext(pins=load_pins({"example.org/repo": "v9"}))
    resolved = resolve_imports(["example.org/repo/sub/pkg"], context)
    dep = resolved["example.org/repo"]
    assert dep.kind is DependencyKind.GIT
    assert dep.commit == "v9"
    assert dep.url == "https://example.org/repo"


def test_pin_for_prefers_longest_prefix():
    context = ResolutionContext(
        pins=load_pins({"example.org/a": "one", "example.org/a/b": "two"})
    )
    assert context.pin_for("example.org/a/b/c").commit == "two"
    assert context.pin_for("example.org/a/x").commit == "one"
    assert context.pin_for("example.org/ab") is None


def test_local_imports_collapse_to_module():
    context = ResolutionContext(module_path="example.com/me/app")
    resolved = resolve_imports(
        ["example.com/me/app/internal/db", "example.com/me/app/cmd"], context
    )
    assert list(resolved) == ["example.com/me/app"]
    assert resolved["example.com/me/app"].kind is DependencyKind.LOCAL


def test_resolved_dependency_to_dict():
    dep = resolve_imports(["github.com/a/b"])["github.com/a/b"]
    payload = dep.to_dict()
    assert payload["kind"] == "git"
    assert payload["packages"] == ["github.com/a/b"]
    assert "tag" not in payload
