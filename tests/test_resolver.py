"""Tests for namespace resolution."""

from pathlib import Path

import pytest

from changekit import Change, SqlGenerator
from changekit.discovery import (
    NamespaceResolver,
    RegistryLoader,
    TypeRegistry,
    is_valid_namespace,
    resolve_namespaces,
)
from changekit.errors import (
    ResolutionError,
    UnexpectedChangekitError,
    UnregisteredUnitError,
)

from conftest import CHANGE_MODULE, GENERATOR_MODULE, HELPER_MODULE, write_tree


def names(types):
    return sorted(cls.__name__ for cls in types)


# =============================================================================
# Namespace validation
# =============================================================================


class TestNamespaceValidation:
    """Tests for namespace string validation."""

    def test_valid_namespaces(self):
        """Test dotted identifiers are accepted."""
        assert is_valid_namespace("acme")
        assert is_valid_namespace("com.acme.changes")
        assert is_valid_namespace("_private.pkg2")

    def test_invalid_namespaces(self):
        """Test malformed namespaces are rejected."""
        assert not is_valid_namespace("")
        assert not is_valid_namespace("com..acme")
        assert not is_valid_namespace(".acme")
        assert not is_valid_namespace("acme.")
        assert not is_valid_namespace("com/acme")
        assert not is_valid_namespace("com.1acme")

    def test_resolve_malformed_namespace_raises(self, tmp_path):
        """Test resolving a malformed namespace fails."""
        resolver = NamespaceResolver(search_path=[tmp_path])

        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve({"com..acme"})

        assert exc_info.value.namespace == "com..acme"

    def test_non_string_namespace_raises(self, tmp_path):
        """Test a non-string entry among names fails resolution."""
        (tmp_path / "acme").mkdir()
        resolver = NamespaceResolver(search_path=[tmp_path])

        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve({"acme", None})

        assert exc_info.value.namespace is None

    def test_unhashable_namespace_raises(self, tmp_path):
        """Test an unhashable entry fails resolution."""
        resolver = NamespaceResolver(search_path=[tmp_path])

        with pytest.raises(ResolutionError):
            resolver.resolve(["acme", ["nested"]])

    def test_bare_string_rejected(self, tmp_path):
        """Test a single string is not split into one-letter namespaces."""
        (tmp_path / "a").mkdir()
        resolver = NamespaceResolver(search_path=[tmp_path])

        with pytest.raises(TypeError):
            resolver.resolve("acme")

    def test_non_string_is_not_valid(self):
        """Test validation rejects values that are not strings."""
        assert not is_valid_namespace(None)
        assert not is_valid_namespace(42)


# =============================================================================
# Root lookup
# =============================================================================


class TestNamespaceRoots:
    """Tests for locating namespace root directories."""

    def test_no_roots(self, tmp_path):
        """Test a namespace nobody contributes has no roots."""
        resolver = NamespaceResolver(search_path=[tmp_path])
        assert resolver.namespace_roots("missing.pkg") == []

    def test_multiple_roots(self, tmp_path):
        """Test every contributing search-path entry is found."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        (first / "acme" / "changes").mkdir(parents=True)
        (second / "acme" / "changes").mkdir(parents=True)
        (tmp_path / "third").mkdir()

        resolver = NamespaceResolver(
            search_path=[first, tmp_path / "third", second]
        )
        roots = resolver.namespace_roots("acme.changes")

        assert roots == [first / "acme" / "changes", second / "acme" / "changes"]

    def test_duplicate_entries_collapsed(self, tmp_path):
        """Test the same root listed twice is scanned once."""
        (tmp_path / "acme").mkdir()
        resolver = NamespaceResolver(search_path=[tmp_path, str(tmp_path)])

        assert len(resolver.namespace_roots("acme")) == 1

    def test_file_is_not_a_root(self, tmp_path):
        """Test a file named like the namespace is ignored."""
        (tmp_path / "acme").write_text("")
        resolver = NamespaceResolver(search_path=[tmp_path])

        assert resolver.namespace_roots("acme") == []

    def test_defaults_to_sys_path(self, plugin_root, namespace):
        """Test sys.path is searched when no search path is given."""
        (plugin_root / namespace).mkdir()
        resolver = NamespaceResolver()

        assert plugin_root / namespace in resolver.namespace_roots(namespace)


# =============================================================================
# Resolution with ImportLoader
# =============================================================================


class TestResolveWithImport:
    """Tests for resolution importing real modules."""

    def test_empty_namespace_set(self):
        """Test resolving no namespaces yields nothing."""
        assert NamespaceResolver().resolve(set()) == frozenset()

    def test_resolve_flat_namespace(self, plugin_root, namespace):
        """Test units in a single directory are loaded."""
        write_tree(plugin_root, {
            f"{namespace}/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
            f"{namespace}/render.py": GENERATOR_MODULE.format(name="AuditGenerator"),
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn", "AuditGenerator"]

    def test_imported_classes_not_collected(self, plugin_root, namespace):
        """Test classes a unit only imports are not attributed to it."""
        write_tree(plugin_root, {
            f"{namespace}/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
        })

        types = resolve_namespaces({namespace})

        assert Change not in types
        assert SqlGenerator not in types

    def test_resolve_nested_namespaces(self, plugin_root, namespace):
        """Test sub-namespaces are descended into."""
        write_tree(plugin_root, {
            f"{namespace}/top.py": HELPER_MODULE.format(name="Top"),
            f"{namespace}/changes/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
            f"{namespace}/changes/deep/er/index.py": CHANGE_MODULE.format(name="AddIndex"),
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn", "AddIndex", "Top"]
        modules = {cls.__module__ for cls in types}
        assert f"{namespace}.changes.deep.er.index" in modules

    def test_empty_directory_descended(self, plugin_root, namespace):
        """Test a directory without units is valid and still descended."""
        (plugin_root / namespace / "empty").mkdir(parents=True)
        write_tree(plugin_root, {
            f"{namespace}/hollow/inner/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn"]

    def test_namespace_without_roots(self, plugin_root, namespace):
        """Test a namespace with no roots contributes nothing."""
        assert resolve_namespaces({namespace}) == frozenset()

    def test_overlapping_namespaces_no_duplicates(self, plugin_root, namespace):
        """Test a sub-namespace reachable twice yields each type once."""
        write_tree(plugin_root, {
            f"{namespace}/changes/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
        })

        types = resolve_namespaces({namespace, f"{namespace}.changes"})

        assert isinstance(types, frozenset)
        assert names(types) == ["AddAuditColumn"]

    def test_multiple_roots_merged(self, tmp_path, monkeypatch, namespace):
        """Test a namespace package split over two roots is merged."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        monkeypatch.syspath_prepend(str(second))
        monkeypatch.syspath_prepend(str(first))
        write_tree(first, {
            f"{namespace}/changes/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
        })
        write_tree(second, {
            f"{namespace}/changes/index.py": CHANGE_MODULE.format(name="AddIndex"),
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn", "AddIndex"]

    def test_skips_non_units(self, plugin_root, namespace):
        """Test dunder modules, caches and non-Python files are skipped."""
        write_tree(plugin_root, {
            f"{namespace}/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
            f"{namespace}/__main__.py": "raise SystemExit('must not be imported')\n",
            f"{namespace}/__pycache__/stale.py": "raise ImportError('stale')\n",
            f"{namespace}/notes.txt": "not a unit\n",
            f"{namespace}/not-a-package/broken.py": "raise ImportError('skipped')\n",
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn"]

    def test_nested_classes_collected(self, plugin_root, namespace):
        """Test classes nested inside a unit's classes are discovered."""
        write_tree(plugin_root, {
            f"{namespace}/outer.py": """
                from changekit import Change


                class Outer:
                    class InnerChange(Change):
                        @property
                        def name(self):
                            return "inner"

                        def generate_statements(self, database):
                            return []

                        class Deeper:
                            pass

                    Alias = Change
            """,
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["Deeper", "InnerChange", "Outer"]
        assert Change not in types
        inner = next(cls for cls in types if cls.__name__ == "InnerChange")
        assert inner.__qualname__ == "Outer.InnerChange"
        assert issubclass(inner, Change)

    def test_init_module_is_not_a_unit(self, plugin_root, namespace):
        """Test classes defined in a package's __init__.py are not discovered."""
        write_tree(plugin_root, {
            f"{namespace}/__init__.py": CHANGE_MODULE.format(name="PackageChange"),
            f"{namespace}/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
        })

        types = resolve_namespaces({namespace})

        assert names(types) == ["AddAuditColumn"]

    def test_syntax_error_fails_whole_resolution(self, plugin_root, namespace):
        """Test a broken unit aborts resolution."""
        write_tree(plugin_root, {
            f"{namespace}/audit.py": CHANGE_MODULE.format(name="AddAuditColumn"),
            f"{namespace}/broken.py": "def oops(:\n",
        })

        with pytest.raises(ResolutionError) as exc_info:
            resolve_namespaces({namespace})

        assert isinstance(exc_info.value.__cause__, SyntaxError)
        assert exc_info.value.namespace == namespace

    def test_import_error_fails_whole_resolution(self, plugin_root, namespace):
        """Test a unit that cannot be imported aborts resolution."""
        write_tree(plugin_root, {
            f"{namespace}/stale.py": "import cktest_missing_dependency\n",
        })

        with pytest.raises(ResolutionError) as exc_info:
            resolve_namespaces({namespace})

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_resolution_error_is_unexpected_error(self, plugin_root, namespace):
        """Test resolution failures use the unexpected error kind."""
        write_tree(plugin_root, {f"{namespace}/broken.py": "def oops(:\n"})

        with pytest.raises(UnexpectedChangekitError):
            resolve_namespaces({namespace})

    def test_unlistable_directory_fails(self, plugin_root, namespace, monkeypatch):
        """Test a directory that cannot be listed aborts resolution."""
        (plugin_root / namespace).mkdir()

        def deny(self):
            raise PermissionError(f"Permission denied: {self}")

        monkeypatch.setattr(Path, "iterdir", deny)

        with pytest.raises(ResolutionError) as exc_info:
            resolve_namespaces({namespace})

        assert isinstance(exc_info.value.__cause__, PermissionError)


# =============================================================================
# Resolution with RegistryLoader
# =============================================================================


class AddAuditColumn(Change):
    @property
    def name(self) -> str:
        return "addAuditColumn"

    def generate_statements(self, database):
        return []


class AuditHelper:
    pass


class TestResolveWithRegistry:
    """Tests for resolution against an explicit type registry."""

    def test_registered_units(self, tmp_path):
        """Test unit names found on disk are looked up in the registry."""
        write_tree(tmp_path, {
            "acme/changes/audit.py": "",
            "acme/changes/helpers/audit_helper.py": "",
        })
        registry = TypeRegistry()
        registry.add("acme.changes.audit", AddAuditColumn)
        registry.add("acme.changes.helpers.audit_helper", AuditHelper)

        resolver = NamespaceResolver(
            search_path=[tmp_path], loader=RegistryLoader(registry)
        )
        types = resolver.resolve({"acme.changes"})

        assert types == frozenset({AddAuditColumn, AuditHelper})

    def test_unregistered_unit_fails(self, tmp_path):
        """Test a unit without registered types aborts resolution."""
        write_tree(tmp_path, {
            "acme/changes/audit.py": "",
            "acme/changes/renamed.py": "",
        })
        registry = TypeRegistry()
        registry.add("acme.changes.audit", AddAuditColumn)

        resolver = NamespaceResolver(
            search_path=[tmp_path], loader=RegistryLoader(registry)
        )

        with pytest.raises(UnregisteredUnitError) as exc_info:
            resolver.resolve({"acme.changes"})

        assert exc_info.value.unit_name == "acme.changes.renamed"

    def test_overlapping_roots_absorb_duplicates(self, tmp_path):
        """Test the same unit under two roots appears once."""
        write_tree(tmp_path, {
            "first/acme/audit.py": "",
            "second/acme/audit.py": "",
        })
        registry = TypeRegistry()
        registry.add("acme.audit", AddAuditColumn)

        resolver = NamespaceResolver(
            search_path=[tmp_path / "first", tmp_path / "second"],
            loader=RegistryLoader(registry),
        )

        assert resolver.resolve({"acme"}) == frozenset({AddAuditColumn})
