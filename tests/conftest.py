"""Shared fixtures for changekit tests."""

import importlib
import sys
import textwrap
import uuid
from pathlib import Path
from typing import Dict

import pytest

from changekit import Context


CHANGE_MODULE = """
from changekit import Change


class {name}(Change):
    @property
    def name(self):
        return "{name}"

    def generate_statements(self, database):
        return []
"""

GENERATOR_MODULE = """
from changekit import Sql, SqlGenerator


class {name}(SqlGenerator):
    def supports(self, statement, database):
        return True

    def generate_sql(self, statement, database):
        return [Sql("SELECT 1")]
"""

HELPER_MODULE = """
class {name}:
    pass
"""


def write_tree(root: Path, files: Dict[str, str]) -> None:
    """Write a tree of files below root, creating directories as needed."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
    importlib.invalidate_caches()


@pytest.fixture
def namespace():
    """A top-level package name unique to the test."""
    name = f"cktest_{uuid.uuid4().hex[:8]}"
    yield name
    for module in list(sys.modules):
        if module == name or module.startswith(name + "."):
            del sys.modules[module]


@pytest.fixture
def plugin_root(tmp_path, monkeypatch):
    """A directory on sys.path to write plugin packages into."""
    root = tmp_path / "site"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    return root


@pytest.fixture(autouse=True)
def reset_context():
    """Never leak the process-wide context between tests."""
    Context.reset()
    yield
    Context.reset()
