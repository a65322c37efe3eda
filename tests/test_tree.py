from __future__ import annotations

from pathlib import Path

from generate_indexes import build_tree, list_entries

from conftest import write


def test_list_entries_is_flat_and_filtered(docs: Path) -> None:
  write(docs / "guides" / "index.mdx", "old index")
  (docs / "guides" / ".cache").mkdir()
  entries = list_entries(docs, docs / "guides")
  assert [(e.name, e.kind, e.path, e.title) for e in entries] == [
    ("getting-started.mdx", "page", "guides/getting-started.mdx", "Getting Started"),
    ("intro.mdx", "page", "guides/intro.mdx", "Quick Start"),
    ("setup", "directory", "guides/setup", "Setup"),
  ]
  assert entries[2].children == []


def test_build_tree_recurses(docs: Path) -> None:
  write(docs / "guides" / "setup" / "index.mdx", "generated before")
  tree = build_tree(docs, docs / "guides")
  setup = tree[-1]
  assert setup.kind == "directory"
  assert [(c.name, c.title, c.path) for c in setup.children] == [
    ("install.mdx", "Install the CLI", "guides/setup/install.mdx"),
  ]


def test_empty_directory(tmp_path: Path) -> None:
  write(tmp_path / "empty" / "index.mdx", "x")
  write(tmp_path / "empty" / "image.png", "x")
  assert list_entries(tmp_path, tmp_path / "empty") == []
