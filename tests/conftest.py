from __future__ import annotations

import json
from pathlib import Path

import pytest


def write(path: Path, text: str = "") -> Path:
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text(text, encoding="utf-8")
  return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
  for name in ("DOCS_ROOT", "DOCS_JSON_PATH", "INDEX_EXCLUDE_DIRS", "INDEX_STYLE",
               "INDEX_TARGET_POLICY", "INDEX_COLUMNS", "LOG_LEVEL"):
    monkeypatch.delenv(name, raising=False)


@pytest.fixture
def docs(tmp_path: Path) -> Path:
  """A small docs tree with a docs.json referencing guides/ and snippets/."""
  manifest = {
    "navigation": {
      "dropdowns": [
        {
          "dropdown": "Docs",
          "groups": [
            {"group": "Guides", "pages": ["guides/intro", "guides/setup/install", "https://example.com/blog"]},
            {"group": "Shared", "pages": ["snippets/banner"]},
          ],
        }
      ]
    }
  }
  write(tmp_path / "docs.json", json.dumps(manifest))
  write(tmp_path / "guides" / "intro.mdx", "---\ntitle: 'Quick Start'\n---\n\nHello\n")
  write(tmp_path / "guides" / "getting-started.mdx", "# Getting started\n")
  write(tmp_path / "guides" / "setup" / "install.mdx", '---\ntitle: "Install the CLI"\n---\n')
  write(tmp_path / "guides" / "notes.txt", "not a page")
  write(tmp_path / "guides" / ".draft.mdx", "hidden")
  write(tmp_path / "snippets" / "banner.mdx", "banner")
  return tmp_path
