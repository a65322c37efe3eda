from __future__ import annotations

from pathlib import Path

from generate_indexes import extract_title, format_name_to_title, resolve_title

from conftest import write


def test_format_name_to_title() -> None:
  assert format_name_to_title("getting-started.mdx") == "Getting Started"
  assert format_name_to_title("api-v2") == "Api V2"
  # only the first letter of each word changes
  assert format_name_to_title("the-iOS-sdk.mdx") == "The IOS Sdk"


def test_title_from_front_matter(tmp_path: Path) -> None:
  single = write(tmp_path / "a.mdx", "---\ntitle: 'Quick Start'\ndescription: x\n---\nbody\n")
  double = write(tmp_path / "b.mdx", '---\nicon: rocket\ntitle: "Deploy"\n---\n')
  bare = write(tmp_path / "c.mdx", "---\ntitle:   Plain title  \n---\n")
  assert extract_title(single) == "Quick Start"
  assert extract_title(double) == "Deploy"
  assert extract_title(bare) == "Plain title"


def test_missing_title_is_none(tmp_path: Path) -> None:
  no_block = write(tmp_path / "a.mdx", "# Heading\n")
  no_field = write(tmp_path / "b.mdx", "---\ndescription: nothing\n---\n")
  empty = write(tmp_path / "c.mdx", "---\ntitle: ''\n---\n")
  blank = write(tmp_path / "e.mdx", "---\ntitle:\ndescription: Not a title\n---\n")
  late = write(tmp_path / "d.mdx", "intro\n---\ntitle: Not leading\n---\n")
  for page in (no_block, no_field, empty, late, blank):
    assert extract_title(page) is None


def test_unreadable_page_is_none(tmp_path: Path) -> None:
  assert extract_title(tmp_path / "missing.mdx") is None
  assert extract_title(tmp_path) is None


def test_resolve_title_falls_back_to_file_name(tmp_path: Path) -> None:
  page = write(tmp_path / "getting-started.mdx", "no front matter\n")
  assert resolve_title(page) == "Getting Started"
  titled = write(tmp_path / "getting-started-2.mdx", "---\ntitle: 'Quick Start'\n---\n")
  assert resolve_title(titled) == "Quick Start"
