#!/usr/bin/env python3
"""
Description: Generate overview index.mdx pages for the directories referenced by a Mintlify docs.json.
Functioning: Derives target directories from the navigation manifest, removes stale generated indexes, lists each directory's pages and subdirectories, and writes a card summary to <dir>/index.mdx.
How to use: Run `python generate_indexes.py [--style flat|nested] [--exclude DIR] [--dry-run]` from the docs root.

Notes & assumptions:
- Page titles come from the `title:` field of the leading front matter block.
  Pages without one get a title derived from the file name
  (getting-started.mdx -> Getting Started).
- Directories with nothing to list get no index page.
- Settings can also come from the environment or a .env file:
  DOCS_ROOT, DOCS_JSON_PATH, INDEX_EXCLUDE_DIRS, INDEX_STYLE,
  INDEX_TARGET_POLICY, INDEX_COLUMNS, LOG_LEVEL.
"""

import argparse
import html
import json
import logging
import os
import posixpath
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Set

from dotenv import load_dotenv

logger = logging.getLogger("generate-indexes")

PAGE_EXT = ".mdx"
INDEX_NAME = "index" + PAGE_EXT
MANIFEST_NAME = "docs.json"
DEFAULT_EXCLUDE = ("snippets",)
SKIP_DIRS = {"node_modules"}

STYLES = ("flat", "nested")
POLICIES = ("ancestry", "root")

# Marks index pages owned by this script.
GENERATED_MARKER = "{/* Generated by generate_indexes.py. Do not edit by hand. */}"

RE_FRONT_MATTER = re.compile(r"\A\ufeff?\s*---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
RE_TITLE = re.compile(r"""^title:[ \t]*['"]?(.*?)['"]?[ \t]*$""", re.MULTILINE)


@dataclass
class IndexConfig:
  root: Path = Path(".")
  manifest: Optional[Path] = None
  exclude: Set[str] = field(default_factory=lambda: set(DEFAULT_EXCLUDE))
  style: str = "flat"
  policy: str = "ancestry"
  columns: int = 2
  dry_run: bool = False

  @property
  def manifest_path(self) -> Path:
    return self.manifest if self.manifest is not None else self.root / MANIFEST_NAME


@dataclass
class DirectoryEntry:
  name: str
  kind: str  # "page" or "directory"
  path: str  # POSIX, relative to the content root
  title: str
  children: List["DirectoryEntry"] = field(default_factory=list)


@dataclass
class RunSummary:
  written: List[str] = field(default_factory=list)
  unchanged: List[str] = field(default_factory=list)
  skipped: List[str] = field(default_factory=list)
  removed: List[str] = field(default_factory=list)
  failed: List[str] = field(default_factory=list)


# =======================
# Configuration
# =======================
def split_list(raw: Optional[str]) -> Set[str]:
  return {normalize_dir(p) for p in (raw or "").split(",") if normalize_dir(p)}

def config_from_env() -> IndexConfig:
  """Build the default configuration from environment variables."""
  style = os.getenv("INDEX_STYLE", "flat").strip().lower()
  if style not in STYLES:
    raise ValueError(f"INDEX_STYLE must be one of {', '.join(STYLES)}: {style}")
  policy = os.getenv("INDEX_TARGET_POLICY", "ancestry").strip().lower()
  if policy not in POLICIES:
    raise ValueError(f"INDEX_TARGET_POLICY must be one of {', '.join(POLICIES)}: {policy}")
  columns = int(os.getenv("INDEX_COLUMNS", "2"))
  if columns < 1:
    raise ValueError(f"INDEX_COLUMNS must be at least 1: {columns}")

  exclude_raw = os.getenv("INDEX_EXCLUDE_DIRS")
  manifest = os.getenv("DOCS_JSON_PATH")
  return IndexConfig(
    root=Path(os.getenv("DOCS_ROOT", ".")),
    manifest=Path(manifest) if manifest else None,
    exclude=split_list(exclude_raw) if exclude_raw is not None else set(DEFAULT_EXCLUDE),
    style=style,
    policy=policy,
    columns=columns,
  )


# =======================
# Manifest reader
# =======================
def normalize_dir(raw: str) -> str:
  s = raw.strip().replace("\\", "/")
  while s.startswith("./"):
    s = s[2:]
  return s.strip("/")

def iter_page_references(manifest: dict) -> Iterator[str]:
  """Yield every string page reference under navigation.dropdowns[*].groups[*].pages."""
  def walk_pages(pages) -> Iterator[str]:
    if not isinstance(pages, list):
      return
    for page in pages:
      if isinstance(page, str):
        yield page
      elif isinstance(page, dict):
        # nested group
        yield from walk_pages(page.get("pages"))

  navigation = manifest.get("navigation") if isinstance(manifest, dict) else None
  dropdowns = (navigation or {}).get("dropdowns") if isinstance(navigation, dict) else None
  for dropdown in dropdowns if isinstance(dropdowns, list) else []:
    if not isinstance(dropdown, dict):
      continue
    groups = dropdown.get("groups")
    for group in groups if isinstance(groups, list) else []:
      if isinstance(group, dict):
        yield from walk_pages(group.get("pages"))

def directories_for_page(page: str, policy: str) -> Set[str]:
  ref = normalize_dir(page)
  if not ref or ref.startswith("http"):
    return set()
  if any(seg in ("", ".", "..") for seg in ref.split("/")):
    logger.warning("Skipping page reference outside the docs root: %s", page)
    return set()
  parent = posixpath.dirname(ref)
  if not parent:
    return set()
  if policy == "root":
    return {parent.split("/", 1)[0]}

  dirs = set()
  while parent:
    dirs.add(parent)
    parent = posixpath.dirname(parent)
  return dirs

def derive_target_directories(manifest_path: Path, policy: str = "ancestry") -> Set[str]:
  """
  Return the directories (relative to the content root) that need an index page.
  A missing or malformed manifest is logged and yields an empty set.
  """
  try:
    manifest = json.loads(Path(manifest_path).read_text(encoding="utf-8"))
  except (OSError, ValueError) as e:
    logger.error("Error reading or parsing %s: %s", manifest_path, e)
    return set()

  targets: Set[str] = set()
  for page in iter_page_references(manifest):
    targets |= directories_for_page(page, policy)
  return targets


# =======================
# Titles
# =======================
def format_name_to_title(name: str) -> str:
  if name.endswith(PAGE_EXT):
    name = name[:-len(PAGE_EXT)]
  words = name.replace("-", " ").split(" ")
  return " ".join(w[:1].upper() + w[1:] for w in words)

def extract_title(page_path: Path) -> Optional[str]:
  """Return the front matter title of a page, or None when it has none."""
  try:
    text = Path(page_path).read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    logger.debug("Could not read %s: %s", page_path, e)
    return None
  fm = RE_FRONT_MATTER.match(text)
  if not fm:
    return None
  m = RE_TITLE.search(fm.group(1))
  if not m:
    return None
  return m.group(1).strip() or None

def resolve_title(page_path: Path) -> str:
  return extract_title(page_path) or format_name_to_title(Path(page_path).name)


# =======================
# Tree walker
# =======================
def _children(directory: Path) -> List[os.DirEntry]:
  with os.scandir(directory) as it:
    entries = [e for e in it if not e.name.startswith(".") and e.name != INDEX_NAME]
  return sorted(entries, key=lambda e: (e.name.lower(), e.name))

def _walk(root: Path, directory: Path, recursive: bool) -> List[DirectoryEntry]:
  tree: List[DirectoryEntry] = []
  for entry in _children(directory):
    entry_path = Path(entry.path)
    rel = entry_path.relative_to(root).as_posix()
    if entry.is_dir(follow_symlinks=False):
      tree.append(DirectoryEntry(
        name=entry.name,
        kind="directory",
        path=rel,
        title=format_name_to_title(entry.name),
        children=_walk(root, entry_path, recursive) if recursive else [],
      ))
    elif entry.is_file() and entry.name.endswith(PAGE_EXT):
      tree.append(DirectoryEntry(name=entry.name, kind="page", path=rel, title=resolve_title(entry_path)))
  return tree

def build_tree(root: Path, directory: Path) -> List[DirectoryEntry]:
  """Pages and subdirectories of `directory`, subdirectories expanded recursively."""
  return _walk(Path(root), Path(directory), recursive=True)

def list_entries(root: Path, directory: Path) -> List[DirectoryEntry]:
  """Immediate pages and subdirectories of `directory`."""
  return _walk(Path(root), Path(directory), recursive=False)


# =======================
# Rendering
# =======================
def href_for(rel_path: str) -> str:
  if rel_path.endswith(PAGE_EXT):
    rel_path = rel_path[:-len(PAGE_EXT)]
  return "/" + rel_path

def _attr(value: str) -> str:
  return html.escape(value, quote=True)

def _card(title: str, icon: str, href: str) -> str:
  return f'<Card title="{_attr(title)}" icon="{icon}" href="{_attr(href)}"></Card>\n'

def render_nested(entries: List[DirectoryEntry]) -> str:
  mdx = ""
  for node in entries:
    if node.kind == "directory":
      mdx += f'<Accordion title="{_attr(node.title)}" icon="folder">\n'
      mdx += render_nested(node.children)
      mdx += "</Accordion>\n"
    else:
      mdx += _card(node.title, "file-text", href_for(node.path))
  return mdx

def render_flat(entries: List[DirectoryEntry], columns: int = 2) -> str:
  mdx = f"<Columns cols={{{columns}}}>\n"
  for node in entries:
    icon = "folder" if node.kind == "directory" else "file-text"
    mdx += "  " + _card(node.title, icon, href_for(node.path))
  mdx += "</Columns>\n"
  return mdx

def render(entries: List[DirectoryEntry], style: str = "flat", columns: int = 2) -> Optional[str]:
  """Render entries as MDX, or None when there is nothing to list."""
  if not entries:
    return None
  if style == "nested":
    return render_nested(entries)
  if style == "flat":
    return render_flat(entries, columns)
  raise ValueError(f"Unknown index style: {style}")

def compose_document(directory: str, body: str, style: str = "flat") -> str:
  title = format_name_to_title(posixpath.basename(directory)).replace("'", "''")
  components = "Accordion, Card" if style == "nested" else "Card, Columns"
  return (
    "---\n"
    f"title: 'Overview of {title}'\n"
    "---\n"
    "\n"
    f"{GENERATED_MARKER}\n"
    "\n"
    f"import {{ {components} }} from 'mintlify';\n"
    "\n"
    f"{body}"
  )


# =======================
# Cleanup
# =======================
def is_generated(index_path: Path) -> bool:
  try:
    return GENERATED_MARKER in index_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError):
    return False

def remove_index(index_path: Path, summary: RunSummary, dry_run: bool = False) -> None:
  if dry_run:
    if index_path.is_file():
      logger.info("DRY-RUN would remove %s", index_path)
      summary.removed.append(str(index_path))
    return
  try:
    index_path.unlink()
  except FileNotFoundError:
    return
  except OSError as e:
    logger.error("Error removing index file %s: %s", index_path, e)
    return
  logger.info("Removed old index file: %s", index_path)
  summary.removed.append(str(index_path))

def _under(rel: str, dirs: Set[str]) -> bool:
  return any(rel == d or rel.startswith(d + "/") for d in dirs)

def find_stale_indexes(root: Path, targets: Set[str], managed: Set[str]) -> List[Path]:
  """
  Return index files that should not survive this run.

  An index in a directory outside `targets` is stale when it lives inside one
  of the `managed` trees, or when it carries the generated marker.
  """
  stale: List[Path] = []
  for dirpath, dirnames, filenames in os.walk(root):
    dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in SKIP_DIRS)
    if INDEX_NAME not in filenames:
      continue
    rel = Path(dirpath).relative_to(root).as_posix()
    if rel == "." or rel in targets:
      continue
    index_path = Path(dirpath) / INDEX_NAME
    if _under(rel, managed) or is_generated(index_path):
      stale.append(index_path)
  return stale


# =======================
# Program
# =======================
def synthesize_directory(config: IndexConfig, directory: str, summary: RunSummary) -> None:
  root = config.root
  dir_path = root / directory
  index_path = dir_path / INDEX_NAME

  if config.style == "nested":
    entries = build_tree(root, dir_path)
  else:
    entries = list_entries(root, dir_path)
  body = render(entries, config.style, config.columns)
  if body is None:
    logger.info("Nothing to index in %s, skipping", directory)
    summary.skipped.append(directory)
    if index_path.is_file() and is_generated(index_path):
      remove_index(index_path, summary, config.dry_run)
    return

  content = compose_document(directory, body, config.style)
  if index_path.is_file() and index_path.read_bytes() == content.encode("utf-8"):
    logger.debug("Overview page for %s is up to date", directory)
    summary.unchanged.append(str(index_path))
    return
  if config.dry_run:
    logger.info("DRY-RUN would write: %s", index_path)
  else:
    index_path.write_text(content, encoding="utf-8")
    logger.info("Generated overview page for %s", directory)
  summary.written.append(str(index_path))

def run(config: IndexConfig) -> RunSummary:
  summary = RunSummary()
  root = config.root

  # 1) Targets from the manifest
  targets = derive_target_directories(config.manifest_path, config.policy)
  final_targets = {d for d in targets if not _under(d, config.exclude)}

  # 2) Stale indexes, then excluded directories, which never keep one
  to_remove = find_stale_indexes(root, final_targets, targets | config.exclude)
  for directory in sorted(config.exclude):
    index_path = root / directory / INDEX_NAME
    if index_path not in to_remove:
      to_remove.append(index_path)
  for index_path in to_remove:
    remove_index(index_path, summary, config.dry_run)

  # 3) Generate
  logger.info("Generating overview pages for: %s", sorted(final_targets))
  for directory in sorted(final_targets):
    try:
      synthesize_directory(config, directory, summary)
    except Exception:
      logger.exception("Failed to generate overview page for %s", directory)
      summary.failed.append(directory)

  logger.info(
    "Done: %d written, %d unchanged, %d skipped, %d removed, %d failed",
    len(summary.written), len(summary.unchanged), len(summary.skipped),
    len(summary.removed), len(summary.failed),
  )
  return summary

def positive_int(raw: str) -> int:
  value = int(raw)
  if value < 1:
    raise argparse.ArgumentTypeError(f"must be at least 1: {raw}")
  return value

def parse_args(argv: Optional[List[str]], defaults: IndexConfig) -> IndexConfig:
  p = argparse.ArgumentParser(description="Generate overview index.mdx pages from docs.json.")
  p.add_argument("--root", default=str(defaults.root), help="Docs root (default: current directory)")
  p.add_argument("--manifest", default=None, help="Path to docs.json (default: <root>/docs.json)")
  p.add_argument("--exclude", action="append", default=None,
                 help="Directory that never gets an index; repeatable (default: %s)" % ", ".join(sorted(defaults.exclude)))
  p.add_argument("--style", choices=STYLES, default=defaults.style, help="flat card grid or nested accordions")
  p.add_argument("--policy", choices=POLICIES, default=defaults.policy,
                 help="ancestry: every directory on a page path; root: top-level directories only")
  p.add_argument("--columns", type=positive_int, default=defaults.columns, help="Card columns for the flat style")
  p.add_argument("--dry-run", action="store_true", help="Do not write or delete files, just log what would be done")
  args = p.parse_args(argv)

  manifest = args.manifest or (str(defaults.manifest) if defaults.manifest else None)
  return IndexConfig(
    root=Path(args.root),
    manifest=Path(manifest) if manifest else None,
    exclude={normalize_dir(d) for d in args.exclude} if args.exclude else defaults.exclude,
    style=args.style,
    policy=args.policy,
    columns=args.columns,
    dry_run=args.dry_run,
  )

def main(argv: Optional[List[str]] = None) -> int:
  load_dotenv()
  log_level = os.getenv("LOG_LEVEL", "INFO").upper()
  logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(message)s"
  )

  try:
    config = parse_args(argv, config_from_env())
    if not config.root.is_dir():
      logger.error("Docs root not found: %s", config.root)
      return 2
    run(config)
  except Exception:
    logger.exception("Index generation failed")
    return 1
  return 0


if __name__ == "__main__":
  sys.exit(main())
