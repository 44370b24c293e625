from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import markdown

TITLE_RE = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
DEFAULT_TITLE = "Untitled"
PAGE_SUFFIX = ".md"
INDEX_PAGE = "index.md"
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


@dataclass(frozen=True)
class Page:
    source: Path
    rel_dir: Path
    text: str

    @property
    def filename(self) -> str:
        return self.source.name

    @property
    def title(self) -> str:
        return extract_title(self.text)


def read_page(source: Path, rel_dir: Path) -> Page:
    return Page(source=source, rel_dir=rel_dir, text=source.read_text(encoding="utf-8"))


def extract_title(text: str) -> str:
    """Return the text of the first ``# heading`` line, or ``Untitled``."""
    match = TITLE_RE.search(text.lstrip("\ufeff"))
    if not match:
        return DEFAULT_TITLE
    return match.group(1).strip() or DEFAULT_TITLE


def is_page(name: str) -> bool:
    return name.endswith(PAGE_SUFFIX)


def output_path_for(output_dir: Path, rel_dir: Path, filename: str) -> Path:
    base = output_dir / rel_dir
    if filename.lower() == INDEX_PAGE:
        return base / "index.html"
    return base / Path(filename).stem / "index.html"


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    return md.convert(text)
