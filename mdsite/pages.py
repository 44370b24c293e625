from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

from .config import BuildConfig
from .content import is_page, output_path_for, read_page
from .render import escape_html, render_page, write_text

NOT_FOUND_FILE = "404.html"
STYLESHEET = "assets/styles.css"


def iter_pages(pages_dir: Path) -> Iterator[tuple[Path, Path]]:
    """Yield ``(rel_dir, path)`` for every markdown file below ``pages_dir``.

    Directories are visited from an explicit stack and siblings in name
    order, so two walks over the same tree agree.
    """
    pending = [Path()]
    while pending:
        rel_dir = pending.pop()
        entries = sorted((pages_dir / rel_dir).iterdir(), key=lambda p: p.name)
        subdirs = []
        for entry in entries:
            if entry.is_dir():
                subdirs.append(rel_dir / entry.name)
            elif is_page(entry.name):
                yield rel_dir, entry
        pending.extend(reversed(subdirs))


def build_pages(template: str, pages_dir: Path, output_dir: Path, config: BuildConfig) -> list[Path]:
    written: dict[Path, Path] = {}
    for rel_dir, source in iter_pages(pages_dir):
        page = read_page(source, rel_dir)
        html_doc = render_page(template, page, config)
        out_path = output_path_for(output_dir, rel_dir, page.filename)
        previous = written.get(out_path)
        if previous is not None:
            print(
                f"Warning: {source} overwrites {previous} at {out_path.relative_to(output_dir)}",
                file=sys.stderr,
            )
        write_text(out_path, html_doc)
        written[out_path] = source
    return list(written)


def build_404(output_dir: Path, config: BuildConfig) -> Path:
    site_title = escape_html(config.site_title)
    html_doc = (
        '<!doctype html><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width,initial-scale=1">\n'
        f"<title>404 | {site_title}</title>\n"
        f'<base href="{config.base_path}">\n'
        f'<link rel="stylesheet" href="{STYLESHEET}">\n'
        '<main class="container"><h1>Page not found</h1>'
        '<p>Try the <a href="./">home page</a>.</p></main>\n'
    )
    path = output_dir / NOT_FOUND_FILE
    write_text(path, html_doc)
    return path
