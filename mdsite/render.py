from __future__ import annotations

import enum
import html
import shutil
from pathlib import Path

from .config import BuildConfig
from .content import Page, render_markdown

CONTENT_KEY = "content"


class CopyResult(enum.Enum):
    COPIED = "copied"
    SOURCE_MISSING = "source_missing"


def escape_html(text: str) -> str:
    return html.escape(text, quote=False)


def render_template(template: str, **context: str) -> str:
    output = template
    for key, value in context.items():
        if key == CONTENT_KEY:
            continue
        output = output.replace(f"{{{{{key}}}}}", value)
    # content last and only once: rendered markdown is never rescanned
    if CONTENT_KEY in context:
        output = output.replace(f"{{{{{CONTENT_KEY}}}}}", context[CONTENT_KEY], 1)
    return output


def render_page(template: str, page: Page, config: BuildConfig) -> str:
    return render_template(
        template,
        title=escape_html(page.title),
        site_title=escape_html(config.site_title),
        base=config.base_path,
        content=render_markdown(page.text),
    )


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_assets(assets_dir: Path, output_dir: Path) -> CopyResult:
    """Mirror ``assets_dir`` into ``output_dir`` file by file.

    A missing source directory is reported as ``CopyResult.SOURCE_MISSING``;
    every other failure propagates.
    """
    if not assets_dir.exists():
        return CopyResult.SOURCE_MISSING
    pending = [(assets_dir, output_dir)]
    while pending:
        src, dest = pending.pop()
        dest.mkdir(parents=True, exist_ok=True)
        for item in sorted(src.iterdir(), key=lambda p: p.name):
            target = dest / item.name
            if item.is_dir():
                pending.append((item, target))
            else:
                shutil.copy2(item, target)
    return CopyResult.COPIED
