from __future__ import annotations

import argparse
import enum
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

from .config import BuildConfig, SitePaths, load_config, resolve_build_config
from .pages import build_404, build_pages
from .render import CopyResult, copy_assets, read_template
from .utils import reset_output_dir


class BuildStage(enum.Enum):
    START = "start"
    OUTPUT_RESET = "output_reset"
    TEMPLATE_LOADED = "template_loaded"
    PAGES_BUILT = "pages_built"
    ASSETS_COPIED = "assets_copied"
    FALLBACK_WRITTEN = "fallback_written"
    DONE = "done"


@dataclass
class BuildResult:
    stage: BuildStage = BuildStage.START
    pages: list[Path] = field(default_factory=list)
    assets: CopyResult | None = None


class BuildFailed(Exception):
    def __init__(self, stage: BuildStage, cause: Exception) -> None:
        super().__init__(f"Build failed after {stage.value}: {cause}")
        self.stage = stage
        self.cause = cause


def build_site(paths: SitePaths, config: BuildConfig) -> BuildResult:
    """Run one full build: reset output, render pages, copy assets, write 404.html.

    Any failure is re-raised as ``BuildFailed`` carrying the last stage that
    completed. A missing assets directory is not a failure.
    """
    result = BuildResult()
    try:
        reset_output_dir(paths.output, paths.project_root)
        result.stage = BuildStage.OUTPUT_RESET

        template = read_template(paths.layout)
        result.stage = BuildStage.TEMPLATE_LOADED

        result.pages = build_pages(template, paths.pages, paths.output, config)
        result.stage = BuildStage.PAGES_BUILT

        result.assets = copy_assets(paths.assets, paths.output_assets)
        if result.assets is CopyResult.SOURCE_MISSING:
            print(f"No assets directory at {paths.assets}, skipping.", file=sys.stderr)
        result.stage = BuildStage.ASSETS_COPIED

        build_404(paths.output, config)
        result.stage = BuildStage.FALLBACK_WRITTEN
    except (OSError, ValueError) as exc:
        raise BuildFailed(result.stage, exc) from exc
    result.stage = BuildStage.DONE
    return result


def main(argv: list[str] | None = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_parser.add_argument("--root", default=".", help="Project root; other paths are relative to it.")
    pre_args, _ = pre_parser.parse_known_args(argv)
    root = Path(pre_args.root)
    config = load_config(root / pre_args.config)

    def cfg_str(key: str) -> str:
        value = config.get(key)
        return "" if value is None else str(value)

    parser = argparse.ArgumentParser(description="Build a static site from a tree of Markdown pages.")
    parser.add_argument(
        "--config",
        default=pre_args.config,
        help="Site config file (TOML/YAML/JSON), relative to --root.",
    )
    parser.add_argument("--root", default=pre_args.root, help="Project root; other paths are relative to it.")
    parser.add_argument("--pages", default=cfg_str("pages"), help="Directory containing Markdown pages.")
    parser.add_argument("--assets", default=cfg_str("assets"), help="Directory containing static assets.")
    parser.add_argument("--templates", default=cfg_str("templates"), help="Directory containing layout.html.")
    parser.add_argument("--output", default=cfg_str("output"), help="Output directory for the site.")
    parser.add_argument("--site-title", default=None, help="Site title (overrides SITE_TITLE).")
    parser.add_argument("--base-path", default=None, help="Base path prefix (overrides BASE_PATH).")
    args = parser.parse_args(argv)

    paths = SitePaths.under(
        root,
        pages=args.pages,
        assets=args.assets,
        templates=args.templates,
        output=args.output,
    )
    build_config = resolve_build_config(config, site_title=args.site_title, base_path=args.base_path)

    start = time.perf_counter()
    try:
        result = build_site(paths, build_config)
    except BuildFailed as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Built {len(result.pages)} page(s) in {elapsed:.2f}s.")
    print(f"Built -> {paths.output}/")


if __name__ == "__main__":
    main()
