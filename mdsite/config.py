from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

DEFAULT_SITE_TITLE = "My Site"
DEFAULT_BASE_PATH = "/"
LAYOUT_FILE = "layout.html"
ASSETS_SUBDIR = "assets"


def normalize_base_path(value: str) -> str:
    return value if value.endswith("/") else f"{value}/"


@dataclass(frozen=True)
class BuildConfig:
    site_title: str = DEFAULT_SITE_TITLE
    base_path: str = DEFAULT_BASE_PATH

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_path", normalize_base_path(self.base_path))


@dataclass(frozen=True)
class SitePaths:
    pages: Path
    assets: Path
    templates: Path
    output: Path
    project_root: Path

    @property
    def layout(self) -> Path:
        return self.templates / LAYOUT_FILE

    @property
    def output_assets(self) -> Path:
        return self.output / ASSETS_SUBDIR

    @classmethod
    def under(cls, root: Path, **overrides: str) -> "SitePaths":
        """Resolve the default ``pages``/``assets``/``templates``/``dist`` layout below ``root``.

        Relative overrides are taken relative to ``root``.
        """
        names = {"pages": "pages", "assets": "assets", "templates": "templates", "output": "dist"}
        for key, value in overrides.items():
            if value:
                names[key] = value
        return cls(project_root=root, **{key: root / value for key, value in names.items()})


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def resolve_build_config(
    config: Mapping[str, object],
    environ: Optional[Mapping[str, str]] = None,
    site_title: Optional[str] = None,
    base_path: Optional[str] = None,
) -> BuildConfig:
    """Merge defaults, config file values, ``SITE_TITLE``/``BASE_PATH`` and explicit flags.

    Later sources win. Empty environment values are ignored.
    """
    if environ is None:
        environ = os.environ

    def pick(flag: Optional[str], env_key: str, cfg_key: str, default: str) -> str:
        if flag:
            return flag
        env_value = environ.get(env_key)
        if env_value:
            return env_value
        cfg_value = config.get(cfg_key)
        if cfg_value is not None and str(cfg_value):
            return str(cfg_value)
        return default

    return BuildConfig(
        site_title=pick(site_title, "SITE_TITLE", "site_title", DEFAULT_SITE_TITLE),
        base_path=pick(base_path, "BASE_PATH", "base_path", DEFAULT_BASE_PATH),
    )
