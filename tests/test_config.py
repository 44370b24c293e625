import json
from pathlib import Path

import pytest

from mdsite.config import BuildConfig, SitePaths, load_config, normalize_base_path, resolve_build_config


def test_normalize_base_path():
    assert normalize_base_path("/") == "/"
    assert normalize_base_path("/my-repo") == "/my-repo/"
    assert normalize_base_path("/my-repo/") == "/my-repo/"


def test_build_config_defaults_and_normalization():
    assert BuildConfig() == BuildConfig(site_title="My Site", base_path="/")
    assert BuildConfig(base_path="/docs").base_path == "/docs/"


def test_resolve_build_config_defaults():
    assert resolve_build_config({}, environ={}) == BuildConfig()


def test_resolve_build_config_precedence():
    config = {"site_title": "From file", "base_path": "/file"}
    assert resolve_build_config(config, environ={}).site_title == "From file"

    environ = {"SITE_TITLE": "From env", "BASE_PATH": "/env"}
    resolved = resolve_build_config(config, environ=environ)
    assert resolved == BuildConfig(site_title="From env", base_path="/env/")

    resolved = resolve_build_config(config, environ=environ, site_title="From flag", base_path="/flag/")
    assert resolved == BuildConfig(site_title="From flag", base_path="/flag/")


def test_resolve_build_config_ignores_empty_env():
    resolved = resolve_build_config({}, environ={"SITE_TITLE": "", "BASE_PATH": ""})
    assert resolved == BuildConfig()


def test_resolve_build_config_reads_os_environ(monkeypatch):
    monkeypatch.setenv("SITE_TITLE", "Env Site")
    monkeypatch.setenv("BASE_PATH", "/sub")
    assert resolve_build_config({}) == BuildConfig(site_title="Env Site", base_path="/sub/")


def test_site_paths_under(tmp_path):
    paths = SitePaths.under(tmp_path, output="public", pages="")
    assert paths.pages == tmp_path / "pages"
    assert paths.output == tmp_path / "public"
    assert paths.layout == tmp_path / "templates" / "layout.html"
    assert paths.output_assets == tmp_path / "public" / "assets"


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "site.toml") == {}


def test_load_config_formats(tmp_path):
    toml_path = tmp_path / "site.toml"
    toml_path.write_text('site_title = "Toml"\n', encoding="utf-8")
    yaml_path = tmp_path / "site.yml"
    yaml_path.write_text("site_title: Yaml\n", encoding="utf-8")
    json_path = tmp_path / "site.json"
    json_path.write_text(json.dumps({"site_title": "Json"}), encoding="utf-8")

    assert load_config(toml_path) == {"site_title": "Toml"}
    assert load_config(yaml_path) == {"site_title": "Yaml"}
    assert load_config(json_path) == {"site_title": "Json"}


def test_load_config_empty_yaml(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


@pytest.mark.parametrize(
    "name, text",
    [
        ("site.toml", "site_title = "),
        ("site.yaml", "- just\n- a list\n"),
        ("site.json", "{not json"),
        ("site.json", "[1, 2]"),
    ],
)
def test_load_config_invalid_exits(tmp_path, capsys, name, text):
    path = Path(tmp_path / name)
    path.write_text(text, encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        load_config(path)
    assert excinfo.value.code == 1
    assert str(path) in capsys.readouterr().err
