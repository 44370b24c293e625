from pathlib import Path

import pytest

LAYOUT = (
    "<!doctype html><title>{{title}} | {{site_title}}</title>"
    '<base href="{{base}}"><h1 class="site">{{site_title}}</h1>'
    "<main>{{content}}</main>"
)


def write_tree(root: Path, files: dict) -> None:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


@pytest.fixture
def site(tmp_path):
    write_tree(
        tmp_path,
        {
            "templates/layout.html": LAYOUT,
            "pages/index.md": "# Home\nHi",
            "pages/guide/setup.md": "# Setup\nSteps",
            "assets/styles.css": "body { margin: 0; }",
        },
    )
    return tmp_path
