from __future__ import annotations

import shutil
from pathlib import Path


def reset_output_dir(output_dir: Path, project_root: Path) -> None:
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved:
        raise ValueError("Refusing to clean project root.")
    if not output_resolved.is_relative_to(root_resolved):
        raise ValueError(f"Refusing to clean output directory outside project root: {output_dir}")
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)
