import json
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

SAMPLES_DIR = Path(__file__).resolve().parent.parent / "test_samples"


@pytest.fixture
def samples_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture
def make_project(tmp_path) -> Callable[..., Path]:
    """Write a throwaway project: ``make_project({"src/app.js": "..."}, manifest={...})``."""

    def _make(files: Optional[Dict[str, str]] = None, manifest: Optional[dict] = None) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        if manifest is not None:
            (root / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        for rel, content in (files or {}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
