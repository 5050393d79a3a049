from __future__ import annotations

import importlib
import re
import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def test_package_is_importable_from_source_tree() -> None:
    src = _repo_root() / "packages" / "counter-bridge-python" / "src"
    sys.path.insert(0, str(src))

    mod = importlib.import_module("counter_bridge")
    for name in mod.__all__:
        assert hasattr(mod, name), name


def test_pyproject_version_matches_package_version() -> None:
    root = _repo_root()
    pyproject = (root / "pyproject.toml").read_text(encoding="utf-8")
    init_text = (root / "packages" / "counter-bridge-python" / "src" / "counter_bridge" / "__init__.py").read_text(
        encoding="utf-8"
    )

    m1 = re.search(r'^version\s*=\s*"([^"]+)"\s*$', pyproject, re.MULTILINE)
    m2 = re.search(r'^__version__\s*=\s*"([^"]+)"\s*$', init_text, re.MULTILINE)
    assert m1 and m2
    assert m1.group(1) == m2.group(1)


def test_default_config_asset_is_packaged() -> None:
    pyproject = (_repo_root() / "pyproject.toml").read_text(encoding="utf-8")
    assert 'counter_bridge = ["assets/*.yaml"]' in pyproject
    assert (_repo_root() / "packages" / "counter-bridge-python" / "src" / "counter_bridge" / "assets" / "default.yaml").exists()
