from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from ccc_cli.project import ProjectPaths
from ccc_cli.share import _resolve_config_dir


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the user config directory at a temporary location."""
    path = tmp_path / "ccc-home"
    path.mkdir()
    monkeypatch.setenv("CCC_CONFIG_DIR", str(path))
    _resolve_config_dir.cache_clear()
    yield path
    _resolve_config_dir.cache_clear()
    logger.remove()


@pytest.fixture
def project(tmp_path: Path) -> ProjectPaths:
    root = tmp_path / "project"
    root.mkdir()
    return ProjectPaths(root)


@pytest.fixture
def managed_project(config_dir: Path, tmp_path: Path) -> ProjectPaths:
    """A project whose `.claude` is linked into ccc storage, as `ccc setup` leaves it."""
    storage = config_dir / "storage" / "project"
    storage.mkdir(parents=True)
    root = tmp_path / "managed"
    root.mkdir()
    (root / ".claude").symlink_to(storage, target_is_directory=True)
    return ProjectPaths(root)
