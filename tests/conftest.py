"""Pytest fixtures for confmerge tests."""

import json
from pathlib import Path

import pytest

from confmerge import ConfigStore, StoreSettings


def write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove confmerge-related environment variables."""
    env_vars = [
        "CONFMERGE_BUILTIN_LOADERS",
        "CONFMERGE_ARRAY_POLICY",
        "CONFMERGE_CWD",
        "CONFMERGE_HOME",
        "CONFMERGE_GLOBAL_DIR",
        "CONFMERGE_LOCAL_DIR",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def store(clean_env: None) -> ConfigStore:
    """Provide a store with default settings."""
    return ConfigStore(settings=StoreSettings())


@pytest.fixture
def fixtures(tmp_path: Path) -> Path:
    """Build a tree of config files under a temporary directory.

    Layout:
        cwd/.fixture.json, cwd/.fixture.yml, cwd/fixturefile.py
        other/.fixture.json, other/.fixture.yml
        local/site-packages/fixture_config_bar/.fixture.yml
        local/site-packages/fixture_config_foo/.fixture.json
        loaders/custom.foo
    """
    root = tmp_path / "fixtures"

    write_json(root / "cwd" / ".fixture.json", {"list": ["one", "two"]})
    write_text(
        root / "cwd" / ".fixture.yml",
        "list:\n  - two\n  - three\ntags:\n  - a\n",
    )
    write_text(
        root / "cwd" / "fixturefile.py",
        'config = {"layout": True, "tags": ["b", "c"]}\n',
    )

    write_json(root / "other" / ".fixture.json", {"list": ["four", "five"]})
    write_text(root / "other" / ".fixture.yml", "list:\n  - six\n")

    site = root / "local" / "site-packages"
    write_json(
        site / "fixture_config_foo" / ".fixture.json",
        {"items": ["four", "five"], "categories": ["x"]},
    )
    write_text(
        site / "fixture_config_bar" / ".fixture.yml",
        "items:\n  - six\ncategories:\n  - y\n  - z\n",
    )

    write_text(root / "loaders" / "custom.foo", '{"worked": true}')

    return root


@pytest.fixture
def cwd_dir(fixtures: Path) -> Path:
    return fixtures / "cwd"


@pytest.fixture
def local_dir(fixtures: Path) -> Path:
    return fixtures / "local" / "site-packages"
