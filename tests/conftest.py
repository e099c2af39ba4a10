"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from lagom import Container

from infrastructure.config import Settings
from infrastructure.content_stores.filesystem_content_store import FilesystemContentStore
from infrastructure.di.container import create_container
from interfaces.api.main import create_app
from interfaces.dependencies import get_container
from tests.mocks import FakeClock, InMemoryObjectMetadata

SAMPLE_BYTES = bytes([1, 2, 3, 42])
SAMPLE_IDENTIFIER = "3677e35be4b1ad2d.png"


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Return an empty storage root directory."""
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture
def xattr_storage_root(storage_root: Path) -> Path:
    """Return a storage root on a filesystem with user extended attributes."""
    probe = storage_root / ".probe"
    probe.write_bytes(b"")
    try:
        os.setxattr(probe, "user.snapshelf.probe", b"1")
    except (OSError, AttributeError):
        pytest.skip("filesystem does not support user extended attributes")
    finally:
        probe.unlink()
    return storage_root


@pytest.fixture
def clock() -> FakeClock:
    """Return a frozen clock."""
    return FakeClock()


@pytest.fixture
def metadata() -> InMemoryObjectMetadata:
    """Return in-memory object metadata."""
    return InMemoryObjectMetadata()


@pytest.fixture
def content_store(
    storage_root: Path,
    metadata: InMemoryObjectMetadata,
    clock: FakeClock,
) -> FilesystemContentStore:
    """Create a filesystem content store with in-memory metadata."""
    return FilesystemContentStore(storage_root, metadata, clock=clock)


@pytest.fixture
def make_settings(storage_root: Path) -> Callable[..., Settings]:
    """Build Settings pointing at the test storage root."""

    def _make(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "storage_root": storage_root,
            "default_lifetime_days": 7,
            "max_lifetime_days": 0,
            "sweeper_enabled": False,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def make_client(
    make_settings: Callable[..., Settings],
    metadata: InMemoryObjectMetadata,
    clock: FakeClock,
) -> Iterator[Callable[..., TestClient]]:
    """Build a TestClient over a fully wired container."""

    def _client(**overrides: object) -> TestClient:
        settings = make_settings(**overrides)
        container: Container = create_container(settings, metadata=metadata, clock=clock)
        app = create_app(settings)
        app.dependency_overrides[get_container] = lambda: container
        return TestClient(app, follow_redirects=False)

    yield _client


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """Return a TestClient with default settings."""
    return make_client()
