"""Tests for the standalone sweep worker."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import time
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from infrastructure.config import get_settings
from infrastructure.metadata.xattr_metadata import XattrObjectMetadata
from infrastructure.sweep_worker import run_worker
from tests.conftest import SAMPLE_BYTES, SAMPLE_IDENTIFIER

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Drop cached settings so environment overrides are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_single_pass_removes_expired_objects(
    xattr_storage_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    fresh_settings: None,
) -> None:
    metadata = XattrObjectMetadata()
    expired = xattr_storage_root / SAMPLE_IDENTIFIER
    expired.write_bytes(SAMPLE_BYTES)
    metadata.write_deletion_token(expired, b"\x00" * 16)
    metadata.write_expiry(expired, datetime.now(UTC) - timedelta(days=1))

    kept = xattr_storage_root / "0123456789abcdef.gif"
    kept.write_bytes(b"GIF89a")
    metadata.write_deletion_token(kept, b"\x01" * 16)
    metadata.write_expiry(kept, datetime.now(UTC) + timedelta(days=1))

    monkeypatch.setenv("STORAGE_ROOT", str(xattr_storage_root))
    monkeypatch.setenv("APP_ENV", "production")

    await run_worker(once=True)

    assert not expired.exists()
    assert kept.exists()


def test_sigterm_stops_worker_promptly(storage_root: Path) -> None:
    env = {
        **os.environ,
        "STORAGE_ROOT": str(storage_root),
        "SWEEP_INTERVAL_SECONDS": "3600",
        "APP_ENV": "production",
    }
    proc = subprocess.Popen(
        [sys.executable, "-m", "infrastructure.sweep_worker"],
        cwd=PROJECT_ROOT,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    try:
        assert proc.stdout is not None
        deadline = time.monotonic() + 30
        for line in proc.stdout:
            if "sweep_worker_started" in line:
                break
            assert time.monotonic() < deadline, "worker did not start"
        else:
            pytest.fail(f"worker exited before starting with code {proc.wait()}")

        proc.send_signal(signal.SIGTERM)
        output, _ = proc.communicate(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    assert proc.returncode == 0
    assert "sweep_worker_shutdown_complete" in output
