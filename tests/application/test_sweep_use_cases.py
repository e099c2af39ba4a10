"""Tests for the expiration sweep use case."""

from __future__ import annotations

from returns.result import Failure, Success

from application.use_cases.sweep_use_cases import SweepExpiredObjectsUseCase
from domain.value_objects.sweep_report import SweepReport
from tests.mocks import FROZEN_NOW, FakeClock, FakeContentStore, disk_error


def test_sweep_uses_injected_clock() -> None:
    report = SweepReport(scanned=2, removed=["3677e35be4b1ad2d.png"])
    store = FakeContentStore(report=report)

    result = SweepExpiredObjectsUseCase(store, clock=FakeClock()).execute()

    assert result == Success(report)
    assert store.purge_calls == [FROZEN_NOW]


def test_sweep_failure_is_reported() -> None:
    store = FakeContentStore(raise_on_purge=disk_error())

    result = SweepExpiredObjectsUseCase(store, clock=FakeClock()).execute()

    assert isinstance(result, Failure)
    assert result.failure().category == "storage_error"
