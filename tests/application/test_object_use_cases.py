"""Tests for object use cases."""

from __future__ import annotations

import io
from pathlib import Path

from returns.result import Failure, Success

from application.dtos.object_dtos import UploadObjectRequest
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    FetchObjectUseCase,
    GetServerInfoUseCase,
    UploadObjectUseCase,
)
from domain.services.lifetime_policy import LifetimePolicy
from tests.mocks import FROZEN_NOW, FakeClock, FakeContentStore, disk_error, missing_object_error

TOKEN = "0123456789abcdef0123456789abcdef"


class TestUploadObjectUseCase:
    """Test UploadObjectUseCase."""

    def _use_case(
        self,
        store: FakeContentStore,
        *,
        default_days: int = 7,
        max_days: int = 0,
        max_file_size: int = 1024,
    ) -> UploadObjectUseCase:
        return UploadObjectUseCase(
            content_store=store,
            lifetime_policy=LifetimePolicy(default_days, max_days),
            max_file_size=max_file_size,
            clock=FakeClock(),
        )

    def test_upload_success(self) -> None:
        store = FakeContentStore()
        use_case = self._use_case(store)

        result = use_case.execute(
            io.BytesIO(b"\x01\x02\x03*"),
            UploadObjectRequest(filename="joconde.png", size_bytes=4, delete_day="42"),
        )

        assert isinstance(result, Success)
        response = result.unwrap()
        assert response.identifier == "3677e35be4b1ad2d.png"
        assert response.filename == "joconde.png"
        assert response.extension == ".png"
        assert response.lifetime_days == 42
        assert response.created_at == FROZEN_NOW
        assert store.put_calls == [
            {"data": b"\x01\x02\x03*", "filename": "joconde.png", "lifetime_days": 42},
        ]

    def test_missing_lifetime_uses_default(self) -> None:
        store = FakeContentStore()
        result = self._use_case(store, default_days=5).execute(
            io.BytesIO(b"x"),
            UploadObjectRequest(filename="a.png"),
        )

        assert isinstance(result, Success)
        assert store.put_calls[0]["lifetime_days"] == 5

    def test_lifetime_clamped_to_maximum(self) -> None:
        store = FakeContentStore()
        result = self._use_case(store, max_days=10).execute(
            io.BytesIO(b"x"),
            UploadObjectRequest(filename="a.png", delete_day="100"),
        )

        assert result.unwrap().lifetime_days == 10

    def test_oversized_upload_rejected(self) -> None:
        store = FakeContentStore()
        result = self._use_case(store, max_file_size=3).execute(
            io.BytesIO(b"four"),
            UploadObjectRequest(filename="a.png", size_bytes=4),
        )

        assert isinstance(result, Failure)
        assert result.failure().category == "validation"
        assert store.put_calls == []

    def test_storage_failure(self) -> None:
        store = FakeContentStore(raise_on_put=disk_error())
        result = self._use_case(store).execute(io.BytesIO(b"x"), UploadObjectRequest())

        assert isinstance(result, Failure)
        assert result.failure().category == "storage_error"


class TestFetchObjectUseCase:
    """Test FetchObjectUseCase."""

    def test_invalid_identifier_not_found(self) -> None:
        store = FakeContentStore(located=Path("/nowhere"))
        result = FetchObjectUseCase(store).execute("../secret")

        assert isinstance(result, Failure)
        assert result.failure().category == "not_found"
        assert store.locate_calls == []

    def test_missing_object_not_found(self) -> None:
        result = FetchObjectUseCase(FakeContentStore()).execute("3677e35be4b1ad2d.png")

        assert isinstance(result, Failure)
        assert result.failure().category == "not_found"

    def test_located_object(self, tmp_path: Path) -> None:
        path = tmp_path / "3677e35be4b1ad2d.png"
        result = FetchObjectUseCase(FakeContentStore(located=path)).execute("3677e35be4b1ad2d.png")

        target = result.unwrap()
        assert target.path == path
        assert target.accel_redirect is None

    def test_accel_redirect_skips_store(self) -> None:
        store = FakeContentStore()
        result = FetchObjectUseCase(store, accel_prefix="/protected/").execute("3677e35be4b1ad2d.png")

        target = result.unwrap()
        assert target.accel_redirect == "/protected/3677e35be4b1ad2d.png"
        assert target.path is None
        assert store.locate_calls == []


class TestDeleteObjectUseCase:
    """Test DeleteObjectUseCase."""

    def test_delete_success(self) -> None:
        store = FakeContentStore()
        result = DeleteObjectUseCase(store).execute("3677e35be4b1ad2d.png", TOKEN)

        assert result == Success("3677e35be4b1ad2d.png")
        assert store.delete_calls == [("3677e35be4b1ad2d.png", TOKEN)]

    def test_missing_token(self) -> None:
        store = FakeContentStore()
        result = DeleteObjectUseCase(store).execute("3677e35be4b1ad2d.png", None)

        assert isinstance(result, Failure)
        assert result.failure().category == "not_found"
        assert store.delete_calls == []

    def test_malformed_identifier(self) -> None:
        store = FakeContentStore()
        result = DeleteObjectUseCase(store).execute("..", TOKEN)

        assert isinstance(result, Failure)
        assert store.delete_calls == []

    def test_wrong_token_and_missing_object_look_the_same(self) -> None:
        store = FakeContentStore(raise_on_delete=missing_object_error())
        result = DeleteObjectUseCase(store).execute("3677e35be4b1ad2d.png", TOKEN)

        assert isinstance(result, Failure)
        assert result.failure().category == "not_found"
        assert result.failure().message == "no such file or invalid token"

    def test_storage_failure(self) -> None:
        store = FakeContentStore(raise_on_delete=disk_error())
        result = DeleteObjectUseCase(store).execute("3677e35be4b1ad2d.png", TOKEN)

        assert isinstance(result, Failure)
        assert result.failure().category == "storage_error"


class TestGetServerInfoUseCase:
    """Test GetServerInfoUseCase."""

    def test_info_reflects_configuration(self) -> None:
        info = GetServerInfoUseCase(
            lifetime_policy=LifetimePolicy(default_days=7, max_days=30),
            max_file_size=10 << 20,
            contact="https://example.com/snapshelf",
            broadcast_message="hello",
        ).execute()

        assert info.model_dump() == {
            "always_encrypt": False,
            "broadcast_message": "hello",
            "contact": "https://example.com/snapshelf",
            "default_delay": 7,
            "image_magick": False,
            "max_delay": 30,
            "max_file_size": 10485760,
        }
