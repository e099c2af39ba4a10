from __future__ import annotations

from lagom import Container

from application.ports.content_store import ContentStore
from application.ports.object_metadata import ObjectMetadata
from application.use_cases.object_use_cases import (
    DeleteObjectUseCase,
    FetchObjectUseCase,
    GetServerInfoUseCase,
    UploadObjectUseCase,
)
from application.use_cases.sweep_use_cases import SweepExpiredObjectsUseCase
from domain.services.clock import Clock, utc_now
from domain.services.lifetime_policy import LifetimePolicy
from infrastructure.config import Settings, get_settings
from infrastructure.content_stores.filesystem_content_store import FilesystemContentStore
from infrastructure.metadata.xattr_metadata import XattrObjectMetadata
from infrastructure.sweeper.expiration_sweeper import ExpirationSweeper


def create_container(
    settings: Settings | None = None,
    *,
    metadata: ObjectMetadata | None = None,
    clock: Clock = utc_now,
) -> Container:
    """Wire the application from one Settings instance.

    ``metadata`` and ``clock`` can be swapped, mainly for tests running on
    filesystems without extended attributes or against a frozen clock.
    """
    settings = settings or get_settings()
    container = Container()

    container[Settings] = settings

    # Domain policies
    container[LifetimePolicy] = LifetimePolicy(
        default_days=settings.default_lifetime_days,
        max_days=settings.max_lifetime_days,
    )

    # Storage
    container[ObjectMetadata] = metadata if metadata is not None else XattrObjectMetadata()
    content_store_instance = FilesystemContentStore(
        root=settings.storage_root,
        metadata=container[ObjectMetadata],
        max_lifetime_days=settings.max_lifetime_days,
        clock=clock,
    )
    container[ContentStore] = content_store_instance

    # Register Use Cases
    container[UploadObjectUseCase] = lambda c: UploadObjectUseCase(
        content_store=c[ContentStore],
        lifetime_policy=c[LifetimePolicy],
        max_file_size=settings.max_file_size,
        clock=clock,
    )
    container[FetchObjectUseCase] = lambda c: FetchObjectUseCase(
        content_store=c[ContentStore],
        accel_prefix=settings.x_accel_prefix,
    )
    container[DeleteObjectUseCase] = lambda c: DeleteObjectUseCase(
        content_store=c[ContentStore],
    )
    container[GetServerInfoUseCase] = lambda c: GetServerInfoUseCase(
        lifetime_policy=c[LifetimePolicy],
        max_file_size=settings.max_file_size,
        contact=settings.contact_url,
        broadcast_message=settings.motd,
    )
    container[SweepExpiredObjectsUseCase] = lambda c: SweepExpiredObjectsUseCase(
        content_store=c[ContentStore],
        clock=clock,
    )

    # Background sweeper
    container[ExpirationSweeper] = lambda c: ExpirationSweeper(
        sweep_use_case=c[SweepExpiredObjectsUseCase],
        interval_seconds=settings.sweep_interval_seconds,
    )

    return container
