from __future__ import annotations

import os
import secrets
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

import structlog
import xxhash

from domain.exceptions import MetadataError, ObjectNotFoundError, ValidationError
from domain.services.clock import Clock, utc_now
from domain.services.lifetime_policy import LifetimePolicy
from domain.value_objects.identifier import derive_identifier, validate_identifier
from domain.value_objects.stored_object import StoredObject
from domain.value_objects.sweep_report import SweepReport

if TYPE_CHECKING:
    from datetime import datetime

    from application.ports.object_metadata import ObjectMetadata

logger = structlog.get_logger()

TEMP_PREFIX = ".tmp-"
CHUNK_SIZE = 1024 * 1024


class FilesystemContentStore:
    """Flat directory of files named by identifier.

    Uploads are written to a random ``.tmp-<hex>`` file, renamed onto their
    content-derived name, then tagged with a deletion token and an optional
    expiration through the metadata adapter.
    """

    def __init__(
        self,
        root: str | Path,
        metadata: ObjectMetadata,
        *,
        max_lifetime_days: int = 0,
        clock: Clock = utc_now,
    ) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.metadata = metadata
        self.lifetime_policy = LifetimePolicy(default_days=0, max_days=max_lifetime_days)
        self.clock = clock

    def resolve(self, identifier: str) -> Path:
        """Map a validated identifier to its location under the root."""
        if validate_identifier(identifier) is None:
            msg = f"Invalid identifier {identifier!r}"
            raise ValidationError(msg)
        return self.root / identifier

    def put(
        self,
        stream: BinaryIO,
        original_filename: str | None,
        lifetime_days: int,
    ) -> StoredObject:
        token = secrets.token_bytes(16)
        temp_path = self.root / f"{TEMP_PREFIX}{token.hex()}"

        try:
            digest = xxhash.xxh64()
            with temp_path.open("xb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    digest.update(chunk)

            identifier = derive_identifier(digest.hexdigest(), original_filename)
            path = self.resolve(identifier)
            # Identical content maps to the same name; replacing it is harmless.
            temp_path.replace(path)

            lifetime_days = self.lifetime_policy.clamp(lifetime_days)
            expires_at = LifetimePolicy.expires_at(self.clock(), lifetime_days)
            try:
                self.metadata.write_deletion_token(path, token)
                if expires_at is not None:
                    self.metadata.write_expiry(path, expires_at)
                else:
                    self.metadata.clear_expiry(path)
            except Exception:
                path.unlink(missing_ok=True)
                raise
        finally:
            temp_path.unlink(missing_ok=True)

        logger.info(
            "object_stored",
            path=str(path),
            filename=original_filename,
            lifetime_days=lifetime_days,
            expires_at=expires_at.isoformat() if expires_at else None,
        )
        return StoredObject(
            identifier=identifier,
            deletion_token=token.hex(),
            expires_at=expires_at,
            lifetime_days=lifetime_days,
        )

    def locate(self, identifier: str) -> Path | None:
        try:
            path = self.resolve(identifier)
        except ValidationError:
            return None
        if not path.is_file():
            return None
        # Renamed but not yet tagged: not servable until the upload completes.
        try:
            if self.metadata.read_deletion_token(path) is None:
                return None
        except MetadataError:
            return None
        return path

    def delete(self, identifier: str, presented_token: str) -> None:
        try:
            path = self.resolve(identifier)
        except ValidationError as e:
            raise ObjectNotFoundError(str(e)) from e

        stored_token = self.metadata.read_deletion_token(path)
        if stored_token is None or stored_token.hex() != presented_token:
            logger.info("object_delete_rejected", path=str(path))
            msg = "no such file or invalid token"
            raise ObjectNotFoundError(msg)

        try:
            path.unlink()
        except FileNotFoundError as e:
            msg = "no such file or invalid token"
            raise ObjectNotFoundError(msg) from e
        logger.info("object_deleted", path=str(path))

    def purge_expired(self, now: datetime) -> SweepReport:
        report = SweepReport()
        # os.walk ignores errors by default, so entries vanishing mid-walk are fine.
        for dirpath, _dirnames, filenames in os.walk(self.root):
            for filename in filenames:
                path = Path(dirpath) / filename
                report.scanned += 1
                try:
                    expires_at = self.metadata.read_expiry(path)
                except (MetadataError, OSError) as e:
                    report.skipped += 1
                    logger.debug("sweep_entry_skipped", path=str(path), error=str(e))
                    continue

                if expires_at is None or expires_at >= now:
                    continue

                try:
                    path.unlink()
                except FileNotFoundError:
                    report.skipped += 1
                    continue
                except OSError as e:
                    report.skipped += 1
                    logger.warning("expired_object_removal_failed", path=str(path), error=str(e))
                    continue

                report.removed.append(filename)
                logger.info(
                    "expired_object_removed",
                    path=str(path),
                    expired_at=expires_at.isoformat(),
                    overdue_seconds=(now - expires_at).total_seconds(),
                )
        return report
