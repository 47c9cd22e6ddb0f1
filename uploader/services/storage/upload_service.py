import logging
import os
from typing import Any, Iterable, Optional

from uploader.services.storage.fields import PendingUpload, UploadFieldConfig
from uploader.services.storage.results import StoreResult

logger = logging.getLogger(__name__)


def get_upload_fields(entity: Any) -> Iterable[UploadFieldConfig]:
    return type(entity).get_upload_fields()


def get_pending_upload(entity: Any, field_name: str) -> Optional[PendingUpload]:
    """Pending upload for a field, from the mixin or an ``uploaded_<field>`` attribute."""
    lookup = getattr(entity, "pending_upload", None)
    if callable(lookup):
        pending = lookup(field_name)
    else:
        pending = getattr(entity, f"uploaded_{field_name}", None)

    if pending is None or isinstance(pending, PendingUpload):
        return pending
    return PendingUpload(field=field_name, source_path=os.fspath(pending))


class FileUploadService:
    """Commits the pending uploads of an entity, field by field"""

    def store(self, entity: Any) -> StoreResult:
        """
        Store every pending upload of an entity.

        Fields are processed in declaration order and each generated filename
        in order. The first failure stops everything and is returned; files
        written before it stay where they are.

        Args:
            entity: Object whose class exposes get_upload_fields()

        Returns:
            StoreResult with no failure when every commit succeeded or was skipped
        """
        result = StoreResult()

        for config in get_upload_fields(entity):
            pending = get_pending_upload(entity, config.field)
            if not getattr(entity, config.field, None) or pending is None:
                continue

            for triple in config.triples(entity, pending):
                logger.debug(f"Committing {triple.source_path} -> {triple.dest_path} ({triple.on_file_exists.value})")
                outcome = config.backend.commit(triple.source_path, triple.dest_path, triple.on_file_exists)

                if not outcome.ok:
                    logger.warning(f"Upload of field {config.field!r} failed: {outcome.failure}")
                    result.failure = outcome.failure
                    return result

                if outcome.skipped:
                    result.skipped.append(triple.dest_path)
                else:
                    result.written.append(triple.dest_path)

        return result


_default_service = FileUploadService()


def store_files(entity: Any) -> StoreResult:
    """Store all the pending uploads of an entity with the default service."""
    return _default_service.store(entity)
