"""
Uploadable entity support

An entity type lists its upload fields once, as an immutable tuple:

    class User(UploadableMixin, BaseModel):
        __tablename__ = "users"
        __upload_fields__ = (
            UploadFieldConfig("avatar_image", directory="avatars",
                              on_file_exists=OnFileExists.COMPARE_HASH),
        )

        avatar_image = Column(String)

Pending uploads live on the instance only and are never persisted.
"""

from typing import Dict, Optional, Tuple

from uploader.services.storage import PendingUpload, UploadFieldConfig


class UploadableMixin:
    __upload_fields__: Tuple[UploadFieldConfig, ...] = ()

    @classmethod
    def get_upload_fields(cls) -> Tuple[UploadFieldConfig, ...]:
        return tuple(cls.__upload_fields__)

    @classmethod
    def get_upload_field(cls, field_name: str) -> UploadFieldConfig:
        for config in cls.__upload_fields__:
            if config.field == field_name:
                return config
        raise KeyError(f"{cls.__name__} has no upload field {field_name!r}")

    @property
    def _pending(self) -> Dict[str, PendingUpload]:
        pending = self.__dict__.get("_pending_uploads")
        if pending is None:
            pending = {}
            self.__dict__["_pending_uploads"] = pending
        return pending

    def attach_upload(self,
                      field_name: str,
                      source_path: str,
                      filename: Optional[str] = None,
                      content_type: Optional[str] = None) -> PendingUpload:
        """Stage a temporary file for the given upload field."""
        self.get_upload_field(field_name)
        upload = PendingUpload(field=field_name, source_path=str(source_path),
                               filename=filename, content_type=content_type)
        self._pending[field_name] = upload
        return upload

    def pending_upload(self, field_name: str) -> Optional[PendingUpload]:
        return self._pending.get(field_name)

    def has_pending_uploads(self) -> bool:
        return bool(self._pending)

    def clear_uploads(self) -> None:
        self._pending.clear()
