"""
Base model classes for entities that carry file uploads
"""

from sqlalchemy import Column, Integer, DateTime, func

from uploader.core.database import Base
from uploader.models.uploadable import UploadableMixin


class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class UploadableModel(UploadableMixin, BaseModel):
    """Mapped entity whose upload fields are stored by save_with_uploads()"""
    __abstract__ = True
