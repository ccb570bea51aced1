"""Key/value storage row holding serialized state blobs."""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from tailorshop.database import Base


class StorageEntry(Base):
    """One key of the application's key/value store."""

    __tablename__ = 'app_storage'

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StorageEntry(key='{self.key}', size={len(self.value or '')})>"
