import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship
from config.database import Base

class FileModel(Base):
    __tablename__ = "files"
    __table_args__ = (
        # Листинг всегда идет по владельцу и папке
        Index("ix_files_owner_parent", "owner_id", "parent_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # folder / file / image
    is_public = Column(Boolean, default=False, nullable=False)
    parent_id = Column(Uuid, ForeignKey("files.id"), nullable=True)  # NULL = корень
    local_path = Column(String, unique=True, nullable=True)  # ключ в хранилище байтов
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="files")
