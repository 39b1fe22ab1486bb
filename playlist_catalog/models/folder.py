"""Folder model: one node of the playlist-organizing tree."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from ..database import Base


class Folder(Base):
    """Folders form a tree through parent_id; NULL marks a root folder."""

    __tablename__ = "folders"
    __table_args__ = (
        Index("ix_folders_parent_id", "parent_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=False)

    # Hierarchy. Acyclicity is checked by FolderService before every write.
    parent_id = Column(Integer, ForeignKey("folders.id"), nullable=True)

    # Denormalized breadcrumb string, e.g. "Electronic/Deep House"
    path = Column(Text, nullable=False)

    # Ordered labels used for faceted search, e.g. ["Deep House", "Chill"]
    tags = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Folder {self.id}:{self.path}>"
