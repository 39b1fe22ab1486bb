"""Playlist and PlaylistFolder (membership) models."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, JSON, UniqueConstraint
from sqlalchemy.sql import func
from ..database import Base


class Playlist(Base):
    """A music playlist living on an external service, with local metadata."""

    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    cover_url = Column(Text, nullable=True)

    # External reference; one catalog entry per Spotify playlist.
    spotify_url = Column(String(500), nullable=False, unique=True)

    tags = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Playlist {self.id}:{self.name}>"


class PlaylistFolder(Base):
    """Join row linking one playlist to one folder.

    A playlist with no rows here is "unfiled" and only shows up in the
    unfiltered playlist listing.
    """

    __tablename__ = "playlist_folders"
    __table_args__ = (
        UniqueConstraint("playlist_id", "folder_id", name="uq_playlist_folders_pair"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    playlist_id = Column(
        Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    folder_id = Column(
        Integer, ForeignKey("folders.id", ondelete="CASCADE"), nullable=False, index=True
    )
