"""Track model"""
from sqlalchemy import Column, String, Integer, ForeignKey

from catalog.database import Base


class Track(Base):
    """Track model representing one entry of an album's track list"""

    __tablename__ = "tracks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(32), nullable=False)
    duration = Column(String(10), nullable=True)  # e.g. "3:25"
    feature = Column(String(32), nullable=True)  # Featured artist

    def __repr__(self):
        return f"<Track(id={self.id}, album_id={self.album_id}, title='{self.title}', duration='{self.duration}')>"
