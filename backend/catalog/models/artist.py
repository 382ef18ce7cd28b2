"""Artist model"""
from sqlalchemy import Column, String, Integer, Date, ForeignKey

from catalog.database import Base


class Artist(Base):
    """Artist model, owned one-to-one by an album"""

    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    name = Column(String(40), nullable=False, index=True)
    birth_date = Column(Date, nullable=True)

    def __repr__(self):
        return f"<Artist(id={self.id}, album_id={self.album_id}, name='{self.name}')>"
