"""Album model"""
from sqlalchemy import Column, String, Integer, Boolean, Numeric, Date, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from datetime import datetime
import enum

from catalog.database import Base
from catalog.models.types import GenreList


class AlbumType(str, enum.Enum):
    """Kind of recording"""
    STUDIO = "STUDIO"
    LIVE = "LIVE"


def next_version(current):
    """Version counter: 0 on insert, +1 on every update"""
    return 0 if current is None else current + 1


class Album(Base):
    """Album model representing a music album"""

    __tablename__ = "albums"

    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(Integer, nullable=False)
    ean = Column(String(13), nullable=False, unique=True, index=True)
    rating = Column(Integer, nullable=True)
    album_type = Column(SQLEnum(AlbumType, native_enum=False, length=10), nullable=True)
    title = Column(String, nullable=False)
    price = Column(Numeric(8, 2, asdecimal=True), nullable=False)
    discount = Column(Numeric(4, 3, asdecimal=True), nullable=True)
    available = Column(Boolean, default=False)
    release_date = Column(Date, nullable=True)
    homepage = Column(String, nullable=True)
    genres = Column(GenreList(), nullable=True)  # e.g. "POP,ROCK"
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, server_default=func.now())

    # Relationships; Artist and Track keep only album_id
    artist = relationship("Artist", uselist=False, cascade="all, delete-orphan")
    tracks = relationship("Track", cascade="all, delete-orphan", order_by="Track.id")

    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": next_version,
    }

    def __repr__(self):
        return f"<Album(id={self.id}, version={self.version}, ean='{self.ean}', title='{self.title}')>"
