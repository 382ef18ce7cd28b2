"""Database models"""
from catalog.models.album import Album, AlbumType
from catalog.models.artist import Artist
from catalog.models.track import Track

__all__ = [
    "Album",
    "AlbumType",
    "Artist",
    "Track",
]
