"""Album write service: create, update and delete with version checks"""
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Mapping, Optional
import html
import logging
import re

from catalog.database import transaction
from catalog.models import Album, Artist, Track
from catalog.services.album_read_service import AlbumReadService
from catalog.services.exceptions import (
    AlbumNotFoundError,
    EanExistsError,
    VersionInvalidError,
    VersionOutdatedError,
)

logger = logging.getLogger(__name__)

# Version token as sent in If-Match, e.g. "0" or "42" including the quotes
VERSION_PATTERN = re.compile(r'"(\d{1,3})"')

# Album fields an update may change; artist and tracks are fixed after create
UPDATABLE_FIELDS = (
    "ean",
    "rating",
    "album_type",
    "title",
    "price",
    "discount",
    "available",
    "release_date",
    "homepage",
    "genres",
)


class AlbumWriteService:
    """Service for creating, updating and deleting albums"""

    def __init__(self, db: Session, mail_service=None):
        """
        Initialize album write service

        Args:
            db: Database session
            mail_service: Notifier with a send(subject, body) method, optional
        """
        self.db = db
        self.read_service = AlbumReadService(db)
        self.mail_service = mail_service

    def create(self, album: Album) -> int:
        """
        Store a new album together with its artist and tracks

        Args:
            album: Transient Album with artist and tracks attached

        Returns:
            ID of the new album

        Raises:
            EanExistsError: if an album with the same EAN exists
        """
        logger.debug(f"create: album={album!r}")
        if self.db.query(Album.id).filter(Album.ean == album.ean).first() is not None:
            raise EanExistsError(album.ean)

        with transaction(self.db):
            self.db.add(album)

        album_id = album.id
        logger.info(f"Created album {album_id} (ean={album.ean})")
        self._send_mail(album)
        return album_id

    def update(self, album_id: Optional[int], album: Mapping[str, Any], version: str) -> int:
        """
        Update the scalar fields of an existing album

        Checks run in order: version syntax, existence, staleness. A version
        newer than the stored one is accepted.

        Args:
            album_id: Album ID
            album: Field name -> new value; keys outside UPDATABLE_FIELDS are ignored
            version: Version token, e.g. '"0"'

        Returns:
            The new version number

        Raises:
            VersionInvalidError: if version is not a quoted 1-3 digit number
            AlbumNotFoundError: if there is no album with this ID
            VersionOutdatedError: if version is older than the stored version
        """
        logger.debug(f"update: id={album_id}, album={dict(album)}, version={version}")

        match = VERSION_PATTERN.fullmatch(version) if isinstance(version, str) else None
        if match is None:
            raise VersionInvalidError(version)

        if album_id is None:
            raise AlbumNotFoundError(f"There is no album with ID {album_id}.")
        album_db = self.read_service.find_by_id(album_id)

        requested_version = int(match.group(1))
        if requested_version < album_db.version:
            logger.debug(f"update: stored version is {album_db.version}")
            raise VersionOutdatedError(requested_version)

        for field in UPDATABLE_FIELDS:
            if field in album:
                setattr(album_db, field, album[field])
        album_db.updated_at = datetime.utcnow()

        with transaction(self.db):
            self.db.add(album_db)

        new_version = album_db.version
        logger.info(f"Updated album {album_id} to version {new_version}")
        return new_version

    def delete(self, album_id: int) -> bool:
        """
        Delete an album with its artist and tracks in one transaction

        Args:
            album_id: Album ID

        Returns:
            True if the album row was deleted, False otherwise

        Raises:
            AlbumNotFoundError: if there is no album with this ID
        """
        logger.debug(f"delete: id={album_id}")
        album = self.read_service.find_by_id(album_id)
        artist_id = album.artist.id if album.artist is not None else None
        track_ids = [track.id for track in album.tracks]

        with transaction(self.db):
            if artist_id is not None:
                self.db.query(Artist).filter(Artist.id == artist_id).delete()
            for track_id in track_ids:
                self.db.query(Track).filter(Track.id == track_id).delete()
            affected = self.db.query(Album).filter(Album.id == album_id).delete()

        logger.info(f"Deleted album {album_id} ({len(track_ids)} tracks), affected={affected}")
        return affected > 0

    def _send_mail(self, album: Album):
        """Notify about a new album; failures are logged, never raised"""
        if self.mail_service is None:
            return
        artist = album.artist.name if album.artist is not None else "N/A"
        subject = f"New album {album.id}"
        body = f"The album by <strong>{html.escape(artist)}</strong> has been created"
        try:
            self.mail_service.send(subject, body)
        except Exception as e:
            logger.error(f"Failed to send mail for album {album.id}: {e}")
