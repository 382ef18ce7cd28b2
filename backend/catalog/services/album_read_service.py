"""Album read service: lookups by ID and by search criteria"""
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value
from typing import Any, List, Mapping, Optional
import logging

from catalog.models import Album
from catalog.services.exceptions import AlbumNotFoundError
from catalog.services.query_builder import QueryBuilder, RECOGNIZED_CRITERIA, fits_int_column

logger = logging.getLogger(__name__)


class AlbumReadService:
    """Service for reading albums"""

    def __init__(self, db: Session):
        """
        Initialize album read service

        Args:
            db: Database session
        """
        self.db = db
        self.query_builder = QueryBuilder(db)

    def find_by_id(self, album_id: int) -> Album:
        """
        Get album by ID, with its artist and tracks

        Args:
            album_id: Album ID

        Returns:
            Album instance

        Raises:
            AlbumNotFoundError: if there is no album with this ID
        """
        logger.debug(f"find_by_id: id={album_id}")
        if not fits_int_column(album_id):
            raise AlbumNotFoundError(f"There is no album with ID {album_id}.")
        album = self.query_builder.build_by_id(album_id).one_or_none()
        if album is None:
            raise AlbumNotFoundError(f"There is no album with ID {album_id}.")

        _normalize_genres(album)
        logger.debug(f"find_by_id: album={album!r}, artist={album.artist!r}")
        return album

    def find(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Album]:
        """
        Search albums

        Without criteria every album is returned (possibly an empty list).

        Args:
            criteria: Criterion name -> value

        Returns:
            List of Album instances ordered by ID

        Raises:
            AlbumNotFoundError: on unknown criteria names or values, or when
                nothing matches non-empty criteria
        """
        logger.debug(f"find: criteria={criteria}")

        if not criteria:
            albums = self.query_builder.build({}).all()
            for album in albums:
                _normalize_genres(album)
            return albums

        invalid = [key for key in criteria if key not in RECOGNIZED_CRITERIA]
        if invalid:
            logger.debug(f"find: invalid criteria {invalid}")
            raise AlbumNotFoundError("Invalid search criteria")

        try:
            query = self.query_builder.build(criteria)
        except (TypeError, ValueError) as e:
            logger.debug(f"find: invalid criteria value: {e}")
            raise AlbumNotFoundError("Invalid search criteria") from e

        albums = query.all()
        if not albums:
            logger.debug("find: no albums found")
            raise AlbumNotFoundError(f"No albums found for these criteria: {dict(criteria)}")

        for album in albums:
            _normalize_genres(album)
        logger.debug(f"find: {len(albums)} albums")
        return albums


def _normalize_genres(album: Album) -> None:
    """Replace missing genres with [] without marking the album dirty"""
    if album.genres is None:
        set_committed_value(album, "genres", [])
