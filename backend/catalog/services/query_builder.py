"""Translation of search criteria into album queries"""
from sqlalchemy import String, and_, type_coerce
from sqlalchemy.orm import Session, Query, contains_eager
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Mapping, Tuple
import logging

from catalog.database import is_case_sensitive_backend
from catalog.models import Album, AlbumType, Artist, Track

logger = logging.getLogger(__name__)

# Criterion matched as a substring of the artist name
INTERPRET_KEY = "interpret"

# Boolean shorthand criteria and the genre tag each one tests for
GENRE_FLAGS = {
    "pop": "POP",
    "alternative": "ALTERNATIVE",
}

LIKE_ESCAPE = "\\"

# Range of the INTEGER columns
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def _require(value: Any) -> Any:
    if value is None:
        raise ValueError("Missing criterion value")
    return value


def parse_text(value: Any) -> str:
    return str(_require(value))


def parse_bool(value: Any) -> bool:
    """Accept real booleans and their usual query-string spellings"""
    if isinstance(value, bool):
        return value
    text = str(_require(value)).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def parse_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(_require(value)))
    except InvalidOperation:
        raise ValueError(f"Not a decimal value: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a decimal value: {value!r}")
    return result


def parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(_require(value)))


def parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(_require(value)))


def fits_int_column(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def parse_int(value: Any) -> int:
    """Whole numbers within the column range; fractions are not truncated"""
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not an integer value: {value!r}")
    try:
        result = int(value)
        if isinstance(value, (float, Decimal)) and value != result:
            raise ValueError(f"Not an integer value: {value!r}")
    except (TypeError, OverflowError):
        raise ValueError(f"Not an integer value: {value!r}")
    if not fits_int_column(result):
        raise ValueError(f"Integer out of range: {value!r}")
    return result


def parse_genres(value: Any) -> list:
    """Genre list as stored, from a list or its comma-joined form"""
    if isinstance(value, (list, tuple)):
        return [parse_text(genre) for genre in value]
    text = parse_text(value)
    return text.split(",") if text else []


# Album columns usable for exact-match criteria, with the converter applied
# to each incoming value
CRITERIA_COLUMNS: Dict[str, Tuple[Any, Callable[[Any], Any]]] = {
    "id": (Album.id, parse_int),
    "version": (Album.version, parse_int),
    "ean": (Album.ean, parse_text),
    "rating": (Album.rating, parse_int),
    "album_type": (Album.album_type, AlbumType),
    "title": (Album.title, parse_text),
    "price": (Album.price, parse_decimal),
    "discount": (Album.discount, parse_decimal),
    "available": (Album.available, parse_bool),
    "release_date": (Album.release_date, parse_date),
    "homepage": (Album.homepage, parse_text),
    "genres": (Album.genres, parse_genres),
    "created_at": (Album.created_at, parse_datetime),
    "updated_at": (Album.updated_at, parse_datetime),
}

# Every criterion name a caller may use
RECOGNIZED_CRITERIA = frozenset(CRITERIA_COLUMNS) | frozenset(GENRE_FLAGS) | {INTERPRET_KEY}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value is matched literally"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class QueryBuilder:
    """Builds album queries joined to their artist (and tracks)"""

    def __init__(self, db: Session):
        """
        Initialize query builder

        Args:
            db: Database session
        """
        self.db = db

    def build_by_id(self, album_id: int) -> Query:
        """
        Query for a single album with its artist and track list

        The track join is an outer join so albums without tracks still match.

        Args:
            album_id: Album ID

        Returns:
            Query yielding at most one Album
        """
        return (
            self.db.query(Album)
            .join(Album.artist)
            .outerjoin(Album.tracks)
            .options(contains_eager(Album.artist), contains_eager(Album.tracks))
            .filter(Album.id == album_id)
            .order_by(Track.id)
        )

    def build(self, criteria: Mapping[str, Any]) -> Query:
        """
        Query for albums matching all given criteria

        Keys must come from RECOGNIZED_CRITERIA; checking that is up to the
        caller. Values are converted to the column's type and bound as
        parameters.

        Args:
            criteria: Criterion name -> value, e.g. {"interpret": "a", "rating": 5, "pop": "true"}

        Returns:
            Query yielding matching Albums ordered by ID

        Raises:
            ValueError: if a value cannot be converted to its column's type
        """
        logger.debug(f"build: criteria={dict(criteria)}")
        query = (
            self.db.query(Album)
            .join(Album.artist)
            .options(contains_eager(Album.artist))
        )

        clauses = []

        interpret = criteria.get(INTERPRET_KEY)
        if interpret is not None:
            pattern = f"%{escape_like(str(interpret))}%"
            if is_case_sensitive_backend(self.db):
                clauses.append(Artist.name.ilike(pattern, escape=LIKE_ESCAPE))
            else:
                clauses.append(Artist.name.like(pattern, escape=LIKE_ESCAPE))

        for flag, tag in GENRE_FLAGS.items():
            if flag in criteria and _flag_set(criteria[flag]):
                clauses.append(type_coerce(Album.genres, String).like(f"%{tag}%"))

        for key, value in criteria.items():
            if key not in CRITERIA_COLUMNS:
                continue
            column, convert = CRITERIA_COLUMNS[key]
            clauses.append(column == convert(value))

        if clauses:
            query = query.filter(and_(*clauses))

        query = query.order_by(Album.id)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"build: sql={query.statement}")
        return query


def _flag_set(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == "true")
