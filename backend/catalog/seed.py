"""Sample catalog for development databases"""
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import List
import logging

from catalog.database import transaction
from catalog.models import Album, AlbumType, Artist, Track

logger = logging.getLogger(__name__)


def sample_albums() -> List[Album]:
    """Build fresh (transient) sample albums with artists and tracks"""
    return [
        Album(
            ean="0028948592241",
            rating=5,
            album_type=AlbumType.STUDIO,
            title="Waterloo",
            price=Decimal("11.99"),
            discount=Decimal("0.100"),
            available=True,
            release_date=date(1974, 3, 4),
            homepage="https://abba.example.com/",
            genres=["POP"],
            artist=Artist(name="ABBA", birth_date=date(1972, 1, 1)),
            tracks=[
                Track(title="Waterloo", duration="2:46"),
                Track(title="Honey, Honey", duration="2:55"),
            ],
        ),
        Album(
            ean="4006381333931",
            rating=3,
            album_type=AlbumType.LIVE,
            title="Live in Berlin",
            price=Decimal("19.90"),
            discount=Decimal("0.050"),
            available=False,
            release_date=date(2011, 9, 30),
            homepage="https://andrea-berg.example.com/",
            genres=["SCHLAGER", "POP"],
            artist=Artist(name="Andrea Berg", birth_date=date(1966, 1, 28)),
            tracks=[
                Track(title="Du hast mich tausendmal belogen", duration="3:50"),
            ],
        ),
        Album(
            ean="9780201379624",
            rating=4,
            album_type=AlbumType.STUDIO,
            title="Future Nostalgia",
            price=Decimal("14.99"),
            discount=Decimal("0.000"),
            available=True,
            release_date=date(2020, 3, 27),
            homepage="https://dualipa.example.com/",
            genres=["POP", "DANCE"],
            artist=Artist(name="Dua Lipa", birth_date=date(1995, 8, 22)),
            tracks=[],
        ),
        Album(
            ean="5012345678900",
            rating=5,
            album_type=AlbumType.STUDIO,
            title="OK Computer",
            price=Decimal("9.99"),
            discount=Decimal("0.250"),
            available=True,
            release_date=date(1997, 5, 21),
            homepage="https://radiohead.example.com/",
            genres=["ALTERNATIVE", "ROCK"],
            artist=Artist(name="Radiohead"),
            tracks=[
                Track(title="Airbag", duration="4:44"),
                Track(title="Paranoid Android", duration="6:23"),
            ],
        ),
        Album(
            ean="8712345678906",
            rating=4,
            album_type=AlbumType.LIVE,
            title="Unplugged in New York",
            price=Decimal("12.49"),
            discount=None,
            available=True,
            release_date=date(1994, 11, 1),
            homepage=None,
            genres=None,
            artist=Artist(name="Nirvana"),
            tracks=[
                Track(title="About a Girl", duration="3:37", feature="Meat Puppets"),
            ],
        ),
    ]


def seed_catalog(db: Session) -> int:
    """
    Insert the sample albums into an empty catalog

    Args:
        db: Database session

    Returns:
        Number of albums inserted (0 if the catalog already has albums)
    """
    if db.query(Album.id).first() is not None:
        logger.info("Catalog already has albums, skipping seed")
        return 0

    albums = sample_albums()
    with transaction(db):
        db.add_all(albums)
    logger.info(f"Seeded catalog with {len(albums)} albums")
    return len(albums)
