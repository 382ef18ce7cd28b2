"""Tests for AlbumReadService."""

import pytest

from catalog.models import Album
from catalog.services.album_read_service import AlbumReadService
from catalog.services.exceptions import AlbumNotFoundError


class TestFindById:
    """Test lookups by ID."""

    def test_returns_album_with_artist_and_tracks(self, seeded_db, album_id_by_ean):
        """The full album graph is loaded."""
        album_id = album_id_by_ean("0028948592241")

        album = AlbumReadService(seeded_db).find_by_id(album_id)

        assert album.id == album_id
        assert album.title == "Waterloo"
        assert album.artist.name == "ABBA"
        assert [track.title for track in album.tracks] == ["Waterloo", "Honey, Honey"]
        assert album.genres == ["POP"]

    def test_album_without_tracks(self, seeded_db, album_id_by_ean):
        """An album with an empty track list still resolves."""
        album = AlbumReadService(seeded_db).find_by_id(album_id_by_ean("9780201379624"))

        assert album.artist.name == "Dua Lipa"
        assert album.tracks == []

    def test_missing_genres_become_empty_list(self, seeded_db, album_id_by_ean):
        """NULL genres are returned as [] without dirtying the session."""
        album = AlbumReadService(seeded_db).find_by_id(album_id_by_ean("8712345678906"))

        assert album.genres == []
        assert album not in seeded_db.dirty

    def test_unknown_id(self, seeded_db):
        """An unknown ID raises AlbumNotFoundError naming the ID."""
        with pytest.raises(AlbumNotFoundError, match="9999"):
            AlbumReadService(seeded_db).find_by_id(9999)

    def test_id_out_of_range(self, seeded_db):
        """IDs too large for the column are simply not found."""
        with pytest.raises(AlbumNotFoundError):
            AlbumReadService(seeded_db).find_by_id(10 ** 20)


class TestFind:
    """Test searches by criteria."""

    def test_no_criteria_returns_all(self, seeded_db):
        """None and {} both return the whole catalog."""
        service = AlbumReadService(seeded_db)

        assert len(service.find()) == 5
        assert len(service.find({})) == 5

    def test_no_criteria_on_empty_catalog(self, db):
        """Without criteria an empty catalog is not an error."""
        assert AlbumReadService(db).find() == []

    def test_genres_never_none(self, seeded_db):
        """Every album in a result has a genres list."""
        for album in AlbumReadService(seeded_db).find():
            assert album.genres is not None

    def test_unknown_key(self, seeded_db):
        """Unknown criteria names are reported as not found."""
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find({"color": "blue"})

    def test_unknown_key_among_known(self, seeded_db):
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find({"rating": 5, "songs": "Airbag"})

    def test_bad_value(self, seeded_db):
        """A value that does not fit its column is invalid criteria."""
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find({"rating": "five"})

    def test_no_match(self, seeded_db):
        """A search with no hits raises AlbumNotFoundError."""
        with pytest.raises(AlbumNotFoundError, match="^No albums found"):
            AlbumReadService(seeded_db).find({"rating": 99})

    @pytest.mark.parametrize("substring", ["nd", "ND", "a", "Lipa", "head"])
    def test_interpret_matches_artist_name(self, seeded_db, substring):
        """Every hit contains the substring in its artist name, ignoring case."""
        albums = AlbumReadService(seeded_db).find({"interpret": substring})

        assert albums
        for album in albums:
            assert substring.lower() in album.artist.name.lower()

    def test_interpret_scenario(self, seeded_db):
        albums = AlbumReadService(seeded_db).find({"interpret": "nd"})
        assert [album.artist.name for album in albums] == ["Andrea Berg"]

    def test_equality_criteria(self, seeded_db):
        """Exact match on album columns."""
        albums = AlbumReadService(seeded_db).find({"rating": 5})
        assert [album.title for album in albums] == ["Waterloo", "OK Computer"]

    def test_ean_criterion(self, seeded_db):
        albums = AlbumReadService(seeded_db).find({"ean": "5012345678900"})
        assert len(albums) == 1
        assert isinstance(albums[0], Album)
        assert albums[0].artist.name == "Radiohead"

    @pytest.mark.parametrize("criteria", [
        {"rating": None},
        {"title": None},
        {"ean": None},
        {"genres": None},
    ])
    def test_null_value(self, seeded_db, criteria):
        """A null value is invalid criteria, not a match against 'None'."""
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find(criteria)

    def test_fractional_integer_value(self, seeded_db):
        """4.5 is not rounded down to rating 4."""
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find({"rating": 4.5})

    def test_whole_float_integer_value(self, seeded_db):
        albums = AlbumReadService(seeded_db).find({"rating": 5.0})
        assert [album.title for album in albums] == ["Waterloo", "OK Computer"]

    def test_integer_out_of_range(self, seeded_db):
        with pytest.raises(AlbumNotFoundError, match="Invalid search criteria"):
            AlbumReadService(seeded_db).find({"id": "99999999999999999999999"})

    def test_genres_criterion(self, seeded_db):
        """Genres match on their stored comma-joined form."""
        service = AlbumReadService(seeded_db)

        assert [album.title for album in service.find({"genres": "POP"})] == ["Waterloo"]
        assert [album.title for album in service.find({"genres": "POP,DANCE"})] == ["Future Nostalgia"]
        assert [album.title for album in service.find({"genres": ["ALTERNATIVE", "ROCK"]})] == ["OK Computer"]
