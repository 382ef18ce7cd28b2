"""Albums API endpoints"""
from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, HttpUrl, field_validator
import logging

from catalog.database import get_db
from catalog.models import Album, AlbumType, Artist, Track
from catalog.services.album_read_service import AlbumReadService
from catalog.services.album_write_service import AlbumWriteService
from catalog.services.exceptions import (
    AlbumNotFoundError,
    EanExistsError,
    VersionInvalidError,
    VersionOutdatedError,
)
from catalog.services.mail_service import BackgroundMailService, MailService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/albums", tags=["albums"])

MAX_RATING = 5


def is_valid_ean(value: str) -> bool:
    """Check length and check digit of an EAN-8 or EAN-13"""
    if not value.isdigit() or len(value) not in (8, 13):
        return False
    digits = [int(c) for c in value]
    payload = digits[:-1]
    total = sum(d * (3 if i % 2 == 0 else 1) for i, d in enumerate(reversed(payload)))
    return (10 - total % 10) % 10 == digits[-1]


class ArtistRequest(BaseModel):
    name: str = Field(..., max_length=40, pattern=r"^\w.*")
    birth_date: Optional[date] = None


class TrackRequest(BaseModel):
    title: str = Field(..., max_length=32)
    duration: Optional[str] = Field(None, max_length=10)
    feature: Optional[str] = Field(None, max_length=32)


class AlbumUpdateRequest(BaseModel):
    """Album fields without artist and tracks"""
    ean: str
    rating: Optional[int] = Field(None, ge=0, le=MAX_RATING)
    album_type: Optional[AlbumType] = None
    title: str
    price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2)
    discount: Optional[Decimal] = Field(None, ge=0, le=1, max_digits=4, decimal_places=3)
    available: bool = False
    release_date: Optional[date] = None
    homepage: Optional[HttpUrl] = None
    genres: Optional[List[str]] = None

    @field_validator("ean")
    @classmethod
    def check_ean(cls, value: str) -> str:
        if not is_valid_ean(value):
            raise ValueError(f"'{value}' is not a valid EAN")
        return value

    @field_validator("genres")
    @classmethod
    def check_genres_unique(cls, value):
        if value is not None and len(set(value)) != len(value):
            raise ValueError("genres must be unique")
        return value

    def album_fields(self) -> dict:
        fields = self.model_dump(include=set(AlbumUpdateRequest.model_fields))
        if self.homepage is not None:
            fields["homepage"] = str(self.homepage)
        return fields


class AlbumCreateRequest(AlbumUpdateRequest):
    """Album with its artist and track list"""
    artist: ArtistRequest
    tracks: List[TrackRequest] = []


class ArtistResponse(BaseModel):
    name: str
    birth_date: date | None


class TrackResponse(BaseModel):
    id: int
    title: str
    duration: str | None
    feature: str | None

    class Config:
        from_attributes = True


class AlbumResponse(BaseModel):
    id: int
    version: int
    ean: str
    rating: int | None
    album_type: AlbumType | None
    title: str
    price: float
    discount: float | None
    discount_display: str
    available: bool | None
    release_date: date | None
    homepage: str | None
    genres: List[str]
    artist: ArtistResponse | None


class AlbumDetailResponse(AlbumResponse):
    tracks: List[TrackResponse]


class AlbumListResponse(BaseModel):
    albums: List[AlbumResponse]


def format_discount(discount: Optional[Decimal], short: bool = True) -> str:
    """Render a discount fraction as percentage, e.g. 0.1 -> '10.00 %'"""
    value = discount if discount is not None else Decimal(0)
    unit = "%" if short else "percent"
    return f"{value * 100:.2f} {unit}"


def _album_to_dict(album: Album, include_tracks: bool = False) -> dict:
    result = {
        "id": album.id,
        "version": album.version,
        "ean": album.ean,
        "rating": album.rating,
        "album_type": album.album_type,
        "title": album.title,
        "price": float(album.price),
        "discount": float(album.discount) if album.discount is not None else None,
        "discount_display": format_discount(album.discount),
        "available": album.available,
        "release_date": album.release_date,
        "homepage": album.homepage,
        "genres": album.genres or [],
        "artist": {
            "name": album.artist.name,
            "birth_date": album.artist.birth_date,
        } if album.artist is not None else None,
    }
    if include_tracks:
        result["tracks"] = album.tracks
    return result


def _album_from_request(request: AlbumCreateRequest) -> Album:
    album = Album(**request.album_fields())
    album.artist = Artist(name=request.artist.name, birth_date=request.artist.birth_date)
    album.tracks = [
        Track(title=track.title, duration=track.duration, feature=track.feature)
        for track in request.tracks
    ]
    return album


@router.get("/{album_id}", response_model=AlbumDetailResponse)
def get_album(
    album_id: int,
    response: Response,
    if_none_match: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """Get album details with artist and tracks"""
    service = AlbumReadService(db)
    try:
        album = service.find_by_id(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    etag = f'"{album.version}"'
    if if_none_match == etag:
        return Response(status_code=304)
    response.headers["ETag"] = etag
    return _album_to_dict(album, include_tracks=True)


@router.get("", response_model=AlbumListResponse)
def search_albums(request: Request, db: Session = Depends(get_db)):
    """Search albums; every query parameter is a search criterion"""
    service = AlbumReadService(db)
    criteria = dict(request.query_params)
    try:
        albums = service.find(criteria)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"albums": [_album_to_dict(album) for album in albums]}


@router.post("", status_code=201)
def create_album(
    body: AlbumCreateRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db)
):
    """Create an album with its artist and tracks"""
    mail_service = BackgroundMailService(background_tasks, MailService())
    service = AlbumWriteService(db, mail_service=mail_service)
    try:
        album_id = service.create(_album_from_request(body))
    except EanExistsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    location = f"{str(request.url).rstrip('/')}/{album_id}"
    logger.debug(f"create_album: location={location}")
    return Response(status_code=201, headers={"Location": location})


@router.put("/{album_id}", status_code=204)
def update_album(
    album_id: int,
    body: AlbumUpdateRequest,
    if_match: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """Update an album; requires the current version in If-Match"""
    if if_match is None:
        raise HTTPException(status_code=428, detail='Header "If-Match" is missing')

    service = AlbumWriteService(db)
    try:
        version = service.update(album_id, body.album_fields(), if_match)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (VersionInvalidError, VersionOutdatedError) as e:
        raise HTTPException(status_code=412, detail=str(e))

    return Response(status_code=204, headers={"ETag": f'"{version}"'})


@router.delete("/{album_id}", status_code=204)
def delete_album(album_id: int, db: Session = Depends(get_db)):
    """Delete an album with its artist and tracks"""
    service = AlbumWriteService(db)
    try:
        service.delete(album_id)
    except AlbumNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
