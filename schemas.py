import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from models import BookingStatus, Palette, as_utc

MAX_REFERENCES = 5


class ArtistSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar_url: Optional[str] = None


class ArtistRead(ArtistSummary):
    bio: Optional[str] = None
    instagram_url: Optional[str] = None


class WorkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artist_id: int
    title: Optional[str] = None
    media_url: str


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class BookingCreate(BaseModel):
    artist_id: int = Field(gt=0)
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=6, max_length=32)
    datetime: dt.datetime
    tattoo: str = Field(min_length=1)
    skin_tone: Optional[str] = Field(default=None, min_length=1)
    palette: Palette = Palette.COLOR
    body_image: Optional[str] = None
    references: List[str] = Field(default_factory=list, max_length=MAX_REFERENCES)
    status: BookingStatus = BookingStatus.NEW

    @field_validator("name", "phone", "tattoo", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("datetime")
    @classmethod
    def normalize_datetime(cls, value: dt.datetime) -> dt.datetime:
        return as_utc(value)


class BookingUpdate(BaseModel):
    """Partial update; only the fields present in the payload are applied."""

    artist_id: Optional[int] = Field(default=None, gt=0)
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=6, max_length=32)
    datetime: Optional[dt.datetime] = None
    tattoo: Optional[str] = Field(default=None, min_length=1)
    skin_tone: Optional[str] = Field(default=None, min_length=1)
    palette: Optional[Palette] = None
    body_image: Optional[str] = Field(default=None, min_length=1)
    references: Optional[List[str]] = Field(default=None, max_length=MAX_REFERENCES)
    status: Optional[BookingStatus] = None

    @field_validator(
        "artist_id", "name", "email", "phone", "datetime", "tattoo", "palette", "references", "status",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        # Only skin_tone and body_image may be cleared
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("datetime")
    @classmethod
    def normalize_datetime(cls, value: Optional[dt.datetime]) -> Optional[dt.datetime]:
        return as_utc(value) if value is not None else None


class BookingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artist_id: int
    name: str
    email: str
    phone: str
    datetime: dt.datetime
    tattoo: str
    skin_tone: Optional[str] = None
    palette: Palette
    body_image: Optional[str] = None
    references: List[str]
    status: BookingStatus
    created_at: dt.datetime
    artist: Optional[ArtistSummary] = None
