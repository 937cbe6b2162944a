import datetime as dt
from enum import Enum
from typing import List, Optional

from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, JSON, UniqueConstraint


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    """Normalize a datetime to an aware UTC instant. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


class BookingStatus(str, Enum):
    NEW = "New"
    CONFIRMED = "Confirmed"
    DONE = "Done"


class Palette(str, Enum):
    BLACK_AND_WHITE = "BLACK_AND_WHITE"
    COLOR = "COLOR"


class Artist(SQLModel, table=True):
    __tablename__ = "artists"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    instagram_url: Optional[str] = None

    works: List["Work"] = Relationship(back_populates="artist")
    bookings: List["Booking"] = Relationship(back_populates="artist")


class Work(SQLModel, table=True):
    __tablename__ = "works"

    id: Optional[int] = Field(default=None, primary_key=True)
    artist_id: int = Field(foreign_key="artists.id", index=True)
    title: Optional[str] = None
    media_url: str

    artist: Optional[Artist] = Relationship(back_populates="works")


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    __table_args__ = (
        # Database-level protection against double booking an artist
        UniqueConstraint("artist_id", "datetime", name="unique_artist_slot"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    artist_id: int = Field(foreign_key="artists.id", index=True)
    datetime: dt.datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    name: str
    email: str
    phone: str
    tattoo: str
    skin_tone: Optional[str] = None
    palette: Palette = Palette.COLOR
    body_image: Optional[str] = None
    references: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: BookingStatus = BookingStatus.NEW
    created_at: dt.datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))

    artist: Optional[Artist] = Relationship(back_populates="bookings")
