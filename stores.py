"""Store interfaces (repository pattern) and their SQLModel implementations.

Services depend on the interfaces only, so the persistence layer can be
swapped in tests. Every datetime crossing this boundary is aware UTC.
"""

import datetime as dt
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import col, select

from errors import EmailTakenError, SlotUnavailableError
from models import Artist, Booking, User, Work, as_utc


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    async def list_datetimes_in_range(
        self, artist_id: int, start: dt.datetime, end: dt.datetime
    ) -> List[dt.datetime]:
        """Return booked instants for the artist with start <= datetime < end, ascending."""
        ...

    @abstractmethod
    async def exists_at(
        self, artist_id: int, when: dt.datetime, exclude_booking_id: Optional[int] = None
    ) -> bool:
        """Check if another booking holds exactly this (artist, instant) pair."""
        ...

    @abstractmethod
    async def list_bookings(self) -> List[Booking]:
        """Return all bookings ordered by datetime ascending, artists loaded."""
        ...

    @abstractmethod
    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Return a booking with its artist loaded, or None if not found."""
        ...

    @abstractmethod
    async def get_artist(self, artist_id: int) -> Optional[Artist]:
        ...

    @abstractmethod
    async def add_booking(self, booking: Booking) -> Booking:
        """Insert a booking. Raises SlotUnavailableError on a uniqueness violation."""
        ...

    @abstractmethod
    async def save_booking(self, booking: Booking) -> Booking:
        """Persist changes to a booking. Raises SlotUnavailableError on a uniqueness violation."""
        ...

    @abstractmethod
    async def delete_booking(self, booking: Booking) -> None:
        ...


class CatalogStore(ABC):
    """Interface for the read-mostly studio catalogue (artists, works, users)."""

    @abstractmethod
    async def list_artists(self) -> List[Artist]:
        ...

    @abstractmethod
    async def list_works(self, artist_id: Optional[int], take: int) -> List[Work]:
        ...

    @abstractmethod
    async def list_users(self) -> List[User]:
        ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def add_user(self, user: User) -> User:
        """Insert a user. Raises EmailTakenError if the email is already registered."""
        ...


class SQLBookingStore(BookingStore):
    """AsyncSession-backed booking store."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_datetimes_in_range(self, artist_id, start, end):
        statement = (
            select(Booking.datetime)
            .where(
                Booking.artist_id == artist_id,
                Booking.datetime >= as_utc(start),
                Booking.datetime < as_utc(end),
            )
            .order_by(Booking.datetime)
        )
        result = await self._session.execute(statement)
        return [as_utc(value) for value in result.scalars().all()]

    async def exists_at(self, artist_id, when, exclude_booking_id=None):
        statement = select(Booking.id).where(
            Booking.artist_id == artist_id,
            Booking.datetime == as_utc(when),
        )
        if exclude_booking_id is not None:
            statement = statement.where(Booking.id != exclude_booking_id)
        result = await self._session.execute(statement.limit(1))
        return result.first() is not None

    async def list_bookings(self):
        statement = (
            select(Booking)
            .options(selectinload(Booking.artist))
            .order_by(col(Booking.datetime), col(Booking.id))
        )
        result = await self._session.execute(statement)
        return [_normalized(b) for b in result.scalars().all()]

    async def get_booking(self, booking_id):
        statement = (
            select(Booking)
            .where(Booking.id == booking_id)
            .options(selectinload(Booking.artist))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(statement)
        booking = result.scalars().first()
        return _normalized(booking) if booking is not None else None

    async def get_artist(self, artist_id):
        return await self._session.get(Artist, artist_id)

    async def add_booking(self, booking):
        self._session.add(booking)
        await self._commit_or_conflict(booking)
        return await self.get_booking(booking.id)

    async def save_booking(self, booking):
        self._session.add(booking)
        await self._commit_or_conflict(booking)
        return await self.get_booking(booking.id)

    async def delete_booking(self, booking):
        await self._session.delete(booking)
        await self._session.commit()

    async def _commit_or_conflict(self, booking: Booking) -> None:
        # Rollback expires the instance, so read the slot first
        artist_id, when = booking.artist_id, booking.datetime
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            # The unique (artist_id, datetime) constraint is the authoritative guard;
            # other violations (e.g. a vanished artist) propagate unchanged
            if not is_slot_violation(e):
                raise
            raise SlotUnavailableError(artist_id, when)


class SQLCatalogStore(CatalogStore):
    """AsyncSession-backed catalogue store."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_artists(self):
        result = await self._session.execute(select(Artist).order_by(Artist.id))
        return list(result.scalars().all())

    async def list_works(self, artist_id, take):
        statement = select(Work)
        if artist_id:
            statement = statement.where(Work.artist_id == artist_id)
        result = await self._session.execute(statement.order_by(col(Work.id).desc()).limit(take))
        return list(result.scalars().all())

    async def list_users(self):
        result = await self._session.execute(select(User).order_by(col(User.id).desc()))
        return list(result.scalars().all())

    async def get_user_by_email(self, email):
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def add_user(self, user):
        self._session.add(user)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            raise EmailTakenError(user.email)
        await self._session.refresh(user)
        return user


def _normalized(booking: Booking) -> Booking:
    # Some backends (SQLite) hand back naive datetimes
    set_committed_value(booking, "datetime", as_utc(booking.datetime))
    set_committed_value(booking, "created_at", as_utc(booking.created_at))
    return booking


def is_slot_violation(error: IntegrityError) -> bool:
    """True if the error comes from the unique (artist_id, datetime) constraint."""
    message = str(error.orig)
    # Postgres names the constraint; SQLite lists the columns instead
    return "unique_artist_slot" in message or (
        "UNIQUE" in message and "bookings.artist_id" in message and "bookings.datetime" in message
    )
