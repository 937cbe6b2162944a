"""Booking service - the booking write paths and availability reads.

Depends only on the BookingStore interface. Raises domain errors; the HTTP
layer decides how to surface them.
"""

import logging
from typing import Dict, List

from availability import get_availability_by_day
from conflicts import check_conflict
from errors import ArtistNotFoundError, BookingNotFoundError, SlotUnavailableError
from models import Booking
from schemas import BookingCreate, BookingUpdate
from stores import BookingStore

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, store: BookingStore) -> None:
        self._store = store

    async def availability(self, artist_id: int, year: int, month: int) -> Dict[str, List[str]]:
        return await get_availability_by_day(self._store, artist_id, year, month)

    async def list_bookings(self) -> List[Booking]:
        return await self._store.list_bookings()

    async def create_booking(self, data: BookingCreate) -> Booking:
        """Create a booking request.

        Raises:
            ArtistNotFoundError: If the artist does not exist.
            SlotUnavailableError: If the artist is already booked at that time.
        """
        if await self._store.get_artist(data.artist_id) is None:
            raise ArtistNotFoundError(data.artist_id)

        if await check_conflict(self._store, data.artist_id, data.datetime):
            logger.warning(
                "Rejected booking for artist %s at %s: slot taken",
                data.artist_id, data.datetime.isoformat(),
            )
            raise SlotUnavailableError(data.artist_id, data.datetime)

        booking = Booking(**data.model_dump())
        created = await self._store.add_booking(booking)
        logger.info(
            "Created booking %s for artist %s at %s",
            created.id, created.artist_id, created.datetime.isoformat(),
        )
        return created

    async def update_booking(self, booking_id: int, data: BookingUpdate) -> Booking:
        """Apply a partial update, re-checking the slot when artist or time moves.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            ArtistNotFoundError: If the new artist does not exist.
            SlotUnavailableError: If the target slot belongs to another booking.
        """
        booking = await self._store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)

        changes = data.model_dump(exclude_unset=True)

        if "artist_id" in changes or "datetime" in changes:
            artist_id = changes.get("artist_id", booking.artist_id)
            when = changes.get("datetime", booking.datetime)
            if "artist_id" in changes and await self._store.get_artist(artist_id) is None:
                raise ArtistNotFoundError(artist_id)
            if await check_conflict(self._store, artist_id, when, exclude_booking_id=booking_id):
                logger.warning(
                    "Rejected move of booking %s to artist %s at %s: slot taken",
                    booking_id, artist_id, when.isoformat(),
                )
                raise SlotUnavailableError(artist_id, when)

        for field, value in changes.items():
            setattr(booking, field, value)

        updated = await self._store.save_booking(booking)
        logger.info("Updated booking %s: %s", booking_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    async def delete_booking(self, booking_id: int) -> None:
        booking = await self._store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        await self._store.delete_booking(booking)
        logger.info("Deleted booking %s", booking_id)
