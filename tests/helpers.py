"""Test helpers shared across modules."""

import datetime as dt

from models import Artist, Booking
from stores import BookingStore


def utc(*args) -> dt.datetime:
    return dt.datetime(*args, tzinfo=dt.timezone.utc)


def make_booking(artist_id: int, when: dt.datetime, **fields) -> Booking:
    values = dict(
        name="Client",
        email="client@example.com",
        phone="3331234567",
        tattoo="Small rose",
    )
    values.update(fields)
    return Booking(artist_id=artist_id, datetime=when, **values)


class FakeBookingStore(BookingStore):
    """In-memory store; records the range queries it receives."""

    def __init__(self) -> None:
        self.bookings: list[Booking] = []
        self.range_calls: list[tuple] = []

    def add(self, artist_id: int, when: dt.datetime) -> Booking:
        booking = make_booking(artist_id, when, id=len(self.bookings) + 1)
        self.bookings.append(booking)
        return booking

    async def list_datetimes_in_range(self, artist_id, start, end):
        self.range_calls.append((artist_id, start, end))
        return sorted(
            b.datetime for b in self.bookings
            if b.artist_id == artist_id and start <= b.datetime < end
        )

    async def exists_at(self, artist_id, when, exclude_booking_id=None):
        return any(
            b.artist_id == artist_id and b.datetime == when and b.id != exclude_booking_id
            for b in self.bookings
        )

    async def list_bookings(self):
        return sorted(self.bookings, key=lambda b: b.datetime)

    async def get_booking(self, booking_id):
        return next((b for b in self.bookings if b.id == booking_id), None)

    async def get_artist(self, artist_id):
        return Artist(id=artist_id, name=f"artist-{artist_id}")

    async def add_booking(self, booking):
        booking.id = len(self.bookings) + 1
        self.bookings.append(booking)
        return booking

    async def save_booking(self, booking):
        return booking

    async def delete_booking(self, booking):
        self.bookings.remove(booking)
