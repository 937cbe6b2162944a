"""Tests for the booking conflict check.

Run with: pytest tests/test_conflicts.py -v
"""

import datetime as dt

import pytest

from conflicts import check_conflict
from helpers import make_booking, utc


@pytest.mark.asyncio
class TestCheckConflict:
    async def test_existing_pair_conflicts(self, fake_store):
        fake_store.add(5, utc(2025, 6, 2, 10))

        assert await check_conflict(fake_store, 5, utc(2025, 6, 2, 10)) is True

    async def test_self_is_excluded_on_update(self, fake_store):
        existing = fake_store.add(5, utc(2025, 6, 2, 10))

        assert await check_conflict(
            fake_store, 5, utc(2025, 6, 2, 10), exclude_booking_id=existing.id
        ) is False

    async def test_other_artist_or_time_is_free(self, fake_store):
        fake_store.add(5, utc(2025, 6, 2, 10))

        assert await check_conflict(fake_store, 6, utc(2025, 6, 2, 10)) is False
        assert await check_conflict(fake_store, 5, utc(2025, 6, 2, 11)) is False


@pytest.mark.asyncio
class TestCheckConflictAgainstDatabase:
    async def test_existing_pair_conflicts(self, session, booking_store, artists):
        artist_id = artists[0].id
        booking = make_booking(artist_id, utc(2025, 6, 2, 10))
        session.add(booking)
        await session.commit()

        assert await check_conflict(booking_store, artist_id, utc(2025, 6, 2, 10)) is True
        assert await check_conflict(
            booking_store, artist_id, utc(2025, 6, 2, 10), exclude_booking_id=booking.id
        ) is False

    async def test_same_instant_in_another_zone_conflicts(self, session, booking_store, artists):
        artist_id = artists[0].id
        session.add(make_booking(artist_id, utc(2025, 6, 2, 10)))
        await session.commit()

        rome = dt.timezone(dt.timedelta(hours=2))
        when = dt.datetime(2025, 6, 2, 12, tzinfo=rome)

        assert await check_conflict(booking_store, artist_id, when) is True

    async def test_near_miss_is_not_a_conflict(self, session, booking_store, artists):
        artist_id = artists[0].id
        session.add(make_booking(artist_id, utc(2025, 6, 2, 10)))
        await session.commit()

        assert await check_conflict(booking_store, artist_id, utc(2025, 6, 2, 10, 30)) is False
        assert await check_conflict(booking_store, artists[1].id, utc(2025, 6, 2, 10)) is False
