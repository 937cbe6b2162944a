import datetime as dt
from typing import Optional

from stores import BookingStore


async def check_conflict(
    store: BookingStore,
    artist_id: int,
    when: dt.datetime,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    """Return True if another booking already holds this artist at exactly `when`.

    Pass `exclude_booking_id` when moving an existing booking so it does not
    collide with itself. Slots are hour-aligned, so exact instant equality is
    the whole test; no interval overlap is computed.
    """
    return await store.exists_at(artist_id, when, exclude_booking_id)
