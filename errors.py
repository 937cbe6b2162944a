"""Domain errors raised by the booking services.

Handlers map these to HTTP responses; the messages are safe to show to clients.
"""

import datetime as dt
from enum import Enum


class ErrorCode(Enum):
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    ARTIST_NOT_FOUND = "ARTIST_NOT_FOUND"
    SLOT_UNAVAILABLE = "SLOT_UNAVAILABLE"
    EMAIL_TAKEN = "EMAIL_TAKEN"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class BookingNotFoundError(DomainError):
    code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, booking_id: int) -> None:
        super().__init__("Booking not found")
        self.booking_id = booking_id


class ArtistNotFoundError(DomainError):
    code = ErrorCode.ARTIST_NOT_FOUND

    def __init__(self, artist_id: int) -> None:
        super().__init__("Artist not found")
        self.artist_id = artist_id


class SlotUnavailableError(DomainError):
    """Raised when the artist already has a booking at the requested time."""

    code = ErrorCode.SLOT_UNAVAILABLE

    def __init__(self, artist_id: int, when: dt.datetime) -> None:
        super().__init__("Slot not available for this artist")
        self.artist_id = artist_id
        self.when = when


class EmailTakenError(DomainError):
    code = ErrorCode.EMAIL_TAKEN

    def __init__(self, email: str) -> None:
        super().__init__("Email already exists")
        self.email = email
