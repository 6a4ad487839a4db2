from abc import ABC, abstractmethod

from core.models import BookingConfirmation, BookingRecord


class BookingStore(ABC):
    @abstractmethod
    async def get_booking(self, booking_id: str) -> BookingRecord: ...

    @abstractmethod
    async def confirm_booking(self, confirmation: BookingConfirmation) -> None:
        """Atomically mark the booking paid and record income.

        Implementations must reject a second confirmation of the same booking.
        """
