# backend/staybook/domain/models/__init__.py

from staybook.db.base import Base

from .season_rule import BookingRule
from .reservation import Reservation, ReservationStatus
from .blocked_date import BlockedDate

__all__ = [
    "Base",
    "BookingRule",
    "Reservation",
    "ReservationStatus",
    "BlockedDate",
]
