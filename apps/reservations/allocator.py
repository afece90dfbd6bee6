"""
Reservation Allocator

Allocates one available bike at a station to a signed-in rider. The bike
status change and the reservation insert happen in a single conditional
Firestore transaction, so two riders racing for the last bike at a station
get one reservation and one NoBikesAvailable, never two reservations for
the same bike.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from django.conf import settings

from apps.bikes.firebase_service import BikeFirebaseService
from apps.common.exceptions import FetchFailed, NoBikesAvailable, Unauthenticated
from .firebase_service import ReservationFirebaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiderContext:
    """Identity of the signed-in rider, passed explicitly into the allocator"""
    user_id: str
    email: str = ''

    @classmethod
    def from_user(cls, user) -> Optional['RiderContext']:
        if user is None or not user.is_authenticated:
            return None
        return cls(user_id=str(user.pk), email=user.email or '')


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReservationAllocator:
    """Picks a bike, creates the reservation and marks the bike reserved"""

    def __init__(self, bike_service=None, reservation_service=None,
                 clock: Callable[[], datetime] = _utcnow, duration: timedelta = None):
        self.bike_service = bike_service or BikeFirebaseService()
        self.reservation_service = reservation_service or ReservationFirebaseService()
        self.clock = clock
        self.duration = duration or settings.RESERVATION_DURATION

    def reserve(self, rider: Optional[RiderContext], station_id: str) -> Dict:
        """
        Reserve one available bike at a station

        Candidates are tried in ascending bike ID order. A candidate that a
        concurrent request claimed first is skipped.

        Args:
            rider: The signed-in rider, or None
            station_id: Firebase station document ID

        Returns:
            The reservation dictionary (id, user_id, bike_id, start_time, end_time, status)

        Raises:
            Unauthenticated: no rider
            NoBikesAvailable: nothing left to claim, or the bike lookup failed
            ReservationWriteFailed: the claim transaction did not commit
            BikeUpdateFailed: the bike could not be read for update
        """
        if rider is None or not rider.user_id:
            raise Unauthenticated()

        try:
            candidates = self.bike_service.list_available_bikes(station_id)
        except FetchFailed as e:
            logger.error(f"Bike lookup for station {station_id} failed: {e}")
            raise NoBikesAvailable() from e

        if not candidates:
            logger.info(f"No available bikes at station {station_id}")
            raise NoBikesAvailable()

        start_time = self.clock()
        end_time = start_time + self.duration

        for bike in sorted(candidates, key=lambda b: b['id']):
            reservation = self.reservation_service.claim_bike(
                bike['id'], rider.user_id, start_time, end_time
            )
            if reservation is not None:
                logger.info(
                    f"Rider {rider.user_id} reserved bike {bike['id']} at station {station_id} "
                    f"until {end_time.isoformat()}"
                )
                return reservation

        logger.warning(f"All {len(candidates)} candidate bikes at station {station_id} were claimed concurrently")
        raise NoBikesAvailable()
