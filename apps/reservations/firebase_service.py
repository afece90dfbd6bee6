"""
Firebase Service for Reservations
Creates reservations inside the same Firestore transaction that moves the
bike from available to reserved.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from firebase_admin import firestore
from google.cloud import exceptions as gexc

from apps.bikes.choices import BikeStatus
from apps.common.exceptions import BikeUpdateFailed, ReservationWriteFailed
from .choices import ReservationStatus

logger = logging.getLogger(__name__)


def claim_bike_in_transaction(transaction, bike_ref, reservation_ref, reservation_data: Dict) -> bool:
    """
    Conditional transition of one bike from available to reserved.

    Reads the bike through the transaction, and only when it is still
    available queues the reservation insert and the status update. Firestore
    commits both writes or neither.

    Returns:
        True when the writes were queued, False when the bike is gone or no
        longer available (nothing is written).
    """
    try:
        snapshot = bike_ref.get(transaction=transaction)
    except gexc.GoogleCloudError as e:
        logger.error(f"Error reading bike {bike_ref.id} for update: {e}")
        raise BikeUpdateFailed(str(e)) from e

    if not snapshot.exists:
        return False

    bike = snapshot.to_dict() or {}
    if bike.get('status') != BikeStatus.AVAILABLE:
        return False

    transaction.create(reservation_ref, reservation_data)
    transaction.update(bike_ref, {
        'status': BikeStatus.RESERVED.value,
        'updated_at': firestore.SERVER_TIMESTAMP,
    })
    return True


_claim_bike = firestore.transactional(claim_bike_in_transaction)


class ReservationFirebaseService:
    """Service class for Firebase reservation operations"""

    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.collection = self.db.collection('reservations')
        self.bikes = self.db.collection('bikes')

    def claim_bike(self, bike_id: str, user_id: str, start_time: datetime, end_time: datetime) -> Optional[Dict]:
        """
        Reserve a bike for a user if it is still available

        Args:
            bike_id: Firebase bike document ID
            user_id: ID of the signed-in rider
            start_time: Reservation start (timezone-aware)
            end_time: Reservation end (timezone-aware)

        Returns:
            The created reservation, or None if another rider got the bike first

        Raises:
            BikeUpdateFailed: the bike could not be read for update
            ReservationWriteFailed: the transaction did not commit
        """
        bike_ref = self.bikes.document(bike_id)
        reservation_ref = self.collection.document()
        reservation = {
            'user_id': user_id,
            'bike_id': bike_id,
            'start_time': start_time,
            'end_time': end_time,
            'status': ReservationStatus.PENDING.value,
        }

        try:
            claimed = _claim_bike(
                self.db.transaction(),
                bike_ref,
                reservation_ref,
                {**reservation, 'created_at': firestore.SERVER_TIMESTAMP},
            )
        except gexc.GoogleCloudError as e:
            logger.error(f"Error committing reservation for bike {bike_id}: {e}")
            raise ReservationWriteFailed(str(e)) from e
        except ValueError as e:
            # raised by the Firestore client once contention retries are exhausted
            logger.error(f"Reservation transaction for bike {bike_id} gave up: {e}")
            raise ReservationWriteFailed(str(e)) from e

        if not claimed:
            logger.warning(f"Bike {bike_id} was no longer available")
            return None

        logger.info(f"Created reservation {reservation_ref.id} for bike {bike_id} (user {user_id})")
        return {'id': reservation_ref.id, **reservation}
