"""
Bike Change Listener

Subscribes to the Firestore 'bikes' collection and, on every snapshot,
refetches stations and bikes and recomputes availability. Firestore delivers
the current collection as the first snapshot, which doubles as the initial
load.
"""

import logging
from typing import Callable, List, Dict, Optional

from apps.common.exceptions import FetchFailed
from apps.stations.availability import StationAvailabilityService
from .firebase_service import BikeFirebaseService

logger = logging.getLogger(__name__)


class BikeChangeListener:
    """
    Refresh station availability whenever any bike document changes
    """

    def __init__(self, availability_service=None, bike_service=None):
        self.bike_service = bike_service or BikeFirebaseService()
        self.availability_service = availability_service or StationAvailabilityService(
            bike_service=self.bike_service
        )

    def refresh(self) -> List[Dict]:
        return self.availability_service.list_stations_with_availability()

    def listen(self, callback: Callable[[List[Dict]], None],
               on_error: Optional[Callable[[FetchFailed], None]] = None):
        """
        Start listening for bike changes.

        Args:
            callback: Called with the refreshed station list after each change
            on_error: Called with the FetchFailed when a refresh read fails

        Returns:
            The Firestore Watch handle; call unsubscribe() to stop
        """
        logger.info("Starting bike change listener...")

        def on_snapshot(col_snapshot, changes, read_time):
            """Handle Firestore snapshot changes"""
            logger.info(f"Received {len(changes)} bike change(s) at {read_time}")

            try:
                stations = self.refresh()
            except FetchFailed as e:
                logger.error(f"Availability refresh failed: {e}")
                if on_error:
                    on_error(e)
                return
            except Exception as e:
                logger.error(f"Unexpected error refreshing availability: {e}")
                return

            # runs on the Firestore watch thread; an escaping exception ends the subscription
            try:
                callback(stations)
            except Exception as e:
                logger.error(f"Error in availability callback: {e}")

        watch = self.bike_service.watch(on_snapshot)

        logger.info("✓ Bike change listener is active")

        return watch
