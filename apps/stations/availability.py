"""
Station availability

Joins stations with bikes and counts the bikes that can be reserved at each
station. Recomputed in full from fresh reads on every request and every
change notification.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List

from apps.bikes.choices import BikeStatus
from apps.bikes.firebase_service import BikeFirebaseService
from .firebase_service import StationFirebaseService

logger = logging.getLogger(__name__)


def project_availability(stations: Iterable[Dict], bikes: Iterable[Dict]) -> List[Dict]:
    """
    Attach an 'available_bikes' count to every station.

    Args:
        stations: station dictionaries with unique 'id' values
        bikes: bike dictionaries carrying 'station_id' and 'status'

    Returns:
        New station dictionaries in the input order. Inputs are not modified.
        Bikes pointing at a station that is not in `stations` are ignored.
    """
    counts = Counter(
        bike.get('station_id')
        for bike in bikes
        if bike.get('status') == BikeStatus.AVAILABLE
    )
    return [
        {**station, 'available_bikes': counts.get(station['id'], 0)}
        for station in stations
    ]


class StationAvailabilityService:
    """Fetches stations and bikes, then projects availability"""

    def __init__(self, station_service=None, bike_service=None):
        self.station_service = station_service or StationFirebaseService()
        self.bike_service = bike_service or BikeFirebaseService()

    def list_stations_with_availability(self) -> List[Dict]:
        """
        Raises:
            FetchFailed: either the stations or the bikes read failed
        """
        stations = self.station_service.list_stations()
        bikes = self.bike_service.list_bikes()

        projected = project_availability(stations, bikes)
        logger.debug(f"Projected availability for {len(projected)} stations from {len(bikes)} bikes")
        return projected
