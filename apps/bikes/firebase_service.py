"""
Firebase Service for Bikes
Handles all Firebase Firestore operations for bikes
"""

from firebase_admin import firestore
from google.cloud import exceptions as gexc
from typing import Callable, List, Dict, Optional
import logging

from apps.common.exceptions import FetchFailed
from .choices import BikeStatus

logger = logging.getLogger(__name__)


class BikeFirebaseService:
    """Service class for Firebase bike operations"""

    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.collection = self.db.collection('bikes')

    def list_bikes(self, station_id: Optional[str] = None, status: Optional[str] = None) -> List[Dict]:
        """
        List bikes from Firebase with optional filters

        Args:
            station_id: Only bikes docked at this station
            status: Filter by status (available, reserved, ...)

        Returns:
            List of bike dictionaries, each with its document ID under 'id'

        Raises:
            FetchFailed: the query was rejected or the connection dropped
        """
        try:
            query = self.collection

            if station_id:
                query = query.where('station_id', '==', station_id)

            if status:
                query = query.where('status', '==', status)

            bikes = []
            for doc in query.stream():
                data = doc.to_dict() or {}
                data['id'] = doc.id
                bikes.append(data)

            return bikes
        except gexc.GoogleCloudError as e:
            logger.error(f"Error listing bikes: {e}")
            raise FetchFailed(str(e), title='Error fetching bikes') from e

    def list_available_bikes(self, station_id: str) -> List[Dict]:
        """Bikes at a station that can be reserved right now"""
        return self.list_bikes(station_id=station_id, status=BikeStatus.AVAILABLE.value)

    def watch(self, callback: Callable):
        """
        Subscribe to every change on the bikes collection

        Args:
            callback: Firestore snapshot callback (col_snapshot, changes, read_time)

        Returns:
            The Firestore Watch handle; call unsubscribe() to stop
        """
        return self.collection.on_snapshot(callback)
