"""
Firebase Service for Stations
Read-only access to the Firestore 'stations' collection
"""

import logging
from typing import List, Dict

from firebase_admin import firestore
from google.cloud import exceptions as gexc

from apps.common.exceptions import FetchFailed

logger = logging.getLogger(__name__)


class StationFirebaseService:
    """Service class for Firebase station reads"""

    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.collection = self.db.collection('stations')

    def list_stations(self) -> List[Dict]:
        """
        List every station

        Returns:
            List of station dictionaries, each with its document ID under 'id'

        Raises:
            FetchFailed: the read was rejected or the connection dropped
        """
        try:
            stations = []
            for doc in self.collection.stream():
                data = doc.to_dict() or {}
                data['id'] = doc.id
                stations.append(data)
            return stations
        except gexc.GoogleCloudError as e:
            logger.error(f"Error listing stations: {e}")
            raise FetchFailed(str(e), title='Error fetching stations') from e
