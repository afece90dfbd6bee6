"""
OSRM routing client
Forwards a start/end coordinate pair to the public OSRM route service
"""

import logging
from typing import Dict, Optional

import requests
from django.conf import settings

from apps.common.exceptions import RoutingUpstreamFailed

logger = logging.getLogger(__name__)


class OSRMRoutingClient:
    """Thin wrapper around the OSRM /route/v1 endpoint"""

    def __init__(self, base_url: Optional[str] = None, profile: Optional[str] = None,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.OSRM_API_URL).rstrip('/')
        self.profile = profile or settings.ROUTING_PROFILE
        self.timeout = timeout if timeout is not None else settings.ROUTING_TIMEOUT
        self.session = session or requests.Session()

    def build_route_url(self, start: Dict, end: Dict) -> str:
        """OSRM expects lng,lat pairs separated by ';'"""
        return (
            f"{self.base_url}/{self.profile}/"
            f"{start['lng']},{start['lat']};{end['lng']},{end['lat']}"
        )

    def get_route(self, start: Dict, end: Dict):
        """
        Fetch a route between two points

        Args:
            start: {'lat': ..., 'lng': ...}
            end: {'lat': ..., 'lng': ...}

        Returns:
            The decoded upstream JSON body, untouched

        Raises:
            RoutingUpstreamFailed: network error or a body that is not JSON
        """
        url = self.build_route_url(start, end)

        try:
            response = self.session.get(
                url,
                params={'overview': 'full', 'geometries': 'geojson'},
                timeout=self.timeout,
            )
            return response.json()
        except requests.RequestException as e:
            # includes the JSONDecodeError raised by response.json()
            logger.error(f"Routing request to {url} failed: {e}")
            raise RoutingUpstreamFailed(str(e)) from e
