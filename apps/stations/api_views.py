"""
Stations API Views - station list with live availability counts
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from apps.common.exceptions import FetchFailed
from apps.common.responses import error_response
from .availability import StationAvailabilityService


@require_http_methods(["GET"])
def api_stations_list(request):
    """
    API endpoint to get all stations with their available bike counts
    Refetched by the map after every bike change notification
    """
    try:
        stations = StationAvailabilityService().list_stations_with_availability()
    except FetchFailed as e:
        return error_response(e)

    return JsonResponse({
        'success': True,
        'count': len(stations),
        'stations': stations
    })
