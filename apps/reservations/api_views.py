"""
Reservations API Views
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from apps.common.exceptions import RentalError, Unauthenticated
from apps.common.responses import error_response
from .allocator import ReservationAllocator, RiderContext


@require_http_methods(["POST"])
def api_reserve_bike(request, station_id):
    """
    Reserve one available bike at a station for the signed-in rider
    """
    rider = RiderContext.from_user(request.user)
    if rider is None:
        return error_response(Unauthenticated())

    try:
        reservation = ReservationAllocator().reserve(rider, station_id)
    except RentalError as e:
        return error_response(e)

    return JsonResponse({
        'success': True,
        'title': 'Bike reserved successfully',
        'message': 'You can now pick up your bike at the station.',
        'reservation': reservation
    }, status=201)
