"""
Routing Views - public proxy to the OSRM bike routing service
"""

import json

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.common.exceptions import RoutingUpstreamFailed
from .forms import RouteRequestForm
from .osrm_client import OSRMRoutingClient

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def _with_cors(response):
    for header, value in CORS_HEADERS.items():
        response[header] = value
    return response


def _route_error(message):
    return _with_cors(JsonResponse({'error': message}, status=400))


@csrf_exempt
@require_http_methods(["OPTIONS", "POST"])
def get_route(request):
    """
    Forward {start, end} to OSRM and return the upstream body verbatim
    """
    if request.method == 'OPTIONS':
        return _with_cors(HttpResponse('ok'))

    try:
        payload = json.loads(request.body or b'null')
    except ValueError as e:
        return _route_error(f'Invalid JSON body: {e}')

    form = RouteRequestForm.from_payload(payload)
    if not form.is_valid():
        fields = ', '.join(sorted(form.errors))
        return _route_error(f'Invalid or missing coordinates: {fields}')

    start, end = form.points()

    try:
        data = OSRMRoutingClient().get_route(start, end)
    except RoutingUpstreamFailed as e:
        return _route_error(e.message)

    return _with_cors(JsonResponse(data, safe=False))
