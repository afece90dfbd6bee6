import json

import pytest
import requests
from django.test import RequestFactory

from apps.routing.osrm_client import OSRMRoutingClient
from apps.routing.views import get_route

ROUTE_BODY = {
    'code': 'Ok',
    'routes': [{'distance': 1523.4, 'duration': 341.2, 'geometry': {'type': 'LineString', 'coordinates': []}}],
    'waypoints': [],
}
AMSTERDAM = {'start': {'lat': 52.37, 'lng': 4.90}, 'end': {'lat': 52.38, 'lng': 4.91}}


class FakeResponse:
    def __init__(self, payload=None, text=None, status_code=200):
        self.payload = payload
        self.text = text
        self.status_code = status_code

    def json(self):
        if self.payload is None:
            raise requests.exceptions.JSONDecodeError('Expecting value', self.text or '', 0)
        return self.payload


@pytest.fixture
def upstream(monkeypatch):
    """Replace requests.Session.get; tests set `response` or `error`"""
    state = {'calls': [], 'response': FakeResponse(ROUTE_BODY), 'error': None}

    def fake_get(session, url, params=None, timeout=None):
        state['calls'].append({'url': url, 'params': params, 'timeout': timeout})
        if state['error']:
            raise state['error']
        return state['response']

    monkeypatch.setattr(requests.Session, 'get', fake_get)
    return state


def post_route(payload):
    request = RequestFactory().post(
        '/functions/v1/get-route',
        data=json.dumps(payload) if not isinstance(payload, str) else payload,
        content_type='application/json',
    )
    return get_route(request)


def test_route_is_forwarded_with_coordinates_in_path(upstream):
    response = post_route(AMSTERDAM)

    assert response.status_code == 200
    assert json.loads(response.content) == ROUTE_BODY
    assert response['Access-Control-Allow-Origin'] == '*'

    call = upstream['calls'][0]
    assert call['url'] == 'https://router.project-osrm.org/route/v1/bike/4.9,52.37;4.91,52.38'
    assert call['params'] == {'overview': 'full', 'geometries': 'geojson'}


def test_network_failure_returns_error_object(upstream):
    upstream['error'] = requests.ConnectionError('connection refused')

    response = post_route(AMSTERDAM)

    assert response.status_code == 400
    assert 'connection refused' in json.loads(response.content)['error']
    assert response['Access-Control-Allow-Origin'] == '*'


def test_non_json_upstream_body_is_an_error(upstream):
    upstream['response'] = FakeResponse(text='<html>502 Bad Gateway</html>', status_code=502)

    response = post_route(AMSTERDAM)

    assert response.status_code == 400
    assert 'error' in json.loads(response.content)


def test_missing_end_point_is_rejected(upstream):
    response = post_route({'start': {'lat': 52.37, 'lng': 4.90}})

    assert response.status_code == 400
    assert 'end_lat' in json.loads(response.content)['error']
    assert upstream['calls'] == []


def test_malformed_json_is_rejected(upstream):
    response = post_route('{not json')

    assert response.status_code == 400
    assert json.loads(response.content)['error'].startswith('Invalid JSON body')


def test_preflight_is_answered_unconditionally():
    request = RequestFactory().options('/functions/v1/get-route')

    response = get_route(request)

    assert response.status_code == 200
    assert response.content == b'ok'
    assert response['Access-Control-Allow-Headers'] == 'authorization, x-client-info, apikey, content-type'


def test_client_builds_lng_lat_pairs():
    client = OSRMRoutingClient(base_url='http://osrm.local/route/v1/', profile='bike', timeout=3)

    url = client.build_route_url({'lat': 52.37, 'lng': 4.9}, {'lat': 52.38, 'lng': 4.91})

    assert url == 'http://osrm.local/route/v1/bike/4.9,52.37;4.91,52.38'


@pytest.mark.parametrize('point', [
    {'lat': True, 'lng': 4.9},
    {'lat': 52.37, 'lng': '4.9'},
    {'lat': [52.37], 'lng': 4.9},
])
def test_non_numeric_coordinates_are_rejected(upstream, point):
    response = post_route({'start': point, 'end': {'lat': 52.38, 'lng': 4.91}})

    assert response.status_code == 400
    assert 'start_' in json.loads(response.content)['error']
    assert upstream['calls'] == []


def test_integer_coordinates_are_accepted(upstream):
    response = post_route({'start': {'lat': 52, 'lng': 5}, 'end': {'lat': 52.38, 'lng': 4.91}})

    assert response.status_code == 200
    assert upstream['calls'][0]['url'].endswith('/bike/5.0,52.0;4.91,52.38')
