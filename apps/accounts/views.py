"""
Accounts Views
Rider sign up / sign in / sign out over JSON, backed by Django sessions
"""

import json
import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from apps.common.responses import form_error_response
from .forms import LoginForm, SignUpForm

logger = logging.getLogger(__name__)


def _user_payload(user):
    if not user.is_authenticated:
        return None
    return {'id': str(user.pk), 'email': user.email}


def _json_body(request):
    try:
        payload = json.loads(request.body or b'{}')
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _invalid_body(title):
    return JsonResponse({
        'success': False,
        'title': title,
        'error': 'Request body must be a JSON object.'
    }, status=400)


@ensure_csrf_cookie
@require_http_methods(["GET"])
def session(request):
    """Current rider (or null); also hands out the CSRF cookie"""
    return JsonResponse({
        'success': True,
        'user': _user_payload(request.user)
    })


@require_http_methods(["POST"])
def signup(request):
    """Create a rider account and sign it in"""
    payload = _json_body(request)
    if payload is None:
        return _invalid_body('Error signing up')

    form = SignUpForm(payload)
    if not form.is_valid():
        return form_error_response(form, title='Error signing up')

    user = form.save()
    login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    logger.info(f"New rider account {user.pk} signed up")

    return JsonResponse({
        'success': True,
        'title': 'Signed up successfully',
        'message': 'Your account is ready.',
        'user': _user_payload(user)
    }, status=201)


@require_http_methods(["POST"])
def rider_login(request):
    """Email + password sign in"""
    payload = _json_body(request)
    if payload is None:
        return _invalid_body('Error signing in')

    form = LoginForm(payload)
    if not form.is_valid():
        return form_error_response(form, title='Error signing in')

    user = authenticate(
        request,
        username=form.cleaned_data['email'].lower(),
        password=form.cleaned_data['password'],
    )

    if user is None:
        return JsonResponse({
            'success': False,
            'title': 'Error signing in',
            'error': 'Invalid email or password.'
        }, status=400)

    login(request, user)

    return JsonResponse({
        'success': True,
        'title': 'Signed in successfully',
        'message': 'Welcome back!',
        'user': _user_payload(user)
    })


@require_http_methods(["POST"])
def rider_logout(request):
    """Sign out"""
    logout(request)
    return JsonResponse({
        'success': True,
        'title': 'Signed out',
        'user': None
    })
