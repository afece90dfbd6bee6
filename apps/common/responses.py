"""
JSON response helpers shared by the api views
"""

from django.http import JsonResponse

from .exceptions import RentalError


def error_response(error: RentalError) -> JsonResponse:
    """Render a RentalError as the standard failure envelope"""
    return JsonResponse(error.to_dict(), status=error.status_code)


def form_error_response(form, title: str = 'Invalid request') -> JsonResponse:
    """Render Django form validation errors as a 400 failure envelope"""
    messages = [
        message
        for field_errors in form.errors.values()
        for message in field_errors
    ]
    return JsonResponse({
        'success': False,
        'title': title,
        'error': ' '.join(messages),
        'fields': form.errors.get_json_data(),
    }, status=400)
