"""
Rental Exceptions
Every failure that ends a user action, with the notification shown for it
"""

from typing import Optional


class RentalError(Exception):
    """Base class for errors surfaced to the rider as a notification"""

    title = 'Something went wrong'
    status_code = 500

    def __init__(self, message: str = '', title: Optional[str] = None):
        self.message = message or self.default_message()
        if title:
            self.title = title
        super().__init__(self.message)

    def default_message(self) -> str:
        return 'Please try again later.'

    def to_dict(self) -> dict:
        return {
            'success': False,
            'title': self.title,
            'error': self.message,
        }


class Unauthenticated(RentalError):
    title = 'Authentication required'
    status_code = 401

    def default_message(self):
        return 'Please sign in to reserve a bike.'


class NoBikesAvailable(RentalError):
    title = 'No bikes available'
    status_code = 409

    def default_message(self):
        return 'Sorry, there are no bikes available at this station.'


class ReservationWriteFailed(RentalError):
    title = 'Error making reservation'
    status_code = 502


class BikeUpdateFailed(RentalError):
    title = 'Error updating bike status'
    status_code = 502


class FetchFailed(RentalError):
    title = 'Error fetching stations'
    status_code = 502


class RoutingUpstreamFailed(RentalError):
    title = 'Routing failed'
    status_code = 400
