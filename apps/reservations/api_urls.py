"""
Reservations API URL Configuration
"""

from django.urls import path
from . import api_views

app_name = 'reservations_api'

urlpatterns = [
    path('stations/<str:station_id>/reserve/', api_views.api_reserve_bike, name='reserve_bike'),
]
