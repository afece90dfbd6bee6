"""
Stations API URL Configuration
"""

from django.urls import path
from . import api_views

app_name = 'stations_api'

urlpatterns = [
    path('stations/', api_views.api_stations_list, name='stations_list'),
]
