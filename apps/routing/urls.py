"""
Routing URL Configuration
"""

from django.urls import path
from . import views

app_name = 'routing'

urlpatterns = [
    path('get-route', views.get_route, name='get_route'),
]
