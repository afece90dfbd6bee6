"""
Main URL Configuration
"""

from django.urls import path, include

urlpatterns = [
    # JSON API
    path('api/', include('apps.stations.api_urls')),
    path('api/', include('apps.reservations.api_urls')),
    path('api/auth/', include('apps.accounts.urls')),

    # Routing proxy
    path('functions/v1/', include('apps.routing.urls')),
]
