from django.db import models


class BikeStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    RESERVED = 'reserved', 'Reserved'
    IN_USE = 'in_use', 'In Use'
    MAINTENANCE = 'maintenance', 'Maintenance'
