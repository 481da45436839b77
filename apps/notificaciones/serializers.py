"""Serializers de Notificaciones"""

from rest_framework import serializers
from .services import TIPOS


class FiltroNotificacionesSerializer(serializers.Serializer):
    """Filtros opcionales del listado de notificaciones."""

    tipo = serializers.ChoiceField(choices=TIPOS, required=False)
    leida = serializers.BooleanField(required=False, allow_null=True, default=None)
    fecha_inicio = serializers.DateField(required=False)
    fecha_fin = serializers.DateField(required=False)
