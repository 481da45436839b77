"""Serializers de Mantenimientos"""

from rest_framework import serializers
from services.fechas import hoy


def _requerido(mensaje):
    return {'required': mensaje, 'blank': mensaje, 'null': mensaje, 'invalid': mensaje}


class ProgramarMantenimientoSerializer(serializers.Serializer):
    """Programación de un mantenimiento. La fecha debe ser hoy o futura."""

    id_recurso = serializers.CharField(error_messages=_requerido('Debe seleccionar un recurso'))
    id_tipo_mantenimiento = serializers.CharField(
        error_messages=_requerido('Debe seleccionar un tipo de mantenimiento')
    )
    fecha_programada = serializers.DateField(error_messages=_requerido('Debe seleccionar una fecha programada'))
    id_tecnico = serializers.CharField(error_messages=_requerido('Debe seleccionar un técnico responsable'))
    detalle = serializers.CharField(required=False, allow_blank=True, default='')
    repuestos_usados = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_fecha_programada(self, value):
        if value < hoy():
            raise serializers.ValidationError('La fecha programada debe ser hoy o una fecha futura')
        return value


class RegistrarMantenimientoSerializer(serializers.Serializer):
    """Registro de un mantenimiento realizado."""

    fecha_realizada = serializers.DateField(
        error_messages=_requerido('Debe seleccionar la fecha de realización')
    )
    detalle = serializers.CharField(
        error_messages=_requerido('Debe proporcionar detalles del mantenimiento realizado')
    )
    repuestos_usados = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_fecha_realizada(self, value):
        if value > hoy():
            raise serializers.ValidationError('La fecha de realización no puede ser una fecha futura')
        return value
