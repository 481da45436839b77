"""Serializers del Calendario"""

from rest_framework import serializers

COMPLETE = 'Completa todos los campos'


def _requerido():
    return {'required': COMPLETE, 'blank': COMPLETE, 'null': COMPLETE, 'invalid': COMPLETE}


class BloqueoSerializer(serializers.Serializer):
    """Bloqueo de un laboratorio o recurso durante un rango de fechas."""

    tipo = serializers.ChoiceField(
        choices=['laboratorio', 'recurso'],
        error_messages={**_requerido(), 'invalid_choice': 'Tipo de bloqueo inválido'},
    )
    id_item = serializers.CharField(error_messages=_requerido())
    fecha_inicio = serializers.DateField(error_messages=_requerido())
    fecha_fin = serializers.DateField(error_messages=_requerido())
    motivo = serializers.CharField(error_messages=_requerido())

    def validate(self, data):
        if data['fecha_fin'] < data['fecha_inicio']:
            raise serializers.ValidationError('La fecha de fin debe ser posterior a la fecha de inicio')
        return data
