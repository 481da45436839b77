"""Serializers de Bitácora"""

from rest_framework import serializers
from apps.reportes.exportadores import FORMATOS


class ExportarBitacoraSerializer(serializers.Serializer):
    """Parámetros de exportación por rango de fechas."""

    fecha_inicio = serializers.DateField(error_messages={
        'required': 'Debe seleccionar la fecha de inicio',
        'invalid': 'Fecha de inicio inválida',
    })
    fecha_fin = serializers.DateField(error_messages={
        'required': 'Debe seleccionar la fecha de fin',
        'invalid': 'Fecha de fin inválida',
    })
    formato = serializers.ChoiceField(
        choices=FORMATOS,
        error_messages={
            'required': 'Debe seleccionar al menos un formato de exportación (PDF o Excel)',
            'invalid_choice': 'Debe seleccionar al menos un formato de exportación (PDF o Excel)',
        },
    )

    def validate(self, data):
        if data['fecha_inicio'] > data['fecha_fin']:
            raise serializers.ValidationError('La fecha de inicio no puede ser posterior a la fecha de fin')
        return data
