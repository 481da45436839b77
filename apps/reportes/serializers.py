"""Serializers de Reportes"""

from rest_framework import serializers
from .exportadores import FORMATOS
from .services import TIPOS_REPORTE


class GenerarReporteSerializer(serializers.Serializer):
    """Filtros de generación (FiltrosReporte)."""

    fechaInicio = serializers.DateField(error_messages={
        'required': 'Debe seleccionar la fecha de inicio',
        'invalid': 'Fecha de inicio inválida',
    })
    fechaFin = serializers.DateField(error_messages={
        'required': 'Debe seleccionar la fecha de fin',
        'invalid': 'Fecha de fin inválida',
    })
    tipoReporte = serializers.ChoiceField(
        choices=TIPOS_REPORTE,
        required=False,
        default='completo',
        error_messages={'invalid_choice': 'Tipo de reporte inválido'},
    )
    formato = serializers.ChoiceField(
        choices=FORMATOS,
        error_messages={
            'required': 'Debe seleccionar al menos un formato de exportación (PDF o Excel)',
            'invalid_choice': 'Debe seleccionar al menos un formato de exportación (PDF o Excel)',
        },
    )
    idDepartamento = serializers.CharField(required=False, allow_blank=True, default='')
    idEstado = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, data):
        if data['fechaInicio'] > data['fechaFin']:
            raise serializers.ValidationError('La fecha de inicio no puede ser posterior a la fecha de fin')
        return data
