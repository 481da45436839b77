"""Serializers de Laboratorios"""

from rest_framework import serializers
from services import colecciones

OBLIGATORIOS = 'Por favor complete todos los campos obligatorios'


class LaboratorioSerializer(serializers.Serializer):
    """
    Valida los datos de un laboratorio.

    nombre, codigo y ubicacion son obligatorios y la capacidad
    debe ser mayor a 0.
    """

    nombre = serializers.CharField(max_length=120, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    codigo = serializers.CharField(max_length=20, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    ubicacion = serializers.CharField(max_length=200, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    capacidad = serializers.IntegerField(error_messages={
        'required': 'La capacidad debe ser mayor a 0',
        'invalid': 'La capacidad debe ser mayor a 0',
    })
    descripcion = serializers.CharField(required=False, allow_blank=True, default='')
    estado = serializers.ChoiceField(
        choices=colecciones.ESTADOS_LABORATORIO,
        required=False,
        default='Disponible',
        error_messages={'invalid_choice': 'Estado de laboratorio inválido'},
    )
    encargado = serializers.CharField(required=False, allow_blank=True, default='')
    id_departamento = serializers.CharField(required=False, allow_blank=True, default='')
    activo = serializers.BooleanField(required=False, default=True)

    def validate_codigo(self, value):
        return value.strip().upper()

    def validate_capacidad(self, value):
        if value <= 0:
            raise serializers.ValidationError('La capacidad debe ser mayor a 0')
        return value
