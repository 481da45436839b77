"""Serializers de Departamentos"""

from rest_framework import serializers

OBLIGATORIOS = 'Por favor complete todos los campos obligatorios'


class DepartamentoSerializer(serializers.Serializer):
    """
    Valida los datos de un departamento.

    nombre y codigo son obligatorios; el código se guarda en mayúsculas.
    """

    nombre = serializers.CharField(max_length=120, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    codigo = serializers.CharField(max_length=20, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    descripcion = serializers.CharField(required=False, allow_blank=True, default='')
    jefe = serializers.CharField(required=False, allow_blank=True, default='')
    telefono = serializers.CharField(required=False, allow_blank=True, default='')
    email = serializers.CharField(required=False, allow_blank=True, default='')
    activo = serializers.BooleanField(required=False, default=True)

    def validate_codigo(self, value):
        return value.strip().upper()

    def validate_email(self, value):
        if value and '@' not in value:
            raise serializers.ValidationError('Email inválido')
        return value.strip()
