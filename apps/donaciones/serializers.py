"""Serializers de Donaciones"""

from rest_framework import serializers


class DonacionSerializer(serializers.Serializer):
    """Monto a donar y si el donante quiere comprobante por correo."""

    monto = serializers.FloatField(error_messages={
        'required': 'Ingrese el monto a donar',
        'null': 'Ingrese el monto a donar',
        'invalid': 'El monto debe ser un número',
    })
    comprobante = serializers.BooleanField(required=False, default=False)

    def validate_monto(self, value):
        if value <= 0:
            raise serializers.ValidationError('El monto debe ser mayor a 0')
        return value
