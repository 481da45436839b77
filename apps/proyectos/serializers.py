"""Serializers de Proyectos"""

from rest_framework import serializers
from services.fechas import hoy

OBLIGATORIOS = 'Por favor complete todos los campos'


class ProyectoSerializer(serializers.Serializer):
    """
    Valida un proyecto de recaudación.

    El objetivo debe superar los $100 y la fecha límite debe ser
    posterior a hoy. La fecha se guarda como 'YYYY-MM-DD'.
    """

    nombre = serializers.CharField(max_length=150, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    descripcion = serializers.CharField(error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    categoria = serializers.CharField(max_length=80, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    objetivo = serializers.FloatField(error_messages={
        'required': OBLIGATORIOS,
        'null': OBLIGATORIOS,
        'invalid': 'Lo ingresado debe ser una cifra numérica',
    })
    fechaLimite = serializers.DateField(error_messages={
        'required': OBLIGATORIOS,
        'null': OBLIGATORIOS,
        'invalid': 'Fecha límite inválida, use YYYY-MM-DD',
    })

    def validate_objetivo(self, value):
        if value <= 100:
            raise serializers.ValidationError('La suma debe ser mayor a $100')
        return value

    def validate_fechaLimite(self, value):
        if value <= hoy():
            raise serializers.ValidationError('Fecha límite debe mayor a la fecha actual')
        return value.isoformat()


class ProyectoEdicionSerializer(ProyectoSerializer):
    """
    Valida la edición de un proyecto existente.

    Conserva los campos obligatorios y el formato numérico, pero no
    exige fecha futura ni monto mínimo: un proyecto vencido sigue
    siendo editable.
    """

    def validate_objetivo(self, value):
        return value

    def validate_fechaLimite(self, value):
        return value.isoformat()
