"""Serializers de Parámetros Globales"""

from rest_framework import serializers
from .services import TIPOS_ESTADO

OBLIGATORIOS = 'Por favor completa todos los campos obligatorios'


class ParametroValorSerializer(serializers.Serializer):
    """El valor se valida contra el tipo del parámetro en el servicio."""

    valor = serializers.JSONField(error_messages={'required': 'Debe indicar el valor del parámetro'})
    activo = serializers.BooleanField(required=False, default=None, allow_null=True)


class EstadoSistemaSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=60, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    descripcion = serializers.CharField(error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    color = serializers.RegexField(
        r'^#[0-9a-fA-F]{6}$',
        required=False,
        allow_blank=True,
        default='',
        error_messages={'invalid': 'Color inválido, use formato #RRGGBB'},
    )
    activo = serializers.BooleanField(required=False, default=True)
    tipo = serializers.ChoiceField(
        choices=TIPOS_ESTADO,
        required=False,
        default='equipos',
        error_messages={'invalid_choice': 'Tipo de estado inválido'},
    )
