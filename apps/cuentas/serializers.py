"""
Serializers de Cuentas (Crowdfunding)

Registro de donantes/creadores y edición del perfil propio.
"""

from django.conf import settings
from rest_framework import serializers

OBLIGATORIOS = 'Por favor complete todos los campos'
DOMINIO_INVALIDO = 'Los únicos dominios permitidos son @estudiantec y @itcr'


def _obligatorio():
    return {'required': OBLIGATORIOS, 'blank': OBLIGATORIOS, 'null': OBLIGATORIOS}


def validar_dominio(email: str) -> str:
    email = email.strip().lower()
    if not any(email.endswith(dominio) for dominio in settings.DOMINIOS_CROWDFUNDING):
        raise serializers.ValidationError(DOMINIO_INVALIDO)
    return email


class RegistroSerializer(serializers.Serializer):
    """
    Alta de una cuenta de crowdfunding.

    El email debe pertenecer a un dominio institucional y el dinero
    inicial se guarda como número. La contraseña solo viaja a
    Firebase Auth.
    """

    nombre = serializers.CharField(max_length=120, error_messages=_obligatorio())
    email = serializers.CharField(error_messages=_obligatorio())
    contrasenna = serializers.CharField(write_only=True, trim_whitespace=False, error_messages=_obligatorio())
    cedula = serializers.CharField(max_length=30, error_messages=_obligatorio())
    telefono = serializers.CharField(max_length=30, error_messages=_obligatorio())
    areaDeTrabajo = serializers.CharField(max_length=120, error_messages=_obligatorio())
    dinero = serializers.FloatField(error_messages={
        **_obligatorio(),
        'invalid': 'El dinero debe ser un número',
    })

    def validate_email(self, value):
        return validar_dominio(value)

    def validate_contrasenna(self, value):
        if len(value) < 6:
            raise serializers.ValidationError('La contraseña debe tener al menos 6 caracteres')
        return value

    def validate_dinero(self, value):
        if value < 0:
            raise serializers.ValidationError('El dinero no puede ser negativo')
        return value


class PerfilCrowdfundingSerializer(serializers.Serializer):
    """Campos editables del perfil; cédula, dinero y banderas no se tocan."""

    nombre = serializers.CharField(max_length=120, required=False, error_messages=_obligatorio())
    email = serializers.CharField(required=False, error_messages=_obligatorio())
    telefono = serializers.CharField(max_length=30, required=False, allow_blank=True)
    areaDeTrabajo = serializers.CharField(max_length=120, required=False, allow_blank=True)

    def validate_email(self, value):
        return validar_dominio(value)
