"""
Serializers de Usuarios

Validan los formularios de alta, edición y perfil de usuarios de AP-LABS.
"""

import re

from django.conf import settings
from rest_framework import serializers
from services import colecciones

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

OBLIGATORIOS = 'Por favor complete todos los campos obligatorios'


def _obligatorio():
    return {'required': OBLIGATORIOS, 'blank': OBLIGATORIOS, 'null': OBLIGATORIOS}


class DatosPersonalesSerializer(serializers.Serializer):
    """Campos comunes a alta, edición y perfil."""

    primer_nombre = serializers.CharField(max_length=60, error_messages=_obligatorio())
    segundo_nombre = serializers.CharField(max_length=60, required=False, allow_blank=True, default='')
    primer_apellido = serializers.CharField(max_length=60, error_messages=_obligatorio())
    segundo_apellido = serializers.CharField(max_length=60, required=False, allow_blank=True, default='')
    identificador = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    telefono = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    id_departamento = serializers.CharField(required=False, allow_blank=True, default='')


class NuevoUsuarioSerializer(DatosPersonalesSerializer):
    """
    Alta de usuario.

    Reglas:
    - email, password, nombre, apellido y rol obligatorios
    - contraseña de 6 o más caracteres, igual a la confirmación
    - email con formato válido y de un dominio institucional
    """

    email = serializers.CharField(error_messages=_obligatorio())
    password = serializers.CharField(write_only=True, trim_whitespace=False, error_messages=_obligatorio())
    confirmPassword = serializers.CharField(write_only=True, trim_whitespace=False, required=False, allow_blank=True)
    id_rol = serializers.ChoiceField(
        choices=list(colecciones.NOMBRES_ROL.keys()),
        error_messages={**_obligatorio(), 'invalid_choice': 'Rol inválido'},
    )
    activo = serializers.BooleanField(required=False, default=True)

    def validate(self, data):
        if len(data['password']) < 6:
            raise serializers.ValidationError('La contraseña debe tener al menos 6 caracteres')

        if data.get('confirmPassword') is not None and data.get('confirmPassword') != data['password']:
            raise serializers.ValidationError('Las contraseñas no coinciden')

        email = data['email'].strip().lower()
        if not EMAIL_REGEX.match(email):
            raise serializers.ValidationError('Email inválido')

        if not any(email.endswith(dominio) for dominio in settings.DOMINIOS_APLABS):
            raise serializers.ValidationError('El correo debe ser del dominio @itcr.ac.cr o @estudiantec.cr')

        data['email'] = email
        data.pop('confirmPassword', None)
        return data


class EditarUsuarioSerializer(DatosPersonalesSerializer):
    """Edición por el administrador (el email no cambia)."""

    id_rol = serializers.ChoiceField(
        choices=list(colecciones.NOMBRES_ROL.keys()),
        error_messages={**_obligatorio(), 'invalid_choice': 'Rol inválido'},
    )
    activo = serializers.BooleanField(required=False)


class PerfilSerializer(DatosPersonalesSerializer):
    """Edición del propio perfil: sin rol ni estado."""
