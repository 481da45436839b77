"""Serializers de Mensajes"""

from rest_framework import serializers


class MensajeSerializer(serializers.Serializer):
    """Formulario de nuevo mensaje (MensajeFormData)."""

    destinatario = serializers.CharField(error_messages={
        'required': 'Debe seleccionar un destinatario',
        'blank': 'Debe seleccionar un destinatario',
    })
    asunto = serializers.CharField(max_length=200, error_messages={
        'required': 'El asunto es requerido',
        'blank': 'El asunto es requerido',
    })
    contenido = serializers.CharField(error_messages={
        'required': 'El contenido es requerido',
        'blank': 'El contenido es requerido',
    })


class RespuestaSerializer(serializers.Serializer):
    contenido = serializers.CharField(error_messages={
        'required': 'El contenido es requerido',
        'blank': 'El contenido es requerido',
    })
