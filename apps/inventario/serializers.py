"""Serializers de Inventario"""

from rest_framework import serializers

OBLIGATORIOS = 'Por favor complete los campos obligatorios'
CANTIDAD = 'La cantidad debe ser mayor a 0'


class RecursoSerializer(serializers.Serializer):
    """
    Valida los datos de un recurso de inventario.

    nombre, codigo_inventario e id_estado son obligatorios. El código se
    guarda en mayúsculas.
    """

    nombre = serializers.CharField(max_length=150, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    codigo_inventario = serializers.CharField(
        max_length=50, error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS}
    )
    descripcion = serializers.CharField(required=False, allow_blank=True, default='')
    cantidad = serializers.IntegerField(error_messages={'required': CANTIDAD, 'invalid': CANTIDAD})
    id_estado = serializers.CharField(error_messages={'required': OBLIGATORIOS, 'blank': OBLIGATORIOS})
    id_medida = serializers.CharField(required=False, allow_blank=True, default='')
    id_tipo_recurso = serializers.CharField(required=False, allow_blank=True, default='')
    fecha_ultimo_mantenimiento = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_codigo_inventario(self, value):
        return value.strip().upper()

    def validate_cantidad(self, value):
        if value <= 0:
            raise serializers.ValidationError(CANTIDAD)
        return value
