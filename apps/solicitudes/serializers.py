"""Serializers de Solicitudes"""

from rest_framework import serializers

OBLIGATORIOS = 'Por favor completa todos los campos obligatorios'


def _requerido(mensaje=OBLIGATORIOS):
    return {'required': mensaje, 'blank': mensaje, 'null': mensaje, 'invalid': mensaje}


class HorarioSerializer(serializers.Serializer):
    hora_inicio = serializers.CharField(max_length=5, error_messages=_requerido())
    hora_fin = serializers.CharField(max_length=5, error_messages=_requerido())

    def validate(self, data):
        if data['hora_inicio'] >= data['hora_fin']:
            raise serializers.ValidationError('La hora de inicio debe ser anterior a la hora de fin')
        return data


class SolicitudLaboratorioSerializer(serializers.Serializer):
    """Solicitud de un laboratorio para un día y uno o más horarios."""

    id_lab = serializers.CharField(error_messages=_requerido())
    dia = serializers.DateField(error_messages=_requerido())
    horarios = HorarioSerializer(many=True, error_messages={'required': 'Selecciona al menos un horario'})
    motivo = serializers.CharField(error_messages=_requerido())
    participantes = serializers.IntegerField(min_value=1, error_messages={
        **_requerido(),
        'min_value': 'El número de participantes debe ser mayor a 0',
    })
    recursos = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_horarios(self, value):
        if not value:
            raise serializers.ValidationError('Selecciona al menos un horario')
        return value


class SolicitudRecursoSerializer(serializers.Serializer):
    """Solicitud de préstamo de un recurso del inventario."""

    id_recurso = serializers.CharField(error_messages=_requerido())
    cantidad = serializers.IntegerField(error_messages=_requerido('La cantidad debe ser mayor a 0'))
    fecha_reserva = serializers.DateField(error_messages=_requerido())
    fecha_devolucion = serializers.DateField(required=False, allow_null=True, default=None)
    motivo = serializers.CharField(error_messages=_requerido())
    id_medida = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_cantidad(self, value):
        if value <= 0:
            raise serializers.ValidationError('La cantidad debe ser mayor a 0')
        return value

    def validate(self, data):
        if data.get('fecha_devolucion') and data['fecha_devolucion'] < data['fecha_reserva']:
            raise serializers.ValidationError(
                'La fecha de devolución no puede ser anterior a la fecha de reserva'
            )
        return data


class RechazoSerializer(serializers.Serializer):
    motivo = serializers.CharField(error_messages=_requerido('Debe proporcionar un motivo para el rechazo'))
