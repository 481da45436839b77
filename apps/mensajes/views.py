"""
Vistas de Mensajería

Bandeja de entrada, enviados y archivados del usuario autenticado.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAuthenticated, usuario_actual
from services.errors import ServicioError, primer_error
from .serializers import MensajeSerializer, RespuestaSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class MensajeViewSet(viewsets.ViewSet):
    """
    ViewSet de mensajes.

    Endpoints:
        GET /api/mensajes/?carpeta=entrada|enviados|archivados&q= - Lista una carpeta
        POST /api/mensajes/ - Envía un mensaje
        GET /api/mensajes/{id}/ - Detalle (marca como leído al destinatario)
        DELETE /api/mensajes/{id}/ - Elimina
        POST /api/mensajes/{id}/marcar_leido/
        POST /api/mensajes/{id}/archivar/
        POST /api/mensajes/{id}/desarchivar/
        POST /api/mensajes/{id}/responder/
        GET /api/mensajes/destinatarios/ - Usuarios activos a quienes escribir
        GET /api/mensajes/no_leidos/ - Conteo de no leídos
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        """Lista una carpeta de mensajes"""
        carpeta = request.query_params.get('carpeta', 'entrada')
        if carpeta not in services.CARPETAS:
            return Response({'error': f'Carpeta inválida: {carpeta}'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            mensajes = services.listar_carpeta(
                usuario_actual(request)['id'],
                carpeta,
                request.query_params.get('q', ''),
            )
            return Response(mensajes)

        except Exception as e:
            logger.error(f"Error al obtener mensajes: {str(e)}")
            return Response(
                {'error': 'Error al obtener mensajes'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        """Envía un mensaje"""
        serializer = MensajeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            datos = serializer.validated_data
            mensaje = services.enviar_mensaje(
                usuario_actual(request), datos['destinatario'], datos['asunto'], datos['contenido']
            )
            return Response(mensaje, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al enviar mensaje: {str(e)}")
            return Response(
                {'error': 'Error al enviar el mensaje'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        """Detalle de un mensaje"""
        try:
            usuario_id = usuario_actual(request)['id']
            mensaje = services.obtener_mensaje(pk, usuario_id)
            if mensaje.get('destinatario') == usuario_id and not mensaje.get('recibido'):
                services.marcar_leido(pk, usuario_id)
                mensaje['recibido'] = True
            return Response(services.decorar([mensaje])[0])

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener mensaje {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener el mensaje'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def destroy(self, request, pk=None):
        try:
            services.eliminar_mensaje(pk, usuario_actual(request)['id'])
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar mensaje {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar el mensaje'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def _cambiar_estado(self, request, pk, operacion, descripcion):
        try:
            operacion(pk, usuario_actual(request)['id'])
            return Response({'id': pk, 'estado': descripcion})

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar mensaje {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el mensaje'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def marcar_leido(self, request, pk=None):
        return self._cambiar_estado(request, pk, services.marcar_leido, 'leido')

    @action(detail=True, methods=['post'])
    def archivar(self, request, pk=None):
        return self._cambiar_estado(request, pk, services.archivar, 'archivado')

    @action(detail=True, methods=['post'])
    def desarchivar(self, request, pk=None):
        return self._cambiar_estado(request, pk, services.desarchivar, 'entrada')

    @action(detail=True, methods=['post'])
    def responder(self, request, pk=None):
        """Responde al remitente con asunto 'Re: ...'"""
        serializer = RespuestaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            mensaje = services.responder_mensaje(
                usuario_actual(request), pk, serializer.validated_data['contenido']
            )
            return Response(mensaje, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al responder mensaje {pk}: {str(e)}")
            return Response(
                {'error': 'Error al responder el mensaje'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def destinatarios(self, request):
        """Usuarios activos disponibles como destinatarios"""
        try:
            return Response(services.destinatarios_disponibles(usuario_actual(request)['id']))

        except Exception as e:
            logger.error(f"Error al obtener destinatarios: {str(e)}")
            return Response(
                {'error': 'Error al obtener usuarios'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def no_leidos(self, request):
        try:
            return Response({'no_leidos': services.contar_no_leidos(usuario_actual(request)['id'])})

        except Exception as e:
            logger.error(f"Error al contar mensajes: {str(e)}")
            return Response(
                {'error': 'Error al contar mensajes'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
