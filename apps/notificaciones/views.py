"""
Vistas de Notificaciones

Cada usuario consulta y administra solo sus propias notificaciones.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAuthenticated, IsAdmin, usuario_actual
from services.errors import ServicioError, primer_error
from .serializers import FiltroNotificacionesSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class NotificacionViewSet(viewsets.ViewSet):
    """
    ViewSet de notificaciones del usuario autenticado.

    Endpoints:
        GET /api/notificaciones/ - Lista (filtros tipo, leida, fecha_inicio, fecha_fin)
        DELETE /api/notificaciones/{id}/ - Elimina una notificación
        POST /api/notificaciones/{id}/marcar_leida/ - Marca como leída
        POST /api/notificaciones/marcar_todas_leidas/ - Marca todas
        GET /api/notificaciones/no_leidas/ - Conteo de no leídas
        POST /api/notificaciones/verificar_devoluciones/ - Ejecuta la verificación (admin)
    """

    def get_permissions(self):
        """Define permisos según la acción"""
        if self.action == 'verificar_devoluciones':
            return [IsAdmin()]
        return [IsAuthenticated()]

    def list(self, request):
        """Lista las notificaciones del usuario"""
        filtros = FiltroNotificacionesSerializer(data=request.query_params.dict())
        if not filtros.is_valid():
            return Response({'error': primer_error(filtros.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = usuario_actual(request)
            notificaciones = services.listar_notificaciones(usuario['id'], **filtros.validated_data)
            return Response(notificaciones)

        except Exception as e:
            logger.error(f"Error al obtener notificaciones: {str(e)}")
            return Response(
                {'error': 'Error al obtener notificaciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def destroy(self, request, pk=None):
        """Elimina una notificación propia"""
        try:
            services.eliminar_notificacion(pk, usuario_actual(request)['id'])
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar notificación {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar la notificación'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def marcar_leida(self, request, pk=None):
        """Marca una notificación como leída"""
        try:
            services.marcar_leida(pk, usuario_actual(request)['id'])
            return Response({'id': pk, 'leida': True})

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al marcar notificación {pk}: {str(e)}")
            return Response(
                {'error': 'Error al marcar la notificación'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['post'])
    def marcar_todas_leidas(self, request):
        """Marca todas las notificaciones del usuario como leídas"""
        try:
            total = services.marcar_todas_leidas(usuario_actual(request)['id'])
            return Response({'actualizadas': total})

        except Exception as e:
            logger.error(f"Error al marcar notificaciones: {str(e)}")
            return Response(
                {'error': 'Error al marcar las notificaciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def no_leidas(self, request):
        try:
            return Response({'no_leidas': services.contar_no_leidas(usuario_actual(request)['id'])})

        except Exception as e:
            logger.error(f"Error al contar notificaciones: {str(e)}")
            return Response(
                {'error': 'Error al contar notificaciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['post'])
    def verificar_devoluciones(self, request):
        """Ejecuta a demanda la verificación de devoluciones"""
        try:
            return Response(services.verificar_notificaciones_devolucion())

        except Exception as e:
            logger.error(f"Error al verificar devoluciones: {str(e)}")
            return Response(
                {'error': 'Error al verificar devoluciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
