"""
Vistas del Calendario
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, usuario_actual
from services.consultas import bool_param
from services.errors import ServicioError, primer_error
from .serializers import BloqueoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class CalendarioViewSet(viewsets.ViewSet):
    """
    Vista mensual de reservas y bloqueos.

    Endpoints:
        GET /api/calendario/?mes=YYYY-MM&tipo=&estado=
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        try:
            datos = services.calendario_mes(
                mes=request.query_params.get('mes'),
                tipo=request.query_params.get('tipo', ''),
                estado=request.query_params.get('estado', ''),
            )
            return Response(datos)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error cargando calendario: {str(e)}")
            return Response(
                {'error': 'Error al cargar el calendario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


class BloqueoViewSet(viewsets.ViewSet):
    """
    Bloqueos de laboratorios y recursos.

    Endpoints:
        GET /api/calendario/bloqueos/?activo= - Lista
        POST /api/calendario/bloqueos/ - Crea (administrador)
        POST /api/calendario/bloqueos/{id}/desactivar/ - Desactiva (administrador)
    """

    def get_permissions(self):
        if self.action == 'list':
            return [IsAuthenticated()]
        return [IsAdmin()]

    def list(self, request):
        try:
            return Response(services.listar_bloqueos(bool_param(request.query_params.get('activo'))))

        except Exception as e:
            logger.error(f"Error cargando bloqueos: {str(e)}")
            return Response(
                {'error': 'Error al cargar los bloqueos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        serializer = BloqueoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            bloqueo = services.crear_bloqueo(serializer.validated_data, usuario_actual(request))
            return Response(bloqueo, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error creando bloqueo: {str(e)}")
            return Response(
                {'error': 'Error al crear bloqueo'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def desactivar(self, request, pk=None):
        try:
            return Response(services.desactivar_bloqueo(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error desactivando bloqueo {pk}: {str(e)}")
            return Response(
                {'error': 'Error al desactivar el bloqueo'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
