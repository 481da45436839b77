"""
Vistas de Mantenimientos
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsTecnicoOrAdmin, usuario_actual
from services.errors import ServicioError, primer_error
from .serializers import ProgramarMantenimientoSerializer, RegistrarMantenimientoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class MantenimientoViewSet(viewsets.ViewSet):
    """
    ViewSet para programar y registrar mantenimientos.

    Endpoints:
        GET /api/mantenimientos/?estado=&tecnico= - Lista con detalle
        POST /api/mantenimientos/ - Programa un mantenimiento
        GET /api/mantenimientos/{id}/ - Detalle
        POST /api/mantenimientos/{id}/registrar/ - Registra la realización
    """

    permission_classes = [IsTecnicoOrAdmin]

    def list(self, request):
        try:
            mantenimientos = services.listar_mantenimientos(
                estado=request.query_params.get('estado', ''),
                id_tecnico=request.query_params.get('tecnico', ''),
            )
            return Response(mantenimientos)

        except Exception as e:
            logger.error(f"Error al obtener mantenimientos: {str(e)}")
            return Response(
                {'error': 'Error al obtener mantenimientos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_mantenimiento(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener mantenimiento {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener el mantenimiento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        """Programa un mantenimiento y pone el recurso en mantenimiento"""
        serializer = ProgramarMantenimientoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            mantenimiento = services.programar_mantenimiento(
                serializer.validated_data, usuario_actual(request)
            )
            return Response(mantenimiento, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error programando mantenimiento: {str(e)}")
            return Response(
                {'error': f'Error al programar: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def registrar(self, request, pk=None):
        """Registra un mantenimiento programado como completado"""
        serializer = RegistrarMantenimientoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            mantenimiento = services.registrar_mantenimiento(
                pk, serializer.validated_data, usuario_actual(request)
            )
            return Response(mantenimiento)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error registrando mantenimiento {pk}: {str(e)}")
            return Response(
                {'error': f'Error al registrar: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
