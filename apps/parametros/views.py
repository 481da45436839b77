"""
Vistas de Parámetros Globales
"""

from rest_framework import viewsets, status
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, usuario_actual
from services.consultas import bool_param
from services.errors import ServicioError, primer_error
from .serializers import EstadoSistemaSerializer, ParametroValorSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class ParametroViewSet(viewsets.ViewSet):
    """
    Parámetros configurables del sistema (solo administrador).

    Endpoints:
        GET /api/parametros/?categoria=&activo= - Lista
        GET /api/parametros/{id}/ - Detalle
        PATCH /api/parametros/{id}/ - Actualiza el valor ({"valor": ...})
    """

    permission_classes = [IsAdmin]

    def list(self, request):
        try:
            parametros = services.listar_parametros(
                categoria=request.query_params.get('categoria', ''),
                activo=bool_param(request.query_params.get('activo')),
            )
            return Response(parametros)

        except Exception as e:
            logger.error(f"Error configurando parámetros: {str(e)}")
            return Response(
                {'error': 'Error al obtener los parámetros'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_parametro(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener parámetro {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener el parámetro'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        serializer = ParametroValorSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            parametro = services.actualizar_parametro(
                pk,
                serializer.validated_data['valor'],
                usuario_actual(request),
                activo=serializer.validated_data.get('activo'),
            )
            return Response(parametro)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error actualizando parámetro {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el parámetro'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None):
        return self.partial_update(request, pk)


class EstadoSistemaViewSet(viewsets.ViewSet):
    """
    Estados del sistema por categoría (solo administrador).

    Endpoints:
        GET /api/parametros/estados/?tipo= - Lista
        POST /api/parametros/estados/ - Crea
        PUT /api/parametros/estados/{id}/ - Actualiza
    """

    permission_classes = [IsAdmin]

    def list(self, request):
        try:
            return Response(services.listar_estados(request.query_params.get('tipo', '')))

        except Exception as e:
            logger.error(f"Error cargando estados: {str(e)}")
            return Response(
                {'error': 'Error al obtener los estados'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        return self._guardar(request)

    def update(self, request, pk=None):
        return self._guardar(request, pk)

    def _guardar(self, request, pk=None):
        serializer = EstadoSistemaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            estado = services.guardar_estado(serializer.validated_data, usuario_actual(request), pk)
            return Response(estado, status=status.HTTP_200_OK if pk else status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error guardando estado: {str(e)}")
            return Response(
                {'error': 'Error al guardar el estado. Inténtalo de nuevo.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
