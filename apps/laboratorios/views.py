"""
Vistas de Laboratorios

CRUD de laboratorios. Lectura para cualquier usuario autenticado,
escritura solo para administradores.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdminOrReadOnly, IsAdmin, usuario_actual
from services.consultas import bool_param
from services.errors import ServicioError, primer_error
from .serializers import LaboratorioSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class LaboratorioViewSet(viewsets.ViewSet):
    """
    ViewSet para gestionar laboratorios.

    Endpoints:
        GET /api/laboratorios/?search=&estado=&departamento=&activo= - Lista
        POST /api/laboratorios/ - Crea (solo administrador)
        GET /api/laboratorios/{id}/ - Detalle
        PUT/PATCH /api/laboratorios/{id}/ - Actualiza (solo administrador)
        DELETE /api/laboratorios/{id}/ - Elimina (solo administrador)
        POST /api/laboratorios/{id}/toggle_activo/ - Activa/desactiva
    """

    def get_permissions(self):
        """Define permisos según la acción"""
        if self.action == 'toggle_activo':
            return [IsAdmin()]
        return [IsAdminOrReadOnly()]

    def list(self, request):
        """Lista los laboratorios"""
        try:
            laboratorios = services.listar_laboratorios(
                estado=request.query_params.get('estado', ''),
                departamento=request.query_params.get('departamento', ''),
                busqueda=request.query_params.get('search', ''),
                activo=bool_param(request.query_params.get('activo')),
            )
            return Response(laboratorios)

        except Exception as e:
            logger.error(f"Error al obtener laboratorios: {str(e)}")
            return Response(
                {'error': 'Error al obtener laboratorios'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_laboratorio(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener laboratorio {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener laboratorio'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        """Crea un laboratorio"""
        serializer = LaboratorioSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            laboratorio = services.crear_laboratorio(dict(serializer.validated_data), usuario_actual(request))
            return Response(laboratorio, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al crear laboratorio: {str(e)}")
            return Response(
                {'error': 'Error al crear el laboratorio'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None, partial=False):
        """Actualiza un laboratorio"""
        serializer = LaboratorioSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            laboratorio = services.actualizar_laboratorio(
                pk, dict(serializer.validated_data), usuario_actual(request)
            )
            return Response(laboratorio)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar laboratorio {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el laboratorio'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            services.eliminar_laboratorio(pk, usuario_actual(request))
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar laboratorio {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar el laboratorio'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def toggle_activo(self, request, pk=None):
        try:
            return Response(services.cambiar_estado(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al cambiar estado del laboratorio {pk}: {str(e)}")
            return Response(
                {'error': 'Error al cambiar el estado del laboratorio'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
