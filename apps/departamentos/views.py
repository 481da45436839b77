"""
Vistas de Departamentos

CRUD de departamentos. Lectura para cualquier usuario autenticado,
escritura solo para administradores.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdminOrReadOnly, IsAdmin, usuario_actual
from services.consultas import bool_param
from services.errors import ServicioError, primer_error
from .serializers import DepartamentoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class DepartamentoViewSet(viewsets.ViewSet):
    """
    ViewSet para gestionar departamentos.

    Endpoints:
        GET /api/departamentos/?search=&activo= - Lista
        POST /api/departamentos/ - Crea (solo administrador)
        GET /api/departamentos/{id}/ - Detalle
        PUT/PATCH /api/departamentos/{id}/ - Actualiza (solo administrador)
        DELETE /api/departamentos/{id}/ - Elimina (solo administrador)
        POST /api/departamentos/{id}/toggle_activo/ - Activa/desactiva
    """

    def get_permissions(self):
        """Define permisos según la acción"""
        if self.action == 'toggle_activo':
            return [IsAdmin()]
        return [IsAdminOrReadOnly()]

    def list(self, request):
        """Lista los departamentos"""
        try:
            departamentos = services.listar_departamentos(
                busqueda=request.query_params.get('search', ''),
                activo=bool_param(request.query_params.get('activo')),
            )
            return Response(departamentos)

        except Exception as e:
            logger.error(f"Error al obtener departamentos: {str(e)}")
            return Response(
                {'error': 'Error al obtener departamentos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_departamento(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener departamento {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener departamento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        """Crea un departamento"""
        serializer = DepartamentoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            departamento = services.crear_departamento(dict(serializer.validated_data), usuario_actual(request))
            return Response(departamento, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al crear departamento: {str(e)}")
            return Response(
                {'error': 'Error al crear el departamento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None, partial=False):
        """Actualiza un departamento"""
        serializer = DepartamentoSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            departamento = services.actualizar_departamento(
                pk, dict(serializer.validated_data), usuario_actual(request)
            )
            return Response(departamento)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar departamento {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el departamento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            services.eliminar_departamento(pk, usuario_actual(request))
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar departamento {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar el departamento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def toggle_activo(self, request, pk=None):
        try:
            return Response(services.cambiar_estado(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al cambiar estado del departamento {pk}: {str(e)}")
            return Response(
                {'error': 'Error al cambiar el estado del departamento'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
