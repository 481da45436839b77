"""
Vistas de Inventario
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAuthenticated, IsTecnicoOrAdmin, usuario_actual
from services.errors import ServicioError, primer_error
from .serializers import RecursoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class RecursoViewSet(viewsets.ViewSet):
    """
    ViewSet para gestionar los recursos del inventario.

    Endpoints:
        GET /api/inventario/?search=&estado=&tipo= - Lista ordenada por nombre
        POST /api/inventario/ - Crea (técnico o administrador)
        GET /api/inventario/{id}/ - Detalle
        PUT/PATCH /api/inventario/{id}/ - Actualiza (técnico o administrador)
        DELETE /api/inventario/{id}/ - Elimina (técnico o administrador)
        GET /api/inventario/catalogos/ - Estados, medidas y tipos
    """

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'catalogos']:
            return [IsAuthenticated()]
        return [IsTecnicoOrAdmin()]

    def list(self, request):
        try:
            recursos = services.listar_recursos(
                busqueda=request.query_params.get('search', ''),
                estado=request.query_params.get('estado', ''),
                tipo=request.query_params.get('tipo', ''),
            )
            return Response(recursos)

        except Exception as e:
            logger.error(f"Error al obtener inventario: {str(e)}")
            return Response(
                {'error': 'Error al obtener el inventario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_recurso(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener recurso {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener el recurso'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        serializer = RecursoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            recurso = services.crear_recurso(dict(serializer.validated_data), usuario_actual(request))
            return Response(recurso, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al crear recurso: {str(e)}")
            return Response(
                {'error': 'Error al guardar el recurso'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None, partial=False):
        serializer = RecursoSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            recurso = services.actualizar_recurso(pk, dict(serializer.validated_data), usuario_actual(request))
            return Response(recurso)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar recurso {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el recurso'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        try:
            services.eliminar_recurso(pk, usuario_actual(request))
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar recurso {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar el recurso'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def catalogos(self, request):
        """Catálogos para los formularios de inventario y mantenimiento"""
        try:
            return Response(services.obtener_catalogos())

        except Exception as e:
            logger.error(f"Error al obtener catálogos: {str(e)}")
            return Response(
                {'error': 'Error al obtener los catálogos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
