"""
Vistas de Proyectos (Crowdfunding)

Listado con búsqueda, alta, detalle, edición por el creador y
donaciones a un proyecto.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, usuario_actual
from apps.donaciones import services as donaciones
from apps.donaciones.serializers import DonacionSerializer
from services.errors import ServicioError, primer_error
from .serializers import ProyectoEdicionSerializer, ProyectoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class ProyectoViewSet(viewsets.ViewSet):
    """
    ViewSet de proyectos.

    Endpoints:
        GET /api/crowdfunding/proyectos/?q=&fecha_limite= - Lista
        POST /api/crowdfunding/proyectos/ - Crea
        GET /api/crowdfunding/proyectos/{id}/ - Detalle
        PUT/PATCH /api/crowdfunding/proyectos/{id}/ - Edita (creador o admin)
        POST /api/crowdfunding/proyectos/{id}/donar/ - Dona al proyecto
    """

    def list(self, request):
        try:
            proyectos = services.listar_proyectos(
                busqueda=request.query_params.get('q', '').strip(),
                fecha_limite=request.query_params.get('fecha_limite', ''),
            )
            return Response(proyectos)

        except Exception as e:
            logger.error(f"Error al obtener proyectos: {str(e)}")
            return Response(
                {'error': 'Error al obtener proyectos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        try:
            return Response(services.obtener_proyecto(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener proyecto {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener el proyecto'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        serializer = ProyectoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            proyecto = services.crear_proyecto(dict(serializer.validated_data), usuario_actual(request))
            return Response(proyecto, status=status.HTTP_201_CREATED)

        except Exception as e:
            logger.error(f"Error al crear proyecto: {str(e)}")
            return Response(
                {'error': 'Error al crear el proyecto'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None, partial=False):
        serializer = ProyectoEdicionSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            proyecto = services.actualizar_proyecto(pk, dict(serializer.validated_data), usuario_actual(request))
            return Response(proyecto)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar proyecto {pk}: {str(e)}")
            return Response(
                {'error': 'Error al actualizar el proyecto'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    @action(detail=True, methods=['post'])
    def donar(self, request, pk=None):
        """Registra una donación del usuario autenticado"""
        serializer = DonacionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            donacion = donaciones.donar(
                pk,
                serializer.validated_data['monto'],
                serializer.validated_data['comprobante'],
                usuario_actual(request),
            )
            return Response(donacion, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al donar al proyecto {pk}: {str(e)}")
            return Response(
                {'error': 'Error al procesar la donación'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


@api_view(['GET'])
@permission_classes([IsAdmin])
def estadisticas(request):
    """Totales de proyectos, donaciones y usuarios activos"""
    try:
        return Response(services.obtener_estadisticas())

    except Exception as e:
        logger.error(f"Error al obtener estadísticas de crowdfunding: {str(e)}")
        return Response(
            {'error': 'Error al obtener estadísticas'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
