"""
Vistas de Donaciones

Monitoreo de donaciones (admin) e historial propio. El endpoint para
donar cuelga del proyecto: POST /api/crowdfunding/proyectos/{id}/donar/
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, usuario_actual
from services.errors import ServicioError
from . import services
import logging

logger = logging.getLogger(__name__)


class DonacionViewSet(viewsets.ViewSet):
    """
    Endpoints:
        GET /api/crowdfunding/donaciones/ - Todas (solo admin)
        GET /api/crowdfunding/donaciones/mias/?donador= - Historial de un donante
    """

    def get_permissions(self):
        if self.action == 'mias':
            return [IsAuthenticated()]
        return [IsAdmin()]

    def list(self, request):
        try:
            return Response(services.listar_donaciones())

        except Exception as e:
            logger.error(f"Error al obtener donaciones: {str(e)}")
            return Response(
                {'error': 'Error al obtener donaciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def mias(self, request):
        """Donaciones propias; un admin puede consultar las de otro donante."""
        usuario = usuario_actual(request)
        donador_id = usuario['id']
        if usuario.get('admin') and request.query_params.get('donador'):
            donador_id = request.query_params['donador']

        try:
            return Response(services.donaciones_de(donador_id))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener donaciones de {donador_id}: {str(e)}")
            return Response(
                {'error': 'Error al obtener donaciones'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
