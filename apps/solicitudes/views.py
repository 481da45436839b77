"""
Vistas de Solicitudes

- MisSolicitudesViewSet: el usuario crea, consulta, cancela y devuelve
- SolicitudViewSet: el administrador revisa, aprueba y rechaza
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, usuario_actual
from services import colecciones
from services.errors import ServicioError, primer_error
from .serializers import RechazoSerializer, SolicitudLaboratorioSerializer, SolicitudRecursoSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class MisSolicitudesViewSet(viewsets.ViewSet):
    """
    Solicitudes del usuario autenticado.

    Endpoints:
        GET /api/solicitudes/mias/ - Solicitudes propias (laboratorios y recursos)
        POST /api/solicitudes/mias/ - Crea una solicitud ({"tipo": "laboratorio"|"recurso", ...})
        DELETE /api/solicitudes/mias/{id}/ - Cancela una solicitud pendiente
        POST /api/solicitudes/mias/{id}/devolver/ - Registra la devolución
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        try:
            usuario = usuario_actual(request)
            return Response(services.listar_mis_solicitudes(usuario['id']))

        except Exception as e:
            logger.error(f"Error al cargar solicitudes: {str(e)}")
            return Response(
                {'error': 'Error al cargar las solicitudes'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        tipo = str(request.data.get('tipo', '')).lower()
        if tipo == 'laboratorio':
            serializer = SolicitudLaboratorioSerializer(data=request.data)
            crear = services.crear_solicitud_laboratorio
        elif tipo == 'recurso':
            serializer = SolicitudRecursoSerializer(data=request.data)
            crear = services.crear_solicitud_recurso
        else:
            return Response(
                {'error': 'Tipo de solicitud inválido. Use "laboratorio" o "recurso"'},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            solicitud = crear(usuario_actual(request), serializer.validated_data)
            return Response(solicitud, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al enviar la solicitud: {str(e)}")
            return Response(
                {'error': 'Error al enviar la solicitud'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def destroy(self, request, pk=None):
        """Cancela y elimina una solicitud pendiente"""
        try:
            services.cancelar_solicitud(pk, usuario_actual(request))
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al cancelar solicitud {pk}: {str(e)}")
            return Response(
                {'error': f'Error al cancelar la solicitud: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def devolver(self, request, pk=None):
        try:
            return Response(services.devolver(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al registrar la devolución de {pk}: {str(e)}")
            return Response(
                {'error': f'Error al registrar la devolución: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


class SolicitudViewSet(viewsets.ViewSet):
    """
    Gestión de solicitudes (administrador).

    Endpoints:
        GET /api/solicitudes/?search=&tipo=&estado=&prioridad= - Lista unificada
        POST /api/solicitudes/{id}/aprobar/ - Aprueba y crea la reserva
        POST /api/solicitudes/{id}/rechazar/ - Rechaza con motivo
    """

    permission_classes = [IsAdmin]

    def list(self, request):
        try:
            solicitudes = services.listar_solicitudes_gestion(
                busqueda=request.query_params.get('search', ''),
                tipo=request.query_params.get('tipo', ''),
                estado=request.query_params.get('estado', colecciones.SOLICITUD_PENDIENTE),
                prioridad=request.query_params.get('prioridad', ''),
            )
            return Response(solicitudes)

        except Exception as e:
            logger.error(f"Error cargando solicitudes: {str(e)}")
            return Response(
                {'error': 'Error al cargar las solicitudes'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def aprobar(self, request, pk=None):
        try:
            return Response(services.aprobar_solicitud(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error aprobando solicitud {pk}: {str(e)}")
            return Response(
                {'error': f'Error al aprobar: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def rechazar(self, request, pk=None):
        serializer = RechazoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            resultado = services.rechazar_solicitud(
                pk, serializer.validated_data['motivo'], usuario_actual(request)
            )
            return Response(resultado)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error rechazando solicitud {pk}: {str(e)}")
            return Response(
                {'error': f'Error al rechazar: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
