"""
Vistas de Cuentas (Crowdfunding)

Registro público, verificación de sesión, perfil propio y
administración de usuarios de la plataforma de donaciones.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, usuario_actual
from services.errors import ServicioError, primer_error
from .serializers import RegistroSerializer, PerfilCrowdfundingSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class CuentaViewSet(viewsets.ViewSet):
    """
    ViewSet de la cuenta propia.

    Endpoints:
        POST /api/crowdfunding/cuentas/registro/ - Registro (sin token)
        GET /api/crowdfunding/cuentas/sesion/ - Verifica el inicio de sesión
        GET/PATCH /api/crowdfunding/cuentas/perfil/ - Perfil propio
    """

    def get_permissions(self):
        # sesion responde su propio mensaje a las cuentas inactivas
        if self.action in ['registro', 'sesion']:
            return []
        return [IsAuthenticated()]

    @action(detail=False, methods=['post'])
    def registro(self, request):
        """Registra una cuenta nueva"""
        serializer = RegistroSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = services.registrar(dict(serializer.validated_data))
            return Response(usuario, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al registrar cuenta: {str(e)}")
            return Response(
                {'error': 'Error al registrar la cuenta'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def sesion(self, request):
        usuario = usuario_actual(request)
        if usuario is None:
            return Response({'error': 'Autenticación requerida'}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            return Response(services.sesion(usuario))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)

    @action(detail=False, methods=['get', 'patch'])
    def perfil(self, request):
        """Consulta o edita el perfil del usuario autenticado"""
        usuario = usuario_actual(request)

        try:
            if request.method == 'GET':
                return Response(services.obtener_perfil(usuario['id']))

            serializer = PerfilCrowdfundingSerializer(data=request.data, partial=True)
            if not serializer.is_valid():
                return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

            return Response(services.actualizar_perfil(usuario, dict(serializer.validated_data)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error en perfil de {usuario.get('email')}: {str(e)}")
            return Response(
                {'error': 'Error al procesar el perfil'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


class UsuarioCrowdfundingViewSet(viewsets.ViewSet):
    """
    Administración de cuentas (solo admin).

    Endpoints:
        GET /api/crowdfunding/cuentas/usuarios/ - Lista
        POST /api/crowdfunding/cuentas/usuarios/{id}/toggle_activo/ - Activa/desactiva
    """

    permission_classes = [IsAdmin]

    def list(self, request):
        try:
            return Response(services.listar_usuarios())

        except Exception as e:
            logger.error(f"Error al obtener usuarios de crowdfunding: {str(e)}")
            return Response(
                {'error': 'Error al obtener usuarios'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def toggle_activo(self, request, pk=None):
        try:
            return Response(services.cambiar_estado(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al cambiar estado del usuario {pk}: {str(e)}")
            return Response(
                {'error': 'Error al cambiar el estado del usuario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
