"""
Vistas de Usuarios

CRUD de usuarios de AP-LABS (solo administradores) y perfil propio.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, IsTecnicoOrAdmin, usuario_actual
from services import catalogos
from services.consultas import bool_param
from services.errors import ServicioError, primer_error
from .serializers import NuevoUsuarioSerializer, EditarUsuarioSerializer, PerfilSerializer
from . import services
import logging

logger = logging.getLogger(__name__)


class UsuarioViewSet(viewsets.ViewSet):
    """
    ViewSet para gestionar usuarios en Firestore.

    Endpoints:
        GET /api/usuarios/?rol=&departamento=&activo=&search= - Lista
        POST /api/usuarios/ - Crea usuario (Auth + Firestore)
        GET /api/usuarios/{id}/ - Detalle
        PUT/PATCH /api/usuarios/{id}/ - Actualiza
        DELETE /api/usuarios/{id}/ - Elimina
        POST /api/usuarios/{id}/toggle_activo/ - Activa/desactiva
        GET /api/usuarios/tecnicos/ - Técnicos activos
        GET /api/usuarios/roles/ - Catálogo de roles
        GET/PATCH /api/usuarios/perfil/ - Perfil propio

    Permisos:
        - Administrador: Acceso total
        - Técnico: Lista de técnicos
        - Todos: Perfil propio y roles
    """

    def get_permissions(self):
        """Define permisos según la acción"""
        if self.action in ['perfil', 'roles']:
            return [IsAuthenticated()]
        if self.action == 'tecnicos':
            return [IsTecnicoOrAdmin()]
        return [IsAdmin()]

    def list(self, request):
        """Lista todos los usuarios"""
        try:
            usuarios = services.listar_usuarios(
                rol=request.query_params.get('rol', ''),
                departamento=request.query_params.get('departamento', ''),
                activo=bool_param(request.query_params.get('activo')),
                busqueda=request.query_params.get('search', ''),
            )
            logger.info(f"Usuarios obtenidos: {len(usuarios)}")
            return Response(usuarios)

        except Exception as e:
            logger.error(f"Error al obtener usuarios: {str(e)}")
            return Response(
                {'error': 'Error al obtener usuarios'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def retrieve(self, request, pk=None):
        """Obtiene un usuario específico"""
        try:
            return Response(services.obtener_usuario(pk))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al obtener usuario {pk}: {str(e)}")
            return Response(
                {'error': 'Error al obtener usuario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def create(self, request):
        """Crea un nuevo usuario en Firebase Auth y Firestore"""
        serializer = NuevoUsuarioSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = services.crear_usuario(dict(serializer.validated_data), usuario_actual(request))
            return Response(usuario, status=status.HTTP_201_CREATED)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al crear usuario: {str(e)}")
            return Response(
                {'error': f'Error al registrar usuario: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def update(self, request, pk=None, partial=False):
        """Actualiza un usuario existente"""
        serializer = EditarUsuarioSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response({'error': primer_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = services.actualizar_usuario(pk, dict(serializer.validated_data), usuario_actual(request))
            return Response(usuario)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al actualizar usuario {pk}: {str(e)}")
            return Response(
                {'error': f'Error al guardar: {str(e)}'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    def partial_update(self, request, pk=None):
        return self.update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        """Elimina el documento del usuario"""
        try:
            services.eliminar_usuario(pk, usuario_actual(request))
            return Response(status=status.HTTP_204_NO_CONTENT)

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al eliminar usuario {pk}: {str(e)}")
            return Response(
                {'error': 'Error al eliminar el usuario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=True, methods=['post'])
    def toggle_activo(self, request, pk=None):
        """Activa o desactiva un usuario"""
        try:
            return Response(services.cambiar_estado(pk, usuario_actual(request)))

        except ServicioError as e:
            return Response({'error': e.mensaje}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error al cambiar estado del usuario {pk}: {str(e)}")
            return Response(
                {'error': 'Error al cambiar el estado del usuario'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def tecnicos(self, request):
        """Lista los técnicos activos"""
        try:
            return Response(services.listar_tecnicos())

        except Exception as e:
            logger.error(f"Error al obtener técnicos: {str(e)}")
            return Response(
                {'error': 'Error al obtener técnicos'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get'])
    def roles(self, request):
        try:
            return Response(catalogos.roles())

        except Exception as e:
            logger.error(f"Error al obtener roles: {str(e)}")
            return Response(
                {'error': 'Error al obtener roles'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @action(detail=False, methods=['get', 'patch'])
    def perfil(self, request):
        """Consulta o edita el perfil del usuario autenticado"""
        usuario = usuario_actual(request)

        try:
            if request.method == 'GET':
                return Response(services.obtener_usuario(usuario['id']))

            serializer = PerfilSerializer(data=request.data, partial=True)
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
