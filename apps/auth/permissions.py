"""
Permisos personalizados

Define los permisos basados en roles:
- Administrador (AP-LABS) o admin (Crowdfunding): Acceso total
- Técnico: Inventario y mantenimientos
- Estudiante / Docente: Sus propias solicitudes, mensajes y notificaciones
"""

from rest_framework import permissions
from services import colecciones


def usuario_actual(request):
    """Usuario autenticado por el middleware, o None."""
    return getattr(request, 'firebase_user', None)


def es_admin(usuario) -> bool:
    if not usuario:
        return False
    if usuario.get('admin'):
        return True
    return usuario.get('id_rol') == colecciones.ROL_ADMINISTRADOR


class IsAuthenticated(permissions.BasePermission):
    """
    Permiso que verifica que el usuario esté autenticado con Firebase
    y que su cuenta siga activa.
    """

    message = 'Autenticación requerida'

    def has_permission(self, request, view):
        usuario = usuario_actual(request)
        return usuario is not None and usuario.get('activo', True)


class IsAdmin(IsAuthenticated):
    """
    Permiso que solo permite acceso a administradores.
    """

    message = 'Solo un administrador puede realizar esta acción'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return es_admin(usuario_actual(request))


class IsTecnicoOrAdmin(IsAuthenticated):
    """
    Permiso para técnicos y administradores (inventario, mantenimientos).
    """

    message = 'Solo técnicos o administradores pueden realizar esta acción'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        usuario = usuario_actual(request)
        return es_admin(usuario) or usuario.get('id_rol') == colecciones.ROL_TECNICO


class IsAdminOrReadOnly(IsAuthenticated):
    """
    Permiso que permite lectura a todos los autenticados,
    pero solo administradores pueden crear/editar/eliminar.
    """

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False

        # Métodos de lectura permitidos para todos
        if request.method in permissions.SAFE_METHODS:
            return True

        return es_admin(usuario_actual(request))
