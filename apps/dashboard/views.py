"""
Vistas de Dashboard

Resúmenes para el panel de inicio de cada rol.
"""

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from apps.auth.permissions import IsAdmin, IsAuthenticated, IsTecnicoOrAdmin, usuario_actual
from apps.mensajes.services import contar_no_leidos
from apps.notificaciones.services import contar_no_leidas
from services import colecciones
from services import firebase_service as fs
from services.fechas import hoy
import logging

logger = logging.getLogger(__name__)

PENDIENTE = [('estado_solicitud', '==', colecciones.SOLICITUD_PENDIENTE)]


def _solicitudes_pendientes() -> int:
    return (
        fs.contar(colecciones.SOLICITUDES_LABS, PENDIENTE)
        + fs.contar(colecciones.SOLICITUDES_RECURSOS, PENDIENTE)
    )


@api_view(['GET'])
@permission_classes([IsAdmin])
def admin_dashboard(request):
    """
    GET /api/dashboard/admin/

    Returns:
        {
            "total_usuarios": 120,
            "laboratorios_activos": 8,
            "total_recursos": 340,
            "solicitudes_pendientes": 5,
            "mantenimientos_programados": 2,
            "actividad_reciente": [...]
        }
    """
    try:
        laboratorios = fs.listar(colecciones.LABORATORIOS)
        return Response({
            'total_usuarios': fs.contar(colecciones.USUARIOS),
            'laboratorios_activos': sum(1 for lab in laboratorios if lab.get('activo', True) is not False),
            'total_recursos': fs.contar(colecciones.RECURSOS),
            'solicitudes_pendientes': _solicitudes_pendientes(),
            'mantenimientos_programados': fs.contar(
                colecciones.MANTENIMIENTOS, [('id_estado', '==', colecciones.MANTENIMIENTO_PROGRAMADO)]
            ),
            'actividad_reciente': fs.listar(colecciones.BITACORA, orden='timestamp', descendente=True, limite=5),
        })

    except Exception as e:
        logger.error(f"Error al obtener dashboard de administrador: {str(e)}")
        return Response(
            {'error': 'Error al obtener el dashboard'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsTecnicoOrAdmin])
def tecnico_dashboard(request):
    """GET /api/dashboard/tecnico/"""
    try:
        programados = fs.listar(
            colecciones.MANTENIMIENTOS, [('id_estado', '==', colecciones.MANTENIMIENTO_PROGRAMADO)]
        )
        fecha_hoy = hoy().isoformat()
        recursos = fs.listar(colecciones.RECURSOS)

        return Response({
            'solicitudes_pendientes': _solicitudes_pendientes(),
            'mantenimientos_pendientes': len(programados),
            'mantenimientos_hoy': [m for m in programados if m.get('fecha_programada') == fecha_hoy],
            'inventario': {
                'total': len(recursos),
                'disponibles': sum(
                    1 for r in recursos if str(r.get('id_estado')) == colecciones.RECURSO_DISPONIBLE
                ),
                'en_mantenimiento': sum(
                    1 for r in recursos if str(r.get('id_estado')) == colecciones.RECURSO_MANTENIMIENTO
                ),
            },
        })

    except Exception as e:
        logger.error(f"Error al obtener dashboard de técnico: {str(e)}")
        return Response(
            {'error': 'Error al obtener el dashboard'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def usuario_dashboard(request):
    """GET /api/dashboard/usuario/ - Resumen del usuario autenticado"""
    try:
        usuario_id = usuario_actual(request)['id']
        propias = [('id_usuario', '==', usuario_id)]
        solicitudes = fs.listar(colecciones.SOLICITUDES_LABS, propias) + fs.listar(
            colecciones.SOLICITUDES_RECURSOS, propias
        )

        por_estado = {
            colecciones.SOLICITUD_PENDIENTE: 0,
            colecciones.SOLICITUD_APROBADA: 0,
            colecciones.SOLICITUD_RECHAZADA: 0,
        }
        for solicitud in solicitudes:
            estado = solicitud.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE)
            por_estado[estado] = por_estado.get(estado, 0) + 1

        return Response({
            'solicitudes': {'total': len(solicitudes), **por_estado},
            'mensajes_no_leidos': contar_no_leidos(usuario_id),
            'notificaciones_no_leidas': contar_no_leidas(usuario_id),
        })

    except Exception as e:
        logger.error(f"Error al obtener dashboard de usuario: {str(e)}")
        return Response(
            {'error': 'Error al obtener el dashboard'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
