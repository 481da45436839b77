"""
Servicio de Notificaciones

Crea y consulta notificaciones de usuarios (colección 'notificaciones')
y ejecuta la verificación diaria de devoluciones de recursos.

Funciones principales:
- crear_notificacion(): Notificación genérica
- crear_notificacion_mensaje/solicitud/mantenimiento(): Textos predefinidos
- listar_notificaciones(): Notificaciones propias con filtros
- verificar_notificaciones_devolucion(): Recordatorios y vencimientos
"""

import logging
import threading
from datetime import date
from typing import Dict, List, Optional

from services import colecciones
from services import firebase_service as fs
from services.errors import NoEncontradoError, PermisoError
from services.fechas import a_fecha, ahora, clave_orden, en_rango, hoy as fecha_hoy

logger = logging.getLogger(__name__)

TIPOS = [
    'mensaje',
    'solicitud_aprobada',
    'solicitud_rechazada',
    'mantenimiento_programado',
    'mantenimiento_completado',
    'general',
]


def crear_notificacion(
    id_usuario: str,
    tipo: str,
    titulo: str,
    mensaje: str,
    datos_adicionales: Optional[Dict] = None,
) -> Optional[str]:
    """
    Crea una notificación no leída para un usuario.

    Un error al notificar no interrumpe la operación que la originó.

    Returns:
        id de la notificación, o None si falló
    """
    if tipo not in TIPOS:
        logger.warning(f"Tipo de notificación desconocido '{tipo}', se usa 'general'")
        tipo = 'general'

    try:
        notificacion = fs.crear(colecciones.NOTIFICACIONES, {
            'id_usuario': id_usuario,
            'tipo': tipo,
            'titulo': titulo,
            'mensaje': mensaje,
            'fecha_creacion': ahora(),
            'leida': False,
            'datos_adicionales': datos_adicionales or {},
        })
        logger.info(f"Notificación '{titulo}' creada para {id_usuario}")
        return notificacion['id']

    except Exception as e:
        logger.error(f"Error creando notificación para {id_usuario}: {str(e)}")
        return None


def crear_notificacion_mensaje(id_usuario: str, remitente: str, id_mensaje: str) -> Optional[str]:
    return crear_notificacion(
        id_usuario,
        'mensaje',
        'Nuevo mensaje recibido',
        f'Tienes un nuevo mensaje de {remitente}. Haz clic para verlo.',
        {'id_mensaje': id_mensaje, 'remitente': remitente},
    )


def crear_notificacion_solicitud(
    id_usuario: str,
    aprobada: bool,
    mensaje: str,
    datos_adicionales: Optional[Dict] = None,
) -> Optional[str]:
    if aprobada:
        return crear_notificacion(id_usuario, 'solicitud_aprobada', 'Solicitud Aprobada', mensaje, datos_adicionales)
    return crear_notificacion(id_usuario, 'solicitud_rechazada', 'Solicitud Rechazada', mensaje, datos_adicionales)


def crear_notificacion_mantenimiento(
    id_usuario: str,
    completado: bool,
    nombre_recurso: str,
    id_mantenimiento: str,
) -> Optional[str]:
    datos = {'id_mantenimiento': id_mantenimiento, 'recurso': nombre_recurso}
    if completado:
        return crear_notificacion(
            id_usuario,
            'mantenimiento_completado',
            'Mantenimiento Completado',
            f'El mantenimiento de {nombre_recurso} ha sido completado.',
            datos,
        )
    return crear_notificacion(
        id_usuario,
        'mantenimiento_programado',
        'Mantenimiento Programado',
        f'Se ha programado mantenimiento para {nombre_recurso}.',
        datos,
    )


def listar_notificaciones(
    id_usuario: str,
    tipo: str = '',
    leida: Optional[bool] = None,
    fecha_inicio: Optional[date] = None,
    fecha_fin: Optional[date] = None,
) -> List[Dict]:
    """Notificaciones del usuario, más recientes primero."""
    notificaciones = fs.listar(colecciones.NOTIFICACIONES, [('id_usuario', '==', id_usuario)])

    if tipo:
        notificaciones = [n for n in notificaciones if n.get('tipo') == tipo]
    if leida is not None:
        notificaciones = [n for n in notificaciones if bool(n.get('leida')) == leida]
    if fecha_inicio or fecha_fin:
        notificaciones = [
            n for n in notificaciones
            if en_rango(n.get('fecha_creacion'), fecha_inicio, fecha_fin, incluir_sin_fecha=False)
        ]

    notificaciones.sort(key=lambda n: clave_orden(n.get('fecha_creacion')), reverse=True)
    return notificaciones


def contar_no_leidas(id_usuario: str) -> int:
    return fs.contar(colecciones.NOTIFICACIONES, [
        ('id_usuario', '==', id_usuario),
        ('leida', '==', False),
    ])


def _propia(notificacion_id: str, id_usuario: str) -> Dict:
    notificacion = fs.obtener(colecciones.NOTIFICACIONES, notificacion_id)
    if notificacion is None:
        raise NoEncontradoError('Notificación no encontrada')
    if notificacion.get('id_usuario') != id_usuario:
        raise PermisoError('La notificación no pertenece al usuario')
    return notificacion


def marcar_leida(notificacion_id: str, id_usuario: str) -> None:
    _propia(notificacion_id, id_usuario)
    fs.actualizar(colecciones.NOTIFICACIONES, notificacion_id, {'leida': True})


def marcar_todas_leidas(id_usuario: str) -> int:
    """Marca todas las no leídas del usuario. Retorna cuántas cambió."""
    pendientes = fs.listar(colecciones.NOTIFICACIONES, [
        ('id_usuario', '==', id_usuario),
        ('leida', '==', False),
    ])
    for notificacion in pendientes:
        fs.actualizar(colecciones.NOTIFICACIONES, notificacion['id'], {'leida': True})
    logger.info(f"{len(pendientes)} notificaciones marcadas como leídas para {id_usuario}")
    return len(pendientes)


def eliminar_notificacion(notificacion_id: str, id_usuario: str) -> None:
    _propia(notificacion_id, id_usuario)
    fs.eliminar(colecciones.NOTIFICACIONES, notificacion_id)


def verificar_notificaciones_devolucion(hoy: Optional[date] = None) -> Dict[str, int]:
    """
    Revisa las reservas de recursos aprobadas y notifica devoluciones.

    - Un día antes de fecha_devolucion: recordatorio
    - Fecha de devolución vencida: alerta con los días de atraso

    Cada aviso se envía una sola vez; la reserva guarda una bandera
    por tipo de aviso.

    Returns:
        {'recordatorios': n, 'vencidas': n}
    """
    hoy = hoy or fecha_hoy()
    logger.info("Verificando notificaciones de devolución de recursos...")

    reservas = fs.listar(colecciones.RESERVAS_RECURSOS, [('estado', '==', colecciones.RESERVA_APROBADA)])
    recordatorios = 0
    vencidas = 0

    for reserva in reservas:
        fecha_devolucion = a_fecha(reserva.get('fecha_devolucion'))
        if fecha_devolucion is None:
            continue

        diferencia = (fecha_devolucion - hoy).days
        if diferencia != 1 and diferencia >= 0:
            continue

        recurso = fs.obtener(colecciones.RECURSOS, reserva.get('id_recurso'))
        nombre_recurso = (recurso or {}).get('nombre') or 'Recurso'
        fecha_texto = fecha_devolucion.strftime('%d/%m/%Y')
        datos = {
            'id_reserva': reserva['id'],
            'recurso': nombre_recurso,
            'fecha_devolucion': reserva.get('fecha_devolucion'),
        }

        if diferencia == 1 and not reserva.get('notificacion_recordatorio_enviada'):
            crear_notificacion(
                reserva.get('id_usuario'),
                'mantenimiento_programado',
                '⏰ Recordatorio de Devolución',
                f'Recuerda que mañana {fecha_texto} debes devolver el recurso "{nombre_recurso}". '
                'Por favor, asegúrate de entregarlo a tiempo.',
                {**datos, 'tipo_notificacion': 'recordatorio_devolucion'},
            )
            fs.actualizar(colecciones.RESERVAS_RECURSOS, reserva['id'], {
                'notificacion_recordatorio_enviada': True,
            })
            recordatorios += 1

        elif diferencia < 0 and not reserva.get('notificacion_vencido_enviada'):
            dias_vencidos = abs(diferencia)
            plural = 's' if dias_vencidos > 1 else ''
            crear_notificacion(
                reserva.get('id_usuario'),
                'general',
                '⚠️ Devolución Vencida',
                f'El plazo para devolver el recurso "{nombre_recurso}" venció hace {dias_vencidos} día{plural}. '
                f'Debes devolverlo lo antes posible para evitar una multa. La fecha límite era {fecha_texto}.',
                {**datos, 'dias_vencidos': dias_vencidos, 'tipo_notificacion': 'devolucion_vencida'},
            )
            fs.actualizar(colecciones.RESERVAS_RECURSOS, reserva['id'], {
                'notificacion_vencido_enviada': True,
            })
            vencidas += 1

    logger.info(f"Verificación completada: {recordatorios} recordatorios, {vencidas} vencimientos")
    return {'recordatorios': recordatorios, 'vencidas': vencidas}


def iniciar_verificacion_periodica(intervalo_horas: int = 24, evento_parada=None) -> None:
    """
    Bucle del hilo de fondo: verifica devoluciones cada intervalo.

    Un error en una pasada se registra y el bucle continúa.
    """
    evento_parada = evento_parada or threading.Event()
    logger.info(f"Verificación de devoluciones cada {intervalo_horas} horas")

    while not evento_parada.is_set():
        try:
            verificar_notificaciones_devolucion()
        except Exception as e:
            logger.error(f"Error en la verificación periódica de devoluciones: {str(e)}")
        evento_parada.wait(intervalo_horas * 3600)
