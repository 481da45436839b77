"""
Servicio de Reportes

- obtener_estadisticas(): indicadores generales del sistema
- obtener_datos_reporte(): documentos de cada sección según los filtros
- secciones_reporte(): convierte los datos en tablas exportables
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from apps.auth.middleware import nombre_completo
from services import colecciones
from services import firebase_service as fs
from services.fechas import en_rango, formatear_fecha, formatear_fecha_hora
from .exportadores import Seccion

logger = logging.getLogger(__name__)

TIPOS_REPORTE = [
    'usuarios', 'laboratorios', 'inventario', 'solicitudes',
    'mantenimientos', 'bitacora', 'mensajes', 'completo',
]

# (clave, etiqueta) en el orden en que se muestran
INDICADORES = [
    ('totalUsuarios', 'Total Usuarios'),
    ('usuariosActivos', 'Usuarios Activos'),
    ('totalLaboratorios', 'Total Laboratorios'),
    ('laboratoriosActivos', 'Laboratorios Activos'),
    ('totalRecursos', 'Total Recursos'),
    ('recursosDisponibles', 'Recursos Disponibles'),
    ('recursosEnMantenimiento', 'Recursos en Mantenimiento'),
    ('solicitudesPendientes', 'Solicitudes Pendientes'),
    ('solicitudesAprobadas', 'Solicitudes Aprobadas'),
    ('solicitudesRechazadas', 'Solicitudes Rechazadas'),
    ('mantenimientosProgramados', 'Mantenimientos Programados'),
    ('mantenimientosCompletados', 'Mantenimientos Completados'),
    ('mensajesEnviados', 'Mensajes Enviados'),
    ('actividadesBitacora', 'Actividades Registradas'),
]


def _activo(documento: Dict) -> bool:
    return documento.get('activo', True) is not False


def obtener_estadisticas() -> Dict[str, int]:
    """
    Calcula los 14 indicadores generales (EstadisticasGenerales).

    Las solicitudes suman laboratorios y recursos según estado_solicitud.
    """
    usuarios = fs.listar(colecciones.USUARIOS)
    laboratorios = fs.listar(colecciones.LABORATORIOS)
    recursos = fs.listar(colecciones.RECURSOS)
    solicitudes = fs.listar(colecciones.SOLICITUDES_LABS) + fs.listar(colecciones.SOLICITUDES_RECURSOS)
    mantenimientos = fs.listar(colecciones.MANTENIMIENTOS)

    def por_estado(estado):
        return sum(1 for s in solicitudes if s.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE) == estado)

    return {
        'totalUsuarios': len(usuarios),
        'usuariosActivos': sum(1 for u in usuarios if _activo(u)),
        'totalLaboratorios': len(laboratorios),
        'laboratoriosActivos': sum(1 for lab in laboratorios if _activo(lab)),
        'totalRecursos': len(recursos),
        'recursosDisponibles': sum(1 for r in recursos if str(r.get('id_estado')) == colecciones.RECURSO_DISPONIBLE),
        'recursosEnMantenimiento': sum(
            1 for r in recursos if str(r.get('id_estado')) == colecciones.RECURSO_MANTENIMIENTO
        ),
        'solicitudesPendientes': por_estado(colecciones.SOLICITUD_PENDIENTE),
        'solicitudesAprobadas': por_estado(colecciones.SOLICITUD_APROBADA),
        'solicitudesRechazadas': por_estado(colecciones.SOLICITUD_RECHAZADA),
        'mantenimientosProgramados': sum(
            1 for m in mantenimientos if str(m.get('id_estado')) == colecciones.MANTENIMIENTO_PROGRAMADO
        ),
        'mantenimientosCompletados': sum(
            1 for m in mantenimientos if str(m.get('id_estado')) == colecciones.MANTENIMIENTO_COMPLETADO
        ),
        'mensajesEnviados': fs.contar(colecciones.MENSAJES),
        'actividadesBitacora': fs.contar(colecciones.BITACORA),
    }


def obtener_datos_reporte(
    tipo_reporte: str,
    fecha_inicio: Optional[date] = None,
    fecha_fin: Optional[date] = None,
    id_departamento: str = '',
    id_estado: str = '',
) -> Dict[str, List[Dict]]:
    """
    Lee los documentos de las secciones pedidas.

    Los filtros de fecha usan fecha_solicitud, fecha_programada,
    fecha_envio y timestamp; los documentos sin fecha se incluyen.
    """
    def incluye(seccion):
        return tipo_reporte in (seccion, 'completo')

    def en_periodo(documentos, campo):
        return [d for d in documentos if en_rango(d.get(campo), fecha_inicio, fecha_fin)]

    datos = {}

    if incluye('usuarios'):
        datos['usuarios'] = fs.listar(colecciones.USUARIOS)

    if incluye('laboratorios'):
        filtros = [('id_departamento', '==', id_departamento)] if id_departamento else None
        datos['laboratorios'] = fs.listar(colecciones.LABORATORIOS, filtros)

    if incluye('inventario'):
        filtros = [('id_estado', '==', id_estado)] if id_estado else None
        datos['recursos'] = fs.listar(colecciones.RECURSOS, filtros)

    if incluye('solicitudes'):
        solicitudes = [
            {**s, 'tipo': 'Laboratorio'} for s in fs.listar(colecciones.SOLICITUDES_LABS)
        ] + [
            {**s, 'tipo': 'Recurso'} for s in fs.listar(colecciones.SOLICITUDES_RECURSOS)
        ]
        datos['solicitudes'] = en_periodo(solicitudes, 'fecha_solicitud')

    if incluye('mantenimientos'):
        datos['mantenimientos'] = en_periodo(fs.listar(colecciones.MANTENIMIENTOS), 'fecha_programada')

    if incluye('mensajes'):
        datos['mensajes'] = en_periodo(fs.listar(colecciones.MENSAJES), 'fecha_envio')

    if incluye('bitacora'):
        datos['bitacora'] = en_periodo(fs.listar(colecciones.BITACORA), 'timestamp')

    return datos


def secciones_reporte(datos: Dict[str, List[Dict]]) -> List[Seccion]:
    """Convierte los datos del reporte en tablas para PDF y Excel."""
    secciones = []

    if 'usuarios' in datos:
        secciones.append(Seccion(
            f"USUARIOS ({len(datos['usuarios'])})",
            ['Nombre', 'Email', 'Rol', 'Estado'],
            [
                [
                    nombre_completo(u),
                    u.get('email', ''),
                    colecciones.NOMBRES_ROL.get(str(u.get('id_rol')), 'Sin rol'),
                    'Activo' if _activo(u) else 'Inactivo',
                ]
                for u in datos['usuarios']
            ],
        ))

    if 'laboratorios' in datos:
        secciones.append(Seccion(
            f"LABORATORIOS ({len(datos['laboratorios'])})",
            ['Nombre', 'Código', 'Capacidad', 'Estado'],
            [
                [lab.get('nombre', ''), lab.get('codigo', ''), lab.get('capacidad', ''),
                 'Activo' if _activo(lab) else 'Inactivo']
                for lab in datos['laboratorios']
            ],
        ))

    if 'recursos' in datos:
        secciones.append(Seccion(
            f"RECURSOS ({len(datos['recursos'])})",
            ['Nombre', 'Código', 'Estado', 'Cantidad'],
            [
                [
                    r.get('nombre', ''),
                    r.get('codigo_inventario', ''),
                    colecciones.NOMBRES_ESTADO_RECURSO.get(str(r.get('id_estado')), r.get('estado', '')),
                    r.get('cantidad', ''),
                ]
                for r in datos['recursos']
            ],
        ))

    if 'solicitudes' in datos:
        secciones.append(Seccion(
            f"SOLICITUDES ({len(datos['solicitudes'])})",
            ['Tipo', 'Fecha', 'Estado', 'Motivo'],
            [
                [s['tipo'], formatear_fecha(s.get('fecha_solicitud')),
                 s.get('estado_solicitud', colecciones.SOLICITUD_PENDIENTE), s.get('motivo', '')]
                for s in datos['solicitudes']
            ],
        ))

    if 'mantenimientos' in datos:
        secciones.append(Seccion(
            f"MANTENIMIENTOS ({len(datos['mantenimientos'])})",
            ['Fecha Programada', 'Fecha Realizada', 'Estado', 'Detalle'],
            [
                [
                    m.get('fecha_programada', ''),
                    m.get('fecha_realizada') or '-',
                    'Completado' if str(m.get('id_estado')) == colecciones.MANTENIMIENTO_COMPLETADO else 'Programado',
                    m.get('detalle', ''),
                ]
                for m in datos['mantenimientos']
            ],
        ))

    if 'mensajes' in datos:
        secciones.append(Seccion(
            f"MENSAJES ({len(datos['mensajes'])})",
            ['Fecha', 'Asunto'],
            [[formatear_fecha_hora(m.get('fecha_envio'), ''), m.get('asunto', '')] for m in datos['mensajes']],
        ))

    if 'bitacora' in datos:
        secciones.append(Seccion(
            f"BITÁCORA ({len(datos['bitacora'])})",
            ['Fecha', 'Usuario', 'Acción', 'Módulo'],
            [
                [b.get('fecha_formateada', ''), b.get('usuario_nombre', ''), b.get('accion', ''), b.get('modulo', '')]
                for b in datos['bitacora']
            ],
        ))

    return secciones


def pares_estadisticas(estadisticas: Dict[str, int]):
    return [(etiqueta, estadisticas.get(clave, 0)) for clave, etiqueta in INDICADORES]
