"""
Servicio de Mantenimientos

Ciclo de un mantenimiento:
1. Programado (id_estado '3'): el recurso pasa a En Mantenimiento.
2. Completado (id_estado '1'): el recurso vuelve a Disponible y guarda
   la fecha del último mantenimiento.

Cada paso notifica al técnico responsable.
"""

import logging
from typing import Dict, List

from apps.auth.middleware import nombre_completo
from apps.bitacora.services import registrar_accion
from apps.notificaciones.services import crear_notificacion_mantenimiento
from services import catalogos, colecciones
from services import firebase_service as fs
from services.errors import ConflictoError, NoEncontradoError, ValidacionError

logger = logging.getLogger(__name__)

MODULO = 'Mantenimientos'

NOMBRES_ESTADO = {
    colecciones.MANTENIMIENTO_PROGRAMADO: 'Programado',
    colecciones.MANTENIMIENTO_COMPLETADO: 'Completado',
}


def _detalle(mantenimiento: Dict, tipos: Dict[str, str], estados: Dict[str, str]) -> Dict:
    """Agrega nombres de recurso, técnico, tipo y estado (MantenimientoDetalle)."""
    recurso = fs.obtener(colecciones.RECURSOS, mantenimiento.get('id_recurso')) or {}
    tecnico = fs.obtener(colecciones.USUARIOS, mantenimiento.get('id_tecnico'))
    id_estado = str(mantenimiento.get('id_estado', ''))
    return {
        **mantenimiento,
        'fecha_realizada': mantenimiento.get('fecha_realizada', ''),
        'detalle': mantenimiento.get('detalle', ''),
        'repuestos_usados': mantenimiento.get('repuestos_usados', ''),
        'nombreRecurso': recurso.get('nombre', 'Recurso no encontrado'),
        'codigoRecurso': recurso.get('codigo_inventario', ''),
        'nombreTecnico': nombre_completo(tecnico) if tecnico else 'Sin asignar',
        'tipoMantenimiento': tipos.get(mantenimiento.get('id_tipo_mantenimiento'), ''),
        'estadoNombre': NOMBRES_ESTADO.get(id_estado) or estados.get(id_estado, ''),
    }


def listar_mantenimientos(estado: str = '', id_tecnico: str = '') -> List[Dict]:
    filtros = []
    if estado:
        filtros.append(('id_estado', '==', estado))
    if id_tecnico:
        filtros.append(('id_tecnico', '==', id_tecnico))

    tipos = catalogos.mapa_nombres(colecciones.TIPOS_MANTENIMIENTO)
    estados = catalogos.mapa_nombres(colecciones.ESTADOS)
    mantenimientos = [_detalle(m, tipos, estados) for m in fs.listar(colecciones.MANTENIMIENTOS, filtros)]

    # Los completados se ordenan por fecha realizada, los programados por fecha programada
    mantenimientos.sort(
        key=lambda m: str(m.get('fecha_realizada') or m.get('fecha_programada') or ''),
        reverse=True,
    )
    return mantenimientos


def obtener_mantenimiento(mantenimiento_id: str) -> Dict:
    mantenimiento = fs.obtener(colecciones.MANTENIMIENTOS, mantenimiento_id)
    if mantenimiento is None:
        raise NoEncontradoError('Mantenimiento no encontrado')
    return _detalle(
        mantenimiento,
        catalogos.mapa_nombres(colecciones.TIPOS_MANTENIMIENTO),
        catalogos.mapa_nombres(colecciones.ESTADOS),
    )


def programar_mantenimiento(datos: Dict, actor: Dict) -> Dict:
    recurso = fs.obtener(colecciones.RECURSOS, datos['id_recurso'])
    if recurso is None:
        raise NoEncontradoError('Recurso no encontrado')
    tecnico = fs.obtener(colecciones.USUARIOS, datos['id_tecnico'])
    if tecnico is None:
        raise ValidacionError('Debe seleccionar un técnico responsable')

    mantenimiento = fs.crear(colecciones.MANTENIMIENTOS, {
        'id_recurso': datos['id_recurso'],
        'id_tipo_mantenimiento': datos['id_tipo_mantenimiento'],
        'fecha_programada': datos['fecha_programada'].isoformat(),
        'fecha_realizada': '',
        'detalle': datos.get('detalle', ''),
        'repuestos_usados': datos.get('repuestos_usados', ''),
        'id_tecnico': datos['id_tecnico'],
        'id_estado': colecciones.MANTENIMIENTO_PROGRAMADO,
    })

    fs.actualizar(colecciones.RECURSOS, datos['id_recurso'], {
        'id_estado': colecciones.RECURSO_MANTENIMIENTO,
        'estado': colecciones.NOMBRES_ESTADO_RECURSO[colecciones.RECURSO_MANTENIMIENTO],
    })

    crear_notificacion_mantenimiento(datos['id_tecnico'], False, recurso.get('nombre', ''), mantenimiento['id'])
    registrar_accion(
        actor, 'Programar Mantenimiento',
        f"Programó mantenimiento de {recurso.get('nombre')} para el {datos['fecha_programada'].isoformat()}",
        MODULO,
        recurso_nombre=recurso.get('nombre'), recurso_codigo=recurso.get('codigo_inventario'),
        recurso_id=datos['id_recurso'],
    )
    return mantenimiento


def registrar_mantenimiento(mantenimiento_id: str, datos: Dict, actor: Dict) -> Dict:
    mantenimiento = fs.obtener(colecciones.MANTENIMIENTOS, mantenimiento_id)
    if mantenimiento is None:
        raise NoEncontradoError('Mantenimiento no encontrado')
    if str(mantenimiento.get('id_estado')) != colecciones.MANTENIMIENTO_PROGRAMADO:
        raise ConflictoError('Solo se pueden registrar mantenimientos programados')

    fecha_realizada = datos['fecha_realizada'].isoformat()
    fs.actualizar(colecciones.MANTENIMIENTOS, mantenimiento_id, {
        'fecha_realizada': fecha_realizada,
        'detalle': datos['detalle'].strip(),
        'repuestos_usados': datos.get('repuestos_usados', ''),
        'id_estado': colecciones.MANTENIMIENTO_COMPLETADO,
    })

    recurso = fs.obtener(colecciones.RECURSOS, mantenimiento['id_recurso']) or {}
    fs.actualizar(colecciones.RECURSOS, mantenimiento['id_recurso'], {
        'fecha_ultimo_mantenimiento': fecha_realizada,
        'id_estado': colecciones.RECURSO_DISPONIBLE,
        'estado': colecciones.NOMBRES_ESTADO_RECURSO[colecciones.RECURSO_DISPONIBLE],
    })

    if mantenimiento.get('id_tecnico'):
        crear_notificacion_mantenimiento(
            mantenimiento['id_tecnico'], True, recurso.get('nombre', ''), mantenimiento_id
        )
    registrar_accion(
        actor, 'Registrar Mantenimiento',
        f"Registró el mantenimiento de {recurso.get('nombre', '')} realizado el {fecha_realizada}",
        MODULO,
        recurso_nombre=recurso.get('nombre'), recurso_codigo=recurso.get('codigo_inventario'),
        recurso_id=mantenimiento['id_recurso'],
    )
    return obtener_mantenimiento(mantenimiento_id)
