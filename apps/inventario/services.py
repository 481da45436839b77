"""
Servicio de Inventario

Recursos del inventario y catálogos asociados (estado, medida, tipo de
recurso, tipo de mantenimiento).
"""

import logging
from typing import Dict, List

from apps.bitacora.services import registrar_accion
from services import catalogos, colecciones
from services import firebase_service as fs
from services.errors import ConflictoError, NoEncontradoError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

MODULO = 'Inventario'


def _nombres_catalogo(datos: Dict) -> Dict:
    """Resuelve los nombres de estado, unidad y tipo a partir de sus ids."""
    resueltos = {}
    if 'id_estado' in datos:
        estado = fs.obtener(colecciones.ESTADOS, datos['id_estado'])
        nombre = estado.get('nombre') if estado else colecciones.NOMBRES_ESTADO_RECURSO.get(datos['id_estado'], '')
        resueltos['estado'] = catalogos.normalizar_estado(nombre)
    if 'id_medida' in datos:
        medida = fs.obtener(colecciones.MEDIDAS, datos['id_medida'])
        resueltos['unidad'] = medida.get('nombre', '') if medida else ''
    if 'id_tipo_recurso' in datos:
        tipo = fs.obtener(colecciones.TIPOS_RECURSO, datos['id_tipo_recurso'])
        resueltos['tipo_recurso'] = tipo.get('nombre', '') if tipo else ''
    return resueltos


def _decorar(recurso: Dict, estados: Dict[str, str]) -> Dict:
    nombre_estado = recurso.get('estado') or estados.get(str(recurso.get('id_estado', ''))) \
        or colecciones.NOMBRES_ESTADO_RECURSO.get(str(recurso.get('id_estado', '')), '')
    return {
        **recurso,
        'estado': catalogos.normalizar_estado(nombre_estado),
        'cantidad_disponible': recurso.get('cantidad_disponible', recurso.get('cantidad', 0)),
    }


def listar_recursos(busqueda: str = '', estado: str = '', tipo: str = '') -> List[Dict]:
    estados = catalogos.mapa_nombres(colecciones.ESTADOS)
    recursos = [_decorar(r, estados) for r in fs.listar(colecciones.RECURSOS)]

    if estado:
        recursos = [r for r in recursos if str(r.get('id_estado')) == estado or r['estado'] == estado]
    if tipo:
        recursos = [r for r in recursos if str(r.get('id_tipo_recurso')) == tipo]

    termino = (busqueda or '').strip().lower()
    if termino:
        recursos = [
            r for r in recursos
            if termino in str(r.get('nombre', '')).lower()
            or termino in str(r.get('codigo_inventario', '')).lower()
            or termino in str(r.get('descripcion', '')).lower()
        ]

    recursos.sort(key=lambda r: str(r.get('nombre', '')).lower())
    return recursos


def obtener_recurso(recurso_id: str) -> Dict:
    recurso = fs.obtener(colecciones.RECURSOS, recurso_id)
    if recurso is None:
        raise NoEncontradoError('Recurso no encontrado')
    return _decorar(recurso, catalogos.mapa_nombres(colecciones.ESTADOS))


def _validar_codigo_unico(codigo: str, excluir_id: str = None) -> None:
    existente = fs.buscar_uno(colecciones.RECURSOS, [('codigo_inventario', '==', codigo)])
    if existente and existente['id'] != excluir_id:
        raise ConflictoError('El código de inventario ya existe')


def crear_recurso(datos: Dict, actor: Dict) -> Dict:
    _validar_codigo_unico(datos['codigo_inventario'])
    documento = {
        **datos,
        **_nombres_catalogo(datos),
        'cantidad_disponible': datos['cantidad'],
        'fecha_creacion': ahora_iso(),
    }
    recurso = fs.crear(colecciones.RECURSOS, documento)
    registrar_accion(
        actor, 'Crear Recurso', f"Agregó el recurso {datos['nombre']} al inventario", MODULO,
        recurso_nombre=datos['nombre'], recurso_codigo=datos['codigo_inventario'], recurso_id=recurso['id'],
    )
    return recurso


def cantidad_reservada(recurso_id: str) -> int:
    """Unidades del recurso comprometidas en reservas aprobadas sin devolver."""
    reservas = fs.listar(colecciones.RESERVAS_RECURSOS, [
        ('id_recurso', '==', recurso_id),
        ('estado', '==', colecciones.RESERVA_APROBADA),
    ])
    return sum(int(r.get('cantidad') or 0) for r in reservas)


def actualizar_recurso(recurso_id: str, cambios: Dict, actor: Dict) -> Dict:
    if 'codigo_inventario' in cambios:
        _validar_codigo_unico(cambios['codigo_inventario'], excluir_id=recurso_id)

    cambios = {**cambios, **_nombres_catalogo(cambios)}
    if 'cantidad' in cambios:
        cambios['cantidad_disponible'] = max(cambios['cantidad'] - cantidad_reservada(recurso_id), 0)
    if not fs.actualizar(colecciones.RECURSOS, recurso_id, cambios):
        raise NoEncontradoError('Recurso no encontrado')

    recurso = obtener_recurso(recurso_id)
    registrar_accion(
        actor, 'Editar Recurso', f"Actualizó el recurso {recurso.get('nombre')}", MODULO,
        recurso_nombre=recurso.get('nombre'), recurso_codigo=recurso.get('codigo_inventario'),
        recurso_id=recurso_id,
    )
    return recurso


def eliminar_recurso(recurso_id: str, actor: Dict) -> None:
    recurso = fs.obtener(colecciones.RECURSOS, recurso_id)
    if recurso is None:
        raise NoEncontradoError('Recurso no encontrado')
    fs.eliminar(colecciones.RECURSOS, recurso_id)
    registrar_accion(
        actor, 'Eliminar Recurso', f"Eliminó el recurso {recurso.get('nombre')} del inventario", MODULO,
        recurso_nombre=recurso.get('nombre'), recurso_codigo=recurso.get('codigo_inventario'),
        recurso_id=recurso_id,
    )


def obtener_catalogos() -> Dict[str, List[Dict]]:
    return {
        'estado': catalogos.listar_catalogo(colecciones.ESTADOS),
        'medida': catalogos.listar_catalogo(colecciones.MEDIDAS),
        'tipo_recurso': catalogos.listar_catalogo(colecciones.TIPOS_RECURSO),
        'tipo_mantenimiento': catalogos.listar_catalogo(colecciones.TIPOS_MANTENIMIENTO),
    }
