"""
Servicio de Departamentos
"""

import logging
from typing import Dict, List

from apps.bitacora.services import registrar_accion
from services import colecciones
from services import firebase_service as fs
from services.errors import ConflictoError, NoEncontradoError
from services.fechas import ahora_iso

logger = logging.getLogger(__name__)

MODULO = 'Departamentos'


def listar_departamentos(busqueda: str = '', activo=None) -> List[Dict]:
    departamentos = fs.listar(colecciones.DEPARTAMENTOS)

    termino = (busqueda or '').strip().lower()
    if termino:
        departamentos = [
            d for d in departamentos
            if termino in str(d.get('nombre', '')).lower()
            or termino in str(d.get('codigo', '')).lower()
            or termino in str(d.get('jefe', '')).lower()
        ]
    if activo is not None:
        departamentos = [d for d in departamentos if (d.get('activo', True) is not False) == activo]

    departamentos.sort(key=lambda d: str(d.get('nombre', '')).lower())
    return departamentos


def obtener_departamento(departamento_id: str) -> Dict:
    departamento = fs.obtener(colecciones.DEPARTAMENTOS, departamento_id)
    if departamento is None:
        raise NoEncontradoError('Departamento no encontrado')
    return departamento


def _validar_codigo_unico(codigo: str, excluir_id: str = None) -> None:
    existente = fs.buscar_uno(colecciones.DEPARTAMENTOS, [('codigo', '==', codigo)])
    if existente and existente['id'] != excluir_id:
        raise ConflictoError(f'Ya existe un departamento con el código {codigo}')


def crear_departamento(datos: Dict, actor: Dict) -> Dict:
    _validar_codigo_unico(datos['codigo'])
    departamento = fs.crear(colecciones.DEPARTAMENTOS, {**datos, 'fecha_creacion': ahora_iso()})
    registrar_accion(
        actor, 'Crear Departamento', f"Creó el departamento {datos['nombre']}", MODULO,
        recurso_nombre=datos['nombre'], recurso_codigo=datos['codigo'], recurso_id=departamento['id'],
    )
    return departamento


def actualizar_departamento(departamento_id: str, cambios: Dict, actor: Dict) -> Dict:
    if 'codigo' in cambios:
        _validar_codigo_unico(cambios['codigo'], excluir_id=departamento_id)
    if not fs.actualizar(colecciones.DEPARTAMENTOS, departamento_id, cambios):
        raise NoEncontradoError('Departamento no encontrado')

    departamento = obtener_departamento(departamento_id)
    registrar_accion(
        actor, 'Editar Departamento', f"Actualizó el departamento {departamento.get('nombre')}", MODULO,
        recurso_nombre=departamento.get('nombre'), recurso_codigo=departamento.get('codigo'),
        recurso_id=departamento_id,
    )
    return departamento


def cambiar_estado(departamento_id: str, actor: Dict) -> Dict:
    departamento = obtener_departamento(departamento_id)
    nuevo_estado = departamento.get('activo', True) is False
    fs.actualizar(colecciones.DEPARTAMENTOS, departamento_id, {'activo': nuevo_estado})
    registrar_accion(
        actor,
        'Activar Departamento' if nuevo_estado else 'Desactivar Departamento',
        f"Departamento {departamento.get('nombre')} {'activado' if nuevo_estado else 'desactivado'}",
        MODULO,
        recurso_nombre=departamento.get('nombre'), recurso_id=departamento_id,
    )
    return {'id': departamento_id, 'activo': nuevo_estado}


def eliminar_departamento(departamento_id: str, actor: Dict) -> None:
    departamento = obtener_departamento(departamento_id)
    fs.eliminar(colecciones.DEPARTAMENTOS, departamento_id)
    registrar_accion(
        actor, 'Eliminar Departamento', f"Eliminó el departamento {departamento.get('nombre')}", MODULO,
        recurso_nombre=departamento.get('nombre'), recurso_id=departamento_id,
    )
